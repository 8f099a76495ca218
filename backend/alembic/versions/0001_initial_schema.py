"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the chapter site:
users, events, event_registrations.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("student_first_name", sa.String(100), nullable=False),
        sa.Column("student_last_name", sa.String(100), nullable=False),
        sa.Column("student_email", sa.String(320), nullable=False),
        sa.Column("student_grade", sa.Integer, nullable=False),
        sa.Column("student_phone", sa.String(12), nullable=True),
        sa.Column("parent_first_name", sa.String(100), nullable=False),
        sa.Column("parent_last_name", sa.String(100), nullable=False),
        sa.Column("parent_email", sa.String(320), nullable=False),
        sa.Column("parent_phone", sa.String(12), nullable=True),
        sa.Column("user_type", sa.Integer, nullable=False, server_default="1"),
        sa.Column("photo_release", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("student_participation_sign", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("parent_participation_sign", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("student_participation_date", sa.Date, nullable=True),
        sa.Column("parent_participation_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_name", sa.String(255), nullable=False),
        sa.Column("event_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_location", sa.String(500), nullable=False),
        sa.Column("event_description", sa.Text, nullable=False),
        sa.Column("event_waiver_info", sa.Text, nullable=False),
        sa.Column("event_waiver_parent", sa.Text, nullable=True),
        sa.Column("max_users", sa.Integer, nullable=False),
        sa.Column("max_parents", sa.Integer, nullable=False, server_default="0"),
        sa.Column("registered_list", sa.JSON, nullable=False),
        sa.Column("parent_list", sa.JSON, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("max_users > 0", name="ck_events_max_users_positive"),
        sa.CheckConstraint("max_parents >= 0", name="ck_events_max_parents_non_negative"),
    )
    op.create_index("ix_events_event_time", "events", ["event_time"])

    # --- event_registrations ---
    op.create_table(
        "event_registrations",
        sa.Column(
            "event_id", sa.String(36),
            sa.ForeignKey("events.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("event_waiver_student_sign", sa.String(255), nullable=False),
        sa.Column("event_waiver_student_date", sa.Date, nullable=False),
        sa.Column("event_waiver_parent_sign", sa.String(255), nullable=False),
        sa.Column("event_waiver_parent_date", sa.Date, nullable=False),
        sa.Column("registered_parent_name", sa.String(200), nullable=True),
        sa.Column("registered_parent_company", sa.String(200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_event_registrations_user_id", "event_registrations", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_event_registrations_user_id", table_name="event_registrations")
    op.drop_table("event_registrations")
    op.drop_index("ix_events_event_time", table_name="events")
    op.drop_table("events")
    op.drop_table("users")
