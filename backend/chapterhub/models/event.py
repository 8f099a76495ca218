"""Event ORM model with its denormalized seat rosters."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, JSON, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from chapterhub.database import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("max_users > 0", name="ck_events_max_users_positive"),
        CheckConstraint("max_parents >= 0", name="ck_events_max_parents_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_name = Column(String(255), nullable=False)
    event_time = Column(DateTime(timezone=True), nullable=False, index=True)
    event_location = Column(String(500), nullable=False)
    event_description = Column(Text, nullable=False)
    event_waiver_info = Column(Text, nullable=False)
    event_waiver_parent = Column(Text, nullable=True)

    # Seat pools. The rosters are only ever replaced wholesale through
    # registration_service, never mutated in place.
    max_users = Column(Integer, nullable=False)
    max_parents = Column(Integer, nullable=False, default=0)
    registered_list = Column(JSON, nullable=False, default=list)
    parent_list = Column(JSON, nullable=False, default=list)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    registrations = relationship("EventRegistration", back_populates="event", cascade="all, delete-orphan")

    @property
    def students(self) -> list[str]:
        return list(self.registered_list or [])

    @property
    def parents(self) -> list[str]:
        return list(self.parent_list or [])
