"""EventRegistration ORM model — one row per (event, user) seat holder."""
from sqlalchemy import Column, String, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from chapterhub.database import Base


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    # No FK to users: the caller may hold a seat before finishing their profile.
    user_id = Column(String(36), primary_key=True, index=True)

    event_waiver_student_sign = Column(String(255), nullable=False)
    event_waiver_student_date = Column(Date, nullable=False)
    event_waiver_parent_sign = Column(String(255), nullable=False)
    event_waiver_parent_date = Column(Date, nullable=False)

    # Set only when the member also claimed a parent seat
    registered_parent_name = Column(String(200), nullable=True)
    registered_parent_company = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="registrations")
