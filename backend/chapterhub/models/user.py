"""Member profile ORM model."""
import enum
from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime
from sqlalchemy.sql import func
from chapterhub.database import Base


class UserType(int, enum.Enum):
    student = 1
    admin = 2
    company = 3


# Types a member may pick for themselves; admins are appointed in the datastore.
SELF_SERVICE_USER_TYPES = (UserType.student, UserType.company)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)  # auth service subject
    email = Column(String(320), nullable=True)

    student_first_name = Column(String(100), nullable=False)
    student_last_name = Column(String(100), nullable=False)
    student_email = Column(String(320), nullable=False)
    student_grade = Column(Integer, nullable=False)
    student_phone = Column(String(12), nullable=True)

    parent_first_name = Column(String(100), nullable=False)
    parent_last_name = Column(String(100), nullable=False)
    parent_email = Column(String(320), nullable=False)
    parent_phone = Column(String(12), nullable=True)

    user_type = Column(Integer, nullable=False, default=UserType.student.value)
    photo_release = Column(Boolean, nullable=False, default=False)
    student_participation_sign = Column(Boolean, nullable=False, default=False)
    parent_participation_sign = Column(Boolean, nullable=False, default=False)
    student_participation_date = Column(Date, nullable=True)
    parent_participation_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.admin.value
