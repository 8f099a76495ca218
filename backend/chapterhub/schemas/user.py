"""Pydantic schemas for member profiles."""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from chapterhub.services.dates import to_chapter_date

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^\d{12}$"


class _ProfileForm(BaseModel):
    """Shared coercion for the signup and account forms (camelCase on the wire)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @field_validator("student_phone", "parent_phone", mode="before", check_fields=False)
    @classmethod
    def _phone_to_text(cls, value):
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("student_date", "parent_date", mode="before", check_fields=False)
    @classmethod
    def _normalize_date(cls, value):
        if value is None or value == "":
            return None
        return to_chapter_date(value)


class ProfileCreate(_ProfileForm):
    student_email: str = Field(pattern=EMAIL_PATTERN)
    student_first_name: str = Field(min_length=1, max_length=100)
    student_last_name: str = Field(min_length=1, max_length=100)
    student_grade: int = Field(ge=9, le=12)
    student_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    parent_first_name: str = Field(min_length=1, max_length=100)
    parent_last_name: str = Field(min_length=1, max_length=100)
    parent_email: str = Field(pattern=EMAIL_PATTERN)
    parent_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    member_type: int
    photo_media_release: bool
    student_signature: str = Field(min_length=1)
    student_date: date
    parent_signature: str = Field(min_length=1)
    parent_date: date


class AccountUpdate(_ProfileForm):
    student_email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    student_first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    student_last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    student_grade: Optional[int] = Field(default=None, ge=9, le=12)
    student_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    parent_first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    parent_last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    parent_email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    parent_phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    member_type: Optional[int] = None
    photo_media_release: Optional[bool] = None
    student_date: Optional[date] = None
    parent_date: Optional[date] = None


class UserOut(BaseModel):
    id: str
    email: Optional[str] = None
    student_first_name: str
    student_last_name: str
    student_email: str
    student_grade: int
    student_phone: Optional[str] = None
    parent_first_name: str
    parent_last_name: str
    parent_email: str
    parent_phone: Optional[str] = None
    user_type: int
    photo_release: bool
    student_participation_sign: bool
    parent_participation_sign: bool
    student_participation_date: Optional[date] = None
    parent_participation_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AccountOut(BaseModel):
    user: UserOut
