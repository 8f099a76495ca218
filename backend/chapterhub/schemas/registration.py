"""Pydantic schemas for event signup and registrant reporting."""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class SignupRequest(BaseModel):
    """Event signup form.

    Everything is optional at the schema level: missing waiver fields are a
    business-rule rejection (400 with per-field messages), reported only after
    the event, duplicate and capacity checks.
    """

    student_signature: Optional[str] = None
    student_date: Optional[str] = None
    parent_signature: Optional[str] = None
    parent_date: Optional[str] = None
    register_parent: bool = False
    parent_name: Optional[str] = None
    parent_company: Optional[str] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class RegistrationOut(BaseModel):
    event_id: str
    user_id: str
    event_waiver_student_sign: str
    event_waiver_student_date: date
    event_waiver_parent_sign: str
    event_waiver_parent_date: date
    registered_parent_name: Optional[str] = None
    registered_parent_company: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RegistrationEnvelope(BaseModel):
    registration: Optional[RegistrationOut] = None


class SignupResult(BaseModel):
    success: bool = True
    message: str


class RegisteredUserOut(BaseModel):
    id: str
    student_first_name: str = ""
    student_last_name: str = ""
    student_email: str = ""
    student_phone: Optional[str] = None
    parent_first_name: str = ""
    parent_last_name: str = ""
    parent_email: str = ""
    parent_phone: Optional[str] = None
    registered_parent_name: Optional[str] = None
    registered_parent_company: Optional[str] = None
    has_parent_registered: bool = False

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class RegisteredUsersOut(BaseModel):
    registered_users: list[RegisteredUserOut]

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
