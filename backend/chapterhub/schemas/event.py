"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class EventCreate(BaseModel):
    event_name: str = Field(min_length=1, max_length=255)
    event_time: datetime
    event_location: str = Field(min_length=1, max_length=500)
    event_description: str = Field(min_length=1)
    max_users: int = Field(gt=0)
    max_parents: int = Field(default=0, ge=0)
    event_waiver_info: str = Field(min_length=1)
    event_waiver_parent: Optional[str] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "str_strip_whitespace": True}


class EventUpdate(BaseModel):
    event_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    event_time: Optional[datetime] = None
    event_location: Optional[str] = Field(default=None, min_length=1, max_length=500)
    event_description: Optional[str] = Field(default=None, min_length=1)
    max_users: Optional[int] = Field(default=None, gt=0)
    max_parents: Optional[int] = Field(default=None, ge=0)
    event_waiver_info: Optional[str] = Field(default=None, min_length=1)
    event_waiver_parent: Optional[str] = None
    version: int  # required for optimistic locking

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "str_strip_whitespace": True}


class EventOut(BaseModel):
    id: str
    event_name: str
    event_time: datetime
    event_location: str
    event_description: str
    event_waiver_info: str
    event_waiver_parent: Optional[str] = None
    max_users: int
    max_parents: int
    registered_list: list[str] = []
    parent_list: list[str] = []
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EventEnvelope(BaseModel):
    event: EventOut


class EventWriteResult(BaseModel):
    success: bool = True
    event: EventOut


class EventList(BaseModel):
    events: list[EventOut]
