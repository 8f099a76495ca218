"""Admin event service — create/edit events without disturbing the seat rosters.

- Optimistic locking via the ``version`` field (rosters bump it too, so an
  edit made from a stale form is rejected after anyone signs up)
- Capacity can never drop below the seats already taken
- Rosters are owned by registration_service and are never written here
"""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from chapterhub.exceptions import CapacityBelowRoster, NotFound, VersionConflict
from chapterhub.models.event import Event
from chapterhub.models.user import User

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "event_name",
    "event_time",
    "event_location",
    "event_description",
    "max_users",
    "max_parents",
    "event_waiver_info",
    "event_waiver_parent",
)


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found")
    return event


def list_events(db: Session) -> list[Event]:
    """All events, soonest first."""
    return db.query(Event).order_by(Event.event_time).all()


def create_event(db: Session, actor: User, fields: dict[str, Any]) -> Event:
    """Create an event with empty rosters."""
    event = Event(
        **{k: v for k, v in fields.items() if k in EDITABLE_FIELDS},
        registered_list=[],
        parent_list=[],
        version=1,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by admin %s", event.event_name, event.id, actor.id)
    return event


def update_event(
    db: Session,
    event_id: str,
    actor: User,
    version: int,
    updates: dict[str, Any],
) -> Event:
    """Update event details with optimistic locking and capacity checks."""
    event = get_event(db, event_id)

    if event.version != version:
        raise VersionConflict(
            f"Version mismatch: expected {event.version}, got {version}. Re-fetch and retry."
        )

    max_users = updates.get("max_users")
    if max_users is not None and max_users < len(event.students):
        raise CapacityBelowRoster(
            f"max_users cannot be below the {len(event.students)} students already registered"
        )
    max_parents = updates.get("max_parents")
    if max_parents is not None and max_parents < len(event.parents):
        raise CapacityBelowRoster(
            f"max_parents cannot be below the {len(event.parents)} parents already registered"
        )

    # Only the parent waiver may be cleared; None elsewhere means "unchanged".
    values = {
        field: value
        for field, value in updates.items()
        if field in EDITABLE_FIELDS and (value is not None or field == "event_waiver_parent")
    }
    values["version"] = Event.version + 1
    values["updated_at"] = datetime.now(timezone.utc)

    # Same conditional write as the roster path, so a signup landing between
    # our read and this update is not silently overwritten.
    updated = (
        db.query(Event)
        .filter(Event.id == event.id, Event.version == version)
        .update(values, synchronize_session=False)
    )
    if updated != 1:
        db.rollback()
        raise VersionConflict()

    db.commit()
    db.refresh(event)
    logger.info("Admin %s updated event %s to version %d", actor.id, event_id, event.version)
    return event
