"""Event registration manager — seat pools, duplicate checks and roster sync.

Each signup touches two records: the per-user ``EventRegistration`` row and the
denormalized ``registered_list`` / ``parent_list`` rosters on the event. Both
writes share one transaction, and the roster write is a conditional update
keyed on ``Event.version``:

- if another request changed the event after we read it, nothing is updated,
  the transaction (including the registration row) is rolled back and the
  whole operation is re-evaluated from a fresh read;
- any other datastore failure rolls back the registration row and surfaces
  as a 500 so the client resubmits the complete form.

Cancellation follows the same pattern.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chapterhub.config import settings
from chapterhub.exceptions import (
    AlreadyRegistered,
    CancellationFailed,
    EventFull,
    NotFound,
    NotRegistered,
    ParentAlreadyRegistered,
    ParentSeatsFull,
    RegistrationFailed,
    ValidationFailed,
)
from chapterhub.models.event import Event
from chapterhub.models.registration import EventRegistration
from chapterhub.models.user import User
from chapterhub.services.dates import to_chapter_date

logger = logging.getLogger(__name__)

WAIVER_FIELDS = (
    ("student_signature", "studentSignature", "Student signature is required"),
    ("student_date", "studentDate", "Student date is required"),
    ("parent_signature", "parentSignature", "Parent signature is required"),
    ("parent_date", "parentDate", "Parent date is required"),
)

# Column widths on event_registrations
SIGNATURE_MAX_LENGTH = EventRegistration.event_waiver_student_sign.type.length
PARENT_FIELD_MAX_LENGTH = EventRegistration.registered_parent_name.type.length


class RosterConflict(Exception):
    """The event row changed between our read and our conditional write."""


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found")
    return event


def _validate_waivers(form: dict[str, Any]) -> dict[str, Any]:
    """Check the four waiver fields; return them with dates normalized."""
    errors: dict[str, str] = {}
    for field, label, message in WAIVER_FIELDS:
        if _blank(form.get(field)):
            errors[label] = message
    if errors:
        raise ValidationFailed("All signature fields are required", fields=errors)

    cleaned = {
        "student_signature": form["student_signature"].strip(),
        "parent_signature": form["parent_signature"].strip(),
    }
    for field, label in (("student_signature", "studentSignature"), ("parent_signature", "parentSignature")):
        if len(cleaned[field]) > SIGNATURE_MAX_LENGTH:
            errors[label] = f"Signature must be at most {SIGNATURE_MAX_LENGTH} characters"
    for field, label in (("student_date", "studentDate"), ("parent_date", "parentDate")):
        try:
            cleaned[field] = to_chapter_date(form[field])
        except ValueError:
            errors[label] = "Enter a valid date (YYYY-MM-DD)"
    if errors:
        raise ValidationFailed(fields=errors)
    return cleaned


def _check_parent_seat(event: Event, user_id: str, parent_name: Optional[str], parent_company: Optional[str]) -> None:
    errors: dict[str, str] = {}
    if _blank(parent_name):
        errors["parentName"] = "Parent name is required"
    if _blank(parent_company):
        errors["parentCompany"] = "Parent company is required"
    if errors:
        raise ValidationFailed(
            "Parent name and company are required when registering a parent", fields=errors
        )

    for label, value in (("parentName", parent_name), ("parentCompany", parent_company)):
        if len(value.strip()) > PARENT_FIELD_MAX_LENGTH:
            errors[label] = f"Must be at most {PARENT_FIELD_MAX_LENGTH} characters"
    if errors:
        raise ValidationFailed(fields=errors)

    parents = event.parents
    if len(parents) >= (event.max_parents or 0):
        raise ParentSeatsFull()
    if user_id in parents:
        raise ParentAlreadyRegistered()


def _write_roster(db: Session, event: Event, students: list[str], parents: list[str]) -> None:
    """Replace both rosters iff the event is still at the version we read."""
    updated = (
        db.query(Event)
        .filter(Event.id == event.id, Event.version == event.version)
        .update(
            {
                Event.registered_list: students,
                Event.parent_list: parents,
                Event.version: Event.version + 1,
                Event.updated_at: datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
    )
    if updated != 1:
        raise RosterConflict(event.id)


def _append_to_roster(db: Session, event: Event, user_id: str, with_parent: bool) -> None:
    students = event.students + [user_id]
    parents = event.parents + [user_id] if with_parent else event.parents
    _write_roster(db, event, students, parents)


def _remove_from_roster(db: Session, event: Event, user_id: str) -> None:
    students = [uid for uid in event.students if uid != user_id]
    parents = [uid for uid in event.parents if uid != user_id]
    _write_roster(db, event, students, parents)


def get_registration(db: Session, event_id: str, user_id: str) -> Optional[EventRegistration]:
    """Return the caller's registration for an event, or None."""
    return (
        db.query(EventRegistration)
        .filter(EventRegistration.event_id == event_id, EventRegistration.user_id == user_id)
        .first()
    )


def register_for_event(
    db: Session,
    event_id: str,
    user_id: str,
    waiver: dict[str, Any],
    wants_parent_seat: bool = False,
    parent_name: Optional[str] = None,
    parent_company: Optional[str] = None,
) -> EventRegistration:
    """Claim a student seat (and optionally a parent seat) for ``user_id``.

    Preconditions are evaluated in a fixed order and the first failing one is
    raised: event exists, not already registered, student seat free, waiver
    fields present, then the parent-seat checks.
    """
    for attempt in range(1, settings.REGISTRATION_MAX_ATTEMPTS + 1):
        event = _get_event(db, event_id)
        students = event.students

        if user_id in students:
            raise AlreadyRegistered()
        if len(students) >= event.max_users:
            raise EventFull()
        cleaned = _validate_waivers(waiver)
        if wants_parent_seat:
            _check_parent_seat(event, user_id, parent_name, parent_company)

        registration = EventRegistration(
            event_id=event.id,
            user_id=user_id,
            event_waiver_student_sign=cleaned["student_signature"],
            event_waiver_student_date=cleaned["student_date"],
            event_waiver_parent_sign=cleaned["parent_signature"],
            event_waiver_parent_date=cleaned["parent_date"],
            registered_parent_name=parent_name.strip() if wants_parent_seat else None,
            registered_parent_company=parent_company.strip() if wants_parent_seat else None,
        )
        try:
            db.add(registration)
            db.flush()
            _append_to_roster(db, event, user_id, wants_parent_seat)
            db.commit()
        except (RosterConflict, IntegrityError):
            # Lost a race with another signup/cancel; the rollback drops our row.
            db.rollback()
            logger.warning(
                "Roster for event %s changed during signup by %s (attempt %d/%d)",
                event_id, user_id, attempt, settings.REGISTRATION_MAX_ATTEMPTS,
            )
            continue
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Signup for event %s by %s failed; registration rolled back", event_id, user_id)
            raise RegistrationFailed() from exc

        db.refresh(registration)
        logger.info(
            "User %s registered for event %s (parent seat: %s)", user_id, event_id, wants_parent_seat
        )
        return registration

    logger.error("Giving up on signup for event %s by %s after %d attempts", event_id, user_id, settings.REGISTRATION_MAX_ATTEMPTS)
    raise RegistrationFailed()


def cancel_registration(db: Session, event_id: str, user_id: str) -> None:
    """Release the caller's student seat and, if held, their parent seat."""
    for attempt in range(1, settings.REGISTRATION_MAX_ATTEMPTS + 1):
        event = _get_event(db, event_id)
        if user_id not in event.students:
            raise NotRegistered()

        try:
            (
                db.query(EventRegistration)
                .filter(EventRegistration.event_id == event.id, EventRegistration.user_id == user_id)
                .delete(synchronize_session=False)
            )
            _remove_from_roster(db, event, user_id)
            db.commit()
        except RosterConflict:
            db.rollback()
            logger.warning(
                "Roster for event %s changed during cancellation by %s (attempt %d/%d)",
                event_id, user_id, attempt, settings.REGISTRATION_MAX_ATTEMPTS,
            )
            continue
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Cancellation for event %s by %s failed; nothing was removed", event_id, user_id)
            raise CancellationFailed() from exc

        logger.info("User %s cancelled registration for event %s", user_id, event_id)
        return

    logger.error("Giving up on cancellation for event %s by %s after %d attempts", event_id, user_id, settings.REGISTRATION_MAX_ATTEMPTS)
    raise CancellationFailed()


def list_registrants(db: Session, event_id: str) -> list[dict[str, Any]]:
    """Admin report: one row per student seat, in signup order.

    Seat holders without a profile or without a registration row are still
    listed, with the missing fields left empty.
    """
    event = _get_event(db, event_id)
    students = event.students
    if not students:
        return []

    parents = set(event.parents)
    users = {u.id: u for u in db.query(User).filter(User.id.in_(students)).all()}
    registrations = {
        r.user_id: r
        for r in db.query(EventRegistration).filter(EventRegistration.event_id == event.id).all()
    }

    rows = []
    for uid in students:
        user = users.get(uid)
        registration = registrations.get(uid)
        if user is None or registration is None:
            logger.warning("Event %s roster entry %s is missing its profile or registration", event_id, uid)
        rows.append({
            "id": uid,
            "student_first_name": user.student_first_name if user else "",
            "student_last_name": user.student_last_name if user else "",
            "student_email": user.student_email if user else "",
            "student_phone": user.student_phone if user else None,
            "parent_first_name": user.parent_first_name if user else "",
            "parent_last_name": user.parent_last_name if user else "",
            "parent_email": user.parent_email if user else "",
            "parent_phone": user.parent_phone if user else None,
            "registered_parent_name": registration.registered_parent_name if registration else None,
            "registered_parent_company": registration.registered_parent_company if registration else None,
            "has_parent_registered": uid in parents,
        })
    return rows
