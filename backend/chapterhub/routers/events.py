"""Public event listing and member signup routes — delegates to registration_service."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chapterhub.auth import CallerIdentity, get_current_identity
from chapterhub.database import get_db
from chapterhub.schemas.event import EventList
from chapterhub.schemas.registration import RegistrationEnvelope, SignupRequest, SignupResult
from chapterhub.services import event_service, registration_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=EventList)
def list_events(db: Session = Depends(get_db)):
    """List all events ordered by start time."""
    return {"events": event_service.list_events(db)}


@router.get("/{event_id}/signup", response_model=RegistrationEnvelope)
def get_signup(
    event_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Fetch the caller's registration for an event (null when not signed up)."""
    registration = registration_service.get_registration(db, event_id, identity.user_id)
    return {"registration": registration}


@router.post("/{event_id}/signup", response_model=SignupResult)
def sign_up(
    event_id: str,
    payload: SignupRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Claim a seat, signing the event waivers (and optionally a parent seat)."""
    registration_service.register_for_event(
        db=db,
        event_id=event_id,
        user_id=identity.user_id,
        waiver=payload.model_dump(
            include={"student_signature", "student_date", "parent_signature", "parent_date"}
        ),
        wants_parent_seat=payload.register_parent,
        parent_name=payload.parent_name,
        parent_company=payload.parent_company,
    )
    return SignupResult(message="Successfully registered for event")


@router.delete("/{event_id}/signup", response_model=SignupResult)
def cancel_signup(
    event_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Give up the caller's seat(s) for an event."""
    registration_service.cancel_registration(db, event_id, identity.user_id)
    return SignupResult(message="Successfully canceled event registration")
