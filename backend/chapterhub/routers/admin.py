"""Admin API routes — event management and registrant reports."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from chapterhub.auth import require_admin
from chapterhub.database import get_db
from chapterhub.models.user import User
from chapterhub.schemas.event import EventCreate, EventEnvelope, EventUpdate, EventWriteResult
from chapterhub.schemas.registration import RegisteredUsersOut
from chapterhub.services import event_service, registration_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/events", response_model=EventWriteResult, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a new event with empty rosters."""
    event = event_service.create_event(db, admin, payload.model_dump())
    return {"success": True, "event": event}


@router.get("/events/{event_id}", response_model=EventEnvelope)
def get_event(
    event_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Fetch a single event for the edit form."""
    return {"event": event_service.get_event(db, event_id)}


@router.put("/events/{event_id}", response_model=EventWriteResult)
def update_event(
    event_id: str,
    payload: EventUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update event details (optimistic locking enforced)."""
    updates = payload.model_dump(exclude_unset=True, exclude={"version"})
    event = event_service.update_event(
        db=db,
        event_id=event_id,
        actor=admin,
        version=payload.version,
        updates=updates,
    )
    return {"success": True, "event": event}


@router.get("/events/{event_id}/registered-users", response_model=RegisteredUsersOut)
def registered_users(
    event_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """List everyone holding a seat, with parent-attendee details."""
    rows = registration_service.list_registrants(db, event_id)
    logger.info("Admin %s pulled %d registrants for event %s", admin.id, len(rows), event_id)
    return {"registered_users": rows}
