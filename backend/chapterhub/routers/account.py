"""Member profile API routes — signup form and account page."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from chapterhub.auth import CallerIdentity, get_current_identity
from chapterhub.database import get_db
from chapterhub.exceptions import NotFound, ProfileExists, ValidationFailed
from chapterhub.models.user import SELF_SERVICE_USER_TYPES, User
from chapterhub.schemas.user import AccountOut, AccountUpdate, ProfileCreate

logger = logging.getLogger(__name__)
router = APIRouter()

# Form field -> column, where the names differ
FIELD_COLUMNS = {
    "member_type": "user_type",
    "photo_media_release": "photo_release",
    "student_date": "student_participation_date",
    "parent_date": "parent_participation_date",
}


def _check_member_type(requested: Optional[int], current: Optional[int] = None) -> None:
    """Members may keep their current type but only ever pick Student or Company."""
    if requested is None or requested == current:
        return
    if requested not in {t.value for t in SELF_SERVICE_USER_TYPES}:
        raise ValidationFailed(fields={"memberType": "Member type must be Student or Company"})


@router.post("/signup", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Store the member profile for an account the auth service just created."""
    if db.query(User).filter(User.id == identity.user_id).first():
        raise ProfileExists()
    _check_member_type(payload.member_type)

    data = payload.model_dump(exclude={"student_signature", "parent_signature"})
    user = User(
        id=identity.user_id,
        email=identity.email or payload.student_email,
        student_participation_sign=bool(payload.student_signature),
        parent_participation_sign=bool(payload.parent_signature),
        **{FIELD_COLUMNS.get(field, field): value for field, value in data.items()},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created member profile %s (type %s)", user.id, user.user_type)
    return {"user": user}


@router.get("/account", response_model=AccountOut)
def get_account(
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Fetch the caller's member profile."""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user:
        raise NotFound("Profile not found")
    return {"user": user}


@router.put("/account")
def update_account(
    payload: AccountUpdate,
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Update the caller's member profile (partial update)."""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user:
        raise NotFound("Profile not found")

    updates = payload.model_dump(exclude_unset=True)
    _check_member_type(updates.get("member_type"), current=user.user_type)

    for field, value in updates.items():
        column = FIELD_COLUMNS.get(field, field)
        if value is None and column not in ("student_phone", "parent_phone"):
            continue
        setattr(user, column, value)
    db.commit()
    logger.info("Updated member profile %s (%s)", user.id, ", ".join(sorted(updates)) or "no changes")
    return {"success": True}
