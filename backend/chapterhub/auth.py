"""Caller identity — verifies bearer tokens issued by the hosted auth service.

Signup, login, password reset and email confirmation all live in the auth
service; this backend only checks the token signature and reads ``sub``.
"""
import logging
from typing import Optional

import jwt
from jwt import PyJWTError
from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from chapterhub.config import settings
from chapterhub.database import get_db
from chapterhub.exceptions import Forbidden, Unauthorized
from chapterhub.models.user import User

logger = logging.getLogger(__name__)


class CallerIdentity(BaseModel):
    user_id: str
    email: Optional[str] = None


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options={"require": ["sub", "exp"]},
        )
    except PyJWTError as exc:
        raise ValueError("invalid access token") from exc


def get_current_identity(request: Request) -> CallerIdentity:
    """Resolve the authenticated caller or raise 401."""
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise Unauthorized("Missing bearer token")

    token = auth.removeprefix("Bearer ").strip()
    try:
        claims = decode_access_token(token)
    except ValueError:
        logger.info("Rejected invalid access token on %s", request.url.path)
        raise Unauthorized("Invalid or expired access token") from None

    return CallerIdentity(user_id=str(claims["sub"]), email=claims.get("email"))


def require_admin(
    identity: CallerIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """Admin routes: the caller's profile must exist and carry the admin type."""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user or not user.is_admin:
        raise Forbidden()
    return user
