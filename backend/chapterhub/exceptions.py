"""Named HTTP errors raised by the service layer.

Every error carries a stable machine ``code`` next to the human message so the
frontend can branch on it (e.g. highlight fields on ``validation_failed``).
"""
from typing import Optional

from fastapi import HTTPException, status


class ServiceError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"
    message = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        fields: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        detail = {"code": self.code, "message": message or self.message}
        if fields:
            detail["fields"] = fields
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)


# ── Caller identity ────────────────────────────────────────────────
class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    message = "Unauthorized. Please log in."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Forbidden: Admin access required"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Not found"


class ValidationFailed(ServiceError):
    code = "validation_failed"
    message = "Some required fields are missing or invalid"


# ── Registration business rules ────────────────────────────────────
class AlreadyRegistered(ServiceError):
    code = "already_registered"
    message = "You are already registered for this event"


class NotRegistered(ServiceError):
    code = "not_registered"
    message = "You are not registered for this event"


class EventFull(ServiceError):
    code = "event_full"
    message = "This event is full"


class ParentSeatsFull(ServiceError):
    code = "parent_seats_full"
    message = "No parent spaces available for this event"


class ParentAlreadyRegistered(ServiceError):
    code = "parent_already_registered"
    message = "You have already registered a parent for this event"


class RegistrationFailed(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "registration_failed"
    message = "Failed to update event registration. Please try again."


class CancellationFailed(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "cancellation_failed"
    message = "Failed to cancel event registration. Please try again."


# ── Conflicts ──────────────────────────────────────────────────────
class VersionConflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "version_conflict"
    message = "Event was modified by someone else. Re-fetch and retry."


class CapacityBelowRoster(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "capacity_below_roster"
    message = "Capacity cannot be lower than the number of registered seats"


class ProfileExists(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "profile_exists"
    message = "A member profile already exists for this account"
