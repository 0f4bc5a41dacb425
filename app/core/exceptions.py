"""
Domain errors for attendance operations.

Each error carries its HTTP status so the central handler in app.core.errors
can render it; services raise these instead of building HTTPException by hand.
"""
from typing import Optional
from fastapi import HTTPException, status


class AttendanceError(HTTPException):
    """Base class for all errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Bad request"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class NotAuthenticated(AttendanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentials(AttendanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"


class Forbidden(AttendanceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Manager role required"


class AlreadyCheckedIn(AttendanceError):
    default_detail = "Already checked in today"


class AlreadyCheckedOut(AttendanceError):
    default_detail = "Already checked out today"


class NotCheckedIn(AttendanceError):
    default_detail = "Not checked in yet"


class ValidationError(AttendanceError):
    default_detail = "Invalid request data"


class EmailAlreadyRegistered(ValidationError):
    default_detail = "Email already registered"


class NotFound(AttendanceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User not found"


class InternalError(AttendanceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
