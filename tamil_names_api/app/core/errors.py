"""
Domain errors raised by the service layer.

Services never raise ``HTTPException`` themselves; they raise one of
the classes below and the endpoints translate them at the request
boundary.  ``StoreError`` wraps ``sqlite3`` failures so that the
original database message is logged but never shown to callers.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors raised by services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """A name with the same text already exists."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ServiceError):
    """The referenced name does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(ServiceError):
    """The database failed underneath a service call."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message)
