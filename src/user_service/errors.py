"""Error types for the user service.

Two families live here:

Storage errors:
    Raised only by repositories. They tell the service layer whether a
    statement broke a constraint or failed for any other reason, so nobody
    above the repository ever looks at driver-specific error codes.

Service errors:
    Raised by the service layer and mapped to HTTP responses by handlers.
    Each carries the caller-facing message and its HTTP status.
"""

from fastapi import status


class StorageError(Exception):
    """Any failure talking to storage (connection, timeout, bad statement)."""


class ConstraintViolationError(StorageError):
    """A statement violated a uniqueness constraint."""


class UserServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, str]:
        """Convert to the JSON error body returned to callers."""
        return {"error": self.message}


class ValidationError(UserServiceError):
    """Caller input is malformed. Detected before any storage call."""

    http_status = status.HTTP_400_BAD_REQUEST


class ConflictError(UserServiceError):
    """A unique key (the email) is already taken."""

    http_status = status.HTTP_409_CONFLICT


class NotFoundError(UserServiceError):
    """No user matches the requested id."""

    http_status = status.HTTP_404_NOT_FOUND


class DependencyError(UserServiceError):
    """Storage is unreachable or a query failed.

    The message is always generic; the underlying cause is kept on
    ``__cause__`` for logging.
    """

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
