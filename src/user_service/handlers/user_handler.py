"""HTTP handlers for user operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error bodies.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import status
from fastapi.responses import JSONResponse

from user_service.dto import HealthCheckResponse, MessageResponse, UserPayload, UserResponse
from user_service.errors import DependencyError, UserServiceError
from user_service.services import UserService

logger = logging.getLogger(__name__)

# Reference point for the uptime reported by /health
PROCESS_STARTED_AT = time.monotonic()


def _utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserHandler:
    """HTTP handlers for the users resource and the health check.

    This handler delegates business logic to UserService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Turning service errors into ``{"error": ...}`` bodies

    Example:
        ```python
        handler = UserHandler(user_service=UserService(repository))

        @app.post("/users")
        async def create_user(payload: UserPayload | None = None):
            return await handler.create_user(payload)
        ```
    """

    def __init__(self, user_service: UserService, started_at: float | None = None) -> None:
        """Initialize the user handler.

        Args:
            user_service: The user service for business logic (required).
            started_at: ``time.monotonic()`` value uptime is measured from.
        """
        self._users = user_service
        self._started_at = PROCESS_STARTED_AT if started_at is None else started_at

    def _error_response(self, error: UserServiceError, operation: str) -> JSONResponse:
        if isinstance(error, DependencyError):
            logger.error("%s failed", operation, exc_info=error.__cause__ or error)
        return JSONResponse(status_code=error.http_status, content=error.to_response())

    async def create_user(self, payload: UserPayload | None) -> JSONResponse:
        """Handle POST /users requests."""
        payload = payload or UserPayload()
        try:
            user = await self._users.create_user(payload.name, payload.email)
        except UserServiceError as e:
            return self._error_response(e, "Create user")

        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=UserResponse.from_entity(user).model_dump(),
        )

    async def list_users(self) -> JSONResponse:
        """Handle GET /users requests."""
        try:
            users = await self._users.list_users()
        except UserServiceError as e:
            return self._error_response(e, "List users")

        return JSONResponse(content=[UserResponse.from_entity(u).model_dump() for u in users])

    async def update_user(self, user_id: str, payload: UserPayload | None) -> JSONResponse:
        """Handle PUT /users/{user_id} requests."""
        payload = payload or UserPayload()
        try:
            user = await self._users.update_user(user_id, payload.name, payload.email)
        except UserServiceError as e:
            return self._error_response(e, "Update user")

        return JSONResponse(content=UserResponse.from_entity(user).model_dump())

    async def delete_user(self, user_id: str) -> JSONResponse:
        """Handle DELETE /users/{user_id} requests."""
        try:
            await self._users.delete_user(user_id)
        except UserServiceError as e:
            return self._error_response(e, "Delete user")

        return JSONResponse(content=MessageResponse(message="deleted successfully").model_dump())

    async def health_check(self) -> JSONResponse:
        """Handle GET /health requests.

        Returns 200 when the database answers, 503 otherwise. Never raises.
        """
        try:
            await self._users.check_database()
        except DependencyError as e:
            cause = e.__cause__ or e
            logger.warning("Health check failed: %s", cause)
            body = HealthCheckResponse(
                status="unhealthy",
                uptime=self.uptime(),
                timestamp=_utc_timestamp(),
                database="disconnected",
                error=str(cause),
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=body.model_dump(),
            )

        body = HealthCheckResponse(
            status="healthy",
            uptime=self.uptime(),
            timestamp=_utc_timestamp(),
            database="connected",
        )
        return JSONResponse(content=body.model_dump(exclude_none=True))

    def uptime(self) -> float:
        """Seconds since the process started."""
        return time.monotonic() - self._started_at
