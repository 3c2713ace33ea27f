import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.api.dependencies import MetricsHandlerDep, UserHandlerDep, lifespan
from user_service.config import Settings, get_settings
from user_service.dto import (
    ErrorResponse,
    HealthCheckResponse,
    MessageResponse,
    UserPayload,
    UserResponse,
)
from user_service.observability import RequestMetrics
from user_service.protocols import UserStore

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def create_app(settings: Settings | None = None, repository: UserStore | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings. Defaults to the environment.
        repository: Storage backend to use instead of PostgreSQL (tests).

    Returns:
        The configured FastAPI app; storage is wired up by its lifespan.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="User Service API",
        description="CRUD service for users backed by PostgreSQL",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository
    app.state.metrics = RequestMetrics()
    if settings.metrics_enabled:
        app.state.metrics.attach(app)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed JSON or non-string fields."""
        logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthCheckResponse}},
    )
    async def health(handler: UserHandlerDep) -> Response:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post(
        "/users",
        status_code=status.HTTP_201_CREATED,
        response_model=UserResponse,
        responses={**_ERROR_RESPONSES, status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
    )
    async def create_user(handler: UserHandlerDep, payload: UserPayload | None = None) -> Response:
        """Create a user from a name and an email."""
        return await handler.create_user(payload)

    @app.get(
        "/users",
        response_model=list[UserResponse],
        responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    )
    async def list_users(handler: UserHandlerDep) -> Response:
        """List every user."""
        return await handler.list_users()

    @app.put(
        "/users/{user_id}",
        response_model=UserResponse,
        responses={
            **_ERROR_RESPONSES,
            status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
            status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        },
    )
    async def update_user(
        user_id: str,
        handler: UserHandlerDep,
        payload: UserPayload | None = None,
    ) -> Response:
        """Replace the name and email of a user."""
        return await handler.update_user(user_id, payload)

    @app.delete(
        "/users/{user_id}",
        response_model=MessageResponse,
        responses={**_ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    )
    async def delete_user(user_id: str, handler: UserHandlerDep) -> Response:
        """Delete a user."""
        return await handler.delete_user(user_id)

    @app.get("/metrics", include_in_schema=False)
    async def metrics(handler: MetricsHandlerDep) -> Response:
        """Prometheus scrape endpoint."""
        return await handler.metrics()

    return app


app = create_app()

