"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from user_service.config import Settings
from user_service.handlers import MetricsHandler, UserHandler
from user_service.observability import setup_logging
from user_service.repositories import PostgresUserRepository, open_pool
from user_service.services import UserService

logger = logging.getLogger(__name__)


def get_user_handler(request: Request) -> UserHandler:
    """Dependency injection for UserHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "user_handler", None)
    if handler is None:
        raise RuntimeError("UserHandler not initialized. Check lifespan setup.")
    return handler


def get_metrics_handler(request: Request) -> MetricsHandler:
    """Dependency injection for MetricsHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "metrics_handler", None)
    if handler is None:
        raise RuntimeError("MetricsHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repository (data access) - the one passed to create_app, or a
       PostgresUserRepository over a freshly created asyncpg pool
    2. Service (business logic) - stored in app.state.user_service
    3. Handlers (HTTP endpoints) - app.state.user_handler, app.state.metrics_handler

    Cleanup:
        Removes the layers from app.state and closes the pool if it was
        created here.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Starting User Service API with %s", settings.describe())

    pool = None
    repository = app.state.repository
    if repository is None:
        pool = await open_pool(settings)
        repository = PostgresUserRepository(pool, query_timeout=settings.db_query_timeout)

    user_service = UserService(repository=repository)
    app.state.user_service = user_service
    app.state.user_handler = UserHandler(user_service=user_service)
    app.state.metrics_handler = MetricsHandler(metrics=app.state.metrics)
    logger.info("User service initialized (%s)", type(repository).__name__)

    try:
        yield
    finally:
        del app.state.metrics_handler
        del app.state.user_handler
        del app.state.user_service
        if pool is not None:
            await pool.close()
        logger.info("User service shut down")


# Type aliases for cleaner dependency injection
UserHandlerDep = Annotated[UserHandler, Depends(get_user_handler)]
MetricsHandlerDep = Annotated[MetricsHandler, Depends(get_metrics_handler)]
