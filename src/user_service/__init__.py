"""User Service - CRUD HTTP API for users backed by PostgreSQL.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (UserStore)
    - repositories: Data access implementations (asyncpg)
    - services: Business logic and input validation
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from user_service.api.app import create_app

    app = create_app()                           # PostgreSQL from PG* env vars
    app = create_app(repository=my_store)        # any UserStore implementation
    ```
"""

from user_service.config import Settings, get_settings
from user_service.dto import UserPayload, UserResponse
from user_service.entities import UserEntity
from user_service.errors import (
    ConflictError,
    ConstraintViolationError,
    DependencyError,
    NotFoundError,
    StorageError,
    UserServiceError,
    ValidationError,
)
from user_service.handlers import MetricsHandler, UserHandler
from user_service.protocols import UserStore
from user_service.repositories import PostgresUserRepository
from user_service.services import UserService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Protocols (interfaces)
    "UserStore",
    # Services (business logic)
    "UserService",
    # Handlers (HTTP)
    "UserHandler",
    "MetricsHandler",
    # Repositories (data access)
    "PostgresUserRepository",
    # Entities (domain models)
    "UserEntity",
    # DTOs (API contracts)
    "UserPayload",
    "UserResponse",
    # Errors
    "UserServiceError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "DependencyError",
    "StorageError",
    "ConstraintViolationError",
]
