"""Repository layer for data access.

This layer hides PostgreSQL behind the UserStore protocol. This enables:
- Swapping the storage backend without touching services
- Unit testing with in-memory implementations
- Translating driver errors into typed storage errors in one place
"""

from user_service.protocols import UserStore

from .database import create_pool, ensure_schema, open_pool
from .postgres_repository import PostgresUserRepository

__all__ = [
    "UserStore",
    "PostgresUserRepository",
    "create_pool",
    "ensure_schema",
    "open_pool",
]
