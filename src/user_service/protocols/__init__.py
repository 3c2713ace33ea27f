"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the storage backend without touching the service layer
- Unit testing with in-memory implementations

Usage:
    ```python
    from user_service.protocols import UserStore

    repo: UserStore = PostgresUserRepository(pool)  # works
    repo: UserStore = InMemoryUserRepository()      # also works
    ```
"""

from .user_store import UserStore

__all__ = [
    "UserStore",
]
