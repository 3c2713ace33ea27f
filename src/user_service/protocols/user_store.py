"""User storage protocol.

Defines the interface for any backend that can persist users.

Implementations can include:
- PostgreSQL through an asyncpg pool (default)
- An in-memory store (tests)
"""

from typing import Protocol, runtime_checkable

from user_service.entities import UserEntity


@runtime_checkable
class UserStore(Protocol):
    """Protocol for user storage backends.

    Every method issues exactly one statement against storage.

    Implementations raise ``ConstraintViolationError`` when a write breaks
    the unique email constraint and ``StorageError`` for any other failure.
    Callers never see driver-specific exceptions.
    """

    async def create(self, name: str, email: str) -> UserEntity:
        """Insert a user.

        Args:
            name: Trimmed name
            email: Trimmed email

        Returns:
            The stored user including its generated id
        """
        ...

    async def list_all(self) -> list[UserEntity]:
        """Return every stored user ordered by id."""
        ...

    async def update(self, user_id: int, name: str, email: str) -> UserEntity | None:
        """Replace name and email of a user.

        Returns:
            The updated user, or None if no user has this id
        """
        ...

    async def delete(self, user_id: int) -> bool:
        """Delete a user.

        Returns:
            True if a row was deleted, False if no user has this id
        """
        ...

    async def ping(self) -> None:
        """Run a trivial query. Raises StorageError if storage is unreachable."""
        ...
