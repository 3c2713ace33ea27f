"""User service for core business logic.

This service validates caller input and orchestrates the single storage
call each operation needs. It knows nothing about HTTP; failures are raised
as UserServiceError subclasses and mapped to responses by the handler.
"""

import re

from user_service.entities import UserEntity
from user_service.errors import (
    ConflictError,
    ConstraintViolationError,
    DependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from user_service.protocols import UserStore

MAX_FIELD_LENGTH = 50

# \s plus the byte order mark, which JavaScript counts as whitespace
EDGE_WHITESPACE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")
EMAIL_PATTERN = re.compile(r"[^\s\ufeff@]+@[^\s\ufeff@]+\.[^\s\ufeff@]+")
USER_ID_PATTERN = re.compile(r"[+-]?\d+")

# users.id is a SERIAL (32-bit signed) column
MAX_USER_ID = 2**31 - 1


def trim(value: str) -> str:
    """Strip leading and trailing whitespace, including U+FEFF."""
    return EDGE_WHITESPACE.sub("", value)


def validate_user_fields(name: str | None, email: str | None) -> tuple[str, str]:
    """Validate name and email and return their trimmed values.

    Checks run in a fixed order and the first failure wins:
    presence, non-blank after trimming, length (before trimming), email format.

    Raises:
        ValidationError: with the caller-facing message
    """
    if not name or not email:
        raise ValidationError("Name and email are required")

    trimmed_name = trim(name)
    trimmed_email = trim(email)
    if not trimmed_name or not trimmed_email:
        raise ValidationError("Name and email cannot be empty")

    if len(name) > MAX_FIELD_LENGTH or len(email) > MAX_FIELD_LENGTH:
        raise ValidationError(f"Name and email must not exceed {MAX_FIELD_LENGTH} characters")

    if EMAIL_PATTERN.fullmatch(email) is None:
        raise ValidationError("Invalid email format")

    return trimmed_name, trimmed_email


def parse_user_id(raw: str | None) -> int:
    """Parse a user id taken from the URL path.

    Raises:
        ValidationError: if the value is missing or not an integer
    """
    value = (raw or "").strip()
    if USER_ID_PATTERN.fullmatch(value) is None:
        raise ValidationError("Valid user ID is required")
    return int(value)


class UserService:
    """Core user orchestration service.

    Depends on the UserStore PROTOCOL, not on PostgreSQL directly, so the
    storage backend can be swapped (tests use an in-memory store).

    Example:
        ```python
        from user_service.repositories import PostgresUserRepository, create_pool
        from user_service.services import UserService

        pool = await create_pool(settings)
        users = UserService(repository=PostgresUserRepository(pool))
        user = await users.create_user("Ana", "ana@example.com")
        ```
    """

    def __init__(self, repository: UserStore) -> None:
        """Initialize the user service.

        Args:
            repository: User storage backend (required).
        """
        self._repository = repository

    async def create_user(self, name: str | None, email: str | None) -> UserEntity:
        """Validate and insert a new user.

        Raises:
            ValidationError: input rejected, storage not touched
            ConflictError: email already taken
            DependencyError: storage failure
        """
        name, email = validate_user_fields(name, email)
        try:
            return await self._repository.create(name, email)
        except ConstraintViolationError as e:
            raise ConflictError("Email already exists") from e
        except StorageError as e:
            raise DependencyError() from e

    async def list_users(self) -> list[UserEntity]:
        """Return all users ordered by id (possibly empty)."""
        try:
            return await self._repository.list_all()
        except StorageError as e:
            raise DependencyError() from e

    async def update_user(
        self,
        raw_user_id: str | None,
        name: str | None,
        email: str | None,
    ) -> UserEntity:
        """Replace name and email of an existing user.

        The id is checked first, then the body, then storage is called once.

        Raises:
            ValidationError: bad id or body
            NotFoundError: no user with this id
            ConflictError: email already taken by another user
            DependencyError: storage failure
        """
        user_id = parse_user_id(raw_user_id)
        name, email = validate_user_fields(name, email)
        if not 0 < user_id <= MAX_USER_ID:
            raise NotFoundError("User not found")

        try:
            user = await self._repository.update(user_id, name, email)
        except ConstraintViolationError as e:
            raise ConflictError("Email already exists") from e
        except StorageError as e:
            raise DependencyError() from e

        if user is None:
            raise NotFoundError("User not found")
        return user

    async def delete_user(self, raw_user_id: str | None) -> None:
        """Delete a user by id.

        Raises:
            ValidationError: bad id
            NotFoundError: no user with this id
            DependencyError: storage failure
        """
        user_id = parse_user_id(raw_user_id)
        if not 0 < user_id <= MAX_USER_ID:
            raise NotFoundError("User not found")

        try:
            deleted = await self._repository.delete(user_id)
        except StorageError as e:
            raise DependencyError() from e

        if not deleted:
            raise NotFoundError("User not found")

    async def check_database(self) -> None:
        """Run the storage liveness query.

        Raises:
            DependencyError: storage unreachable; the storage error is the cause
        """
        try:
            await self._repository.ping()
        except StorageError as e:
            raise DependencyError() from e

    @property
    def repository(self) -> UserStore:
        """Get the underlying repository (for testing)."""
        return self._repository
