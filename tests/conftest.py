"""Shared fixtures: an in-memory UserStore and an app wired to it."""

import pytest
from fastapi.testclient import TestClient

from user_service.api.app import create_app
from user_service.config import Settings
from user_service.entities import UserEntity
from user_service.errors import ConstraintViolationError, StorageError


class InMemoryUserRepository:
    """UserStore kept in a dict. Enforces the unique email constraint.

    Set ``fail_with`` to make every call raise that storage error.
    """

    def __init__(self) -> None:
        self._rows: dict[int, UserEntity] = {}
        self._next_id = 1
        self.fail_with: StorageError | None = None
        self.calls: list[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with is not None:
            raise self.fail_with

    def _check_unique(self, email: str, exclude_id: int | None = None) -> None:
        for user in self._rows.values():
            if user.email == email and user.id != exclude_id:
                raise ConstraintViolationError(
                    f"duplicate key value violates unique constraint: {email}",
                )

    async def create(self, name: str, email: str) -> UserEntity:
        self._enter("create")
        self._check_unique(email)
        user = UserEntity(id=self._next_id, name=name, email=email)
        self._rows[user.id] = user
        self._next_id += 1
        return user

    async def list_all(self) -> list[UserEntity]:
        self._enter("list_all")
        return [self._rows[k] for k in sorted(self._rows)]

    async def update(self, user_id: int, name: str, email: str) -> UserEntity | None:
        self._enter("update")
        if user_id not in self._rows:
            return None
        self._check_unique(email, exclude_id=user_id)
        user = UserEntity(id=user_id, name=name, email=email)
        self._rows[user_id] = user
        return user

    async def delete(self, user_id: int) -> bool:
        self._enter("delete")
        return self._rows.pop(user_id, None) is not None

    async def ping(self) -> None:
        self._enter("ping")


@pytest.fixture
def repository():
    """Fresh in-memory storage per test."""
    return InMemoryUserRepository()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def app(settings, repository):
    return create_app(settings=settings, repository=repository)


@pytest.fixture
def client(app):
    """Test client with the lifespan running."""
    with TestClient(app) as c:
        yield c
