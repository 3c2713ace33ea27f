"""PostgreSQL implementation of UserStore.

This repository runs raw SQL through a shared asyncpg pool.
It satisfies the UserStore protocol through structural typing.

Driver errors never leave this module: unique violations become
ConstraintViolationError, everything else becomes StorageError.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import asyncpg

from user_service.entities import UserEntity
from user_service.errors import ConstraintViolationError, StorageError

T = TypeVar("T")

# Failures the driver can raise for a single statement
_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncpg.exceptions.InternalClientError,
    OSError,
    asyncio.TimeoutError,
)


class PostgresUserRepository:
    """User storage backed by the ``users`` table.

    Every statement runs under a deadline (``query_timeout`` seconds) that
    also covers waiting for a free pooled connection.
    """

    def __init__(self, pool: asyncpg.Pool, query_timeout: float = 5.0) -> None:
        """Initialize the repository.

        Args:
            pool: The shared asyncpg pool (owned by the caller).
            query_timeout: Per-statement deadline in seconds.
        """
        self._pool = pool
        self._timeout = query_timeout

    async def _run(self, statement: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(statement, timeout=self._timeout)
        except asyncpg.UniqueViolationError as e:
            raise ConstraintViolationError(str(e)) from e
        except asyncio.TimeoutError as e:
            raise StorageError(f"Query exceeded {self._timeout}s deadline") from e
        except _DRIVER_ERRORS as e:
            raise StorageError(str(e) or type(e).__name__) from e

    async def create(self, name: str, email: str) -> UserEntity:
        row = await self._run(
            self._pool.fetchrow(
                "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id, name, email",
                name,
                email,
            )
        )
        if row is None:
            raise StorageError("INSERT returned no row")
        return UserEntity.from_row(row)

    async def list_all(self) -> list[UserEntity]:
        rows = await self._run(self._pool.fetch("SELECT id, name, email FROM users ORDER BY id"))
        return [UserEntity.from_row(r) for r in rows]

    async def update(self, user_id: int, name: str, email: str) -> UserEntity | None:
        row = await self._run(
            self._pool.fetchrow(
                "UPDATE users SET name = $1, email = $2 WHERE id = $3 RETURNING id, name, email",
                name,
                email,
                user_id,
            )
        )
        return UserEntity.from_row(row) if row is not None else None

    async def delete(self, user_id: int) -> bool:
        row = await self._run(
            self._pool.fetchrow("DELETE FROM users WHERE id = $1 RETURNING id", user_id)
        )
        return row is not None

    async def ping(self) -> None:
        await self._run(self._pool.fetchval("SELECT 1"))

