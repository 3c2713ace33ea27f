"""User domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserEntity:
    """Domain entity for a stored user.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        id: Storage-generated primary key, immutable
        name: Display name, already trimmed
        email: Unique email address, already trimmed
    """

    id: int
    name: str
    email: str

    @classmethod
    def from_row(cls, row: Any) -> "UserEntity":
        """Build an entity from a database row (asyncpg Record or mapping)."""
        return cls(id=int(row["id"]), name=str(row["name"]), email=str(row["email"]))
