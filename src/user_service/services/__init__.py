"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .user_service import UserService, parse_user_id, trim, validate_user_fields

__all__ = [
    "UserService",
    "parse_user_id",
    "trim",
    "validate_user_fields",
]
