"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from user_service.entities import UserEntity


class UserResponse(BaseModel):
    """A stored user."""

    id: int = Field(..., description="Storage-generated id", ge=1)
    name: str = Field(..., description="Trimmed display name")
    email: str = Field(..., description="Trimmed email address")

    @classmethod
    def from_entity(cls, user: UserEntity) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx JSON response."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    uptime: float = Field(..., description="Seconds since the process started", ge=0.0)
    timestamp: str = Field(..., description="ISO-8601 UTC time of the check")
    database: str = Field(..., description="'connected' or 'disconnected'")
    error: str | None = Field(None, description="Why the database check failed")
