"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class UserPayload(BaseModel):
    """Request DTO for creating or replacing a user.

    Both fields are optional at decode time so that missing values reach the
    service layer, which reports them with its own messages. Values that are
    present must be strings.
    """

    name: str | None = Field(None, description="Display name (1-50 characters after trimming)")
    email: str | None = Field(None, description="Unique email address (1-50 characters)")
