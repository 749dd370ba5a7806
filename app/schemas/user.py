"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserProfileResponse(BaseModel):
    """Public user profile (no password hash or provider id)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    created_at: datetime
