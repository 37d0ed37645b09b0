"""Pydantic schemas for user profiles."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Partial profile update; absent fields are left unchanged."""

    username: str | None = Field(default=None, min_length=1, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=1000)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str | None = None
    avatar_url: str | None = None
    created_at: datetime
