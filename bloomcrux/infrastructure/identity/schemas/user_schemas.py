"""Pydantic schemas for user API responses."""

from datetime import datetime

from pydantic import BaseModel


class UserDetailsResponse(BaseModel):
    """Schema for the current user's profile."""

    id: int
    external_id: str
    email: str | None = None
    created_at: datetime | None = None
