"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserCreateSchema(BaseModel):
    """Schema for creating a user."""

    name: str = Field(..., min_length=1, description="User name")
    email: str = Field(..., min_length=1, description="User email address")


class UserResponseSchema(BaseModel):
    """Schema for user responses."""

    id: int
    name: str
    email: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserListResponseSchema(BaseModel):
    """Schema for user list responses."""

    items: list[UserResponseSchema]
    total: int
