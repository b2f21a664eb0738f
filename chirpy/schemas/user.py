"""
User-related schemas.
"""

import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator


class Credentials(BaseModel):
    """Email and password pair used to create, update or log into an account."""

    email: EmailStr = Field(description="User email address")
    # Empty passwords are allowed through; they still get a full argon2 pass
    password: str = Field(max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower().strip()


class UserCreate(Credentials):
    """Schema for creating a new user."""


class UserUpdate(Credentials):
    """Schema for replacing the caller's email and password."""


class UserResponse(BaseModel):
    """Schema for user response (no sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str
