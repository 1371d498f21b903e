# practicedesk/schemas/user.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class SignUpRequest(SQLModel):
    """
    Payload for account creation.

    Validation rules:
      - email must be a valid EmailStr (lowercased by the service)
      - firm_name cannot be empty or whitespace
      - password must be at least 6 characters
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    firm_name: str = Field(max_length=255)
    password: str = Field(min_length=6, max_length=255)

    @field_validator("firm_name")
    @classmethod
    def normalize_firm_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("firm_name cannot be empty")
        return v


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class UserRead(SQLModel):
    """Response schema returned to clients. Never includes the hash."""

    id: uuid.UUID
    email: str
    firm_name: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(SQLModel):
    """Signup/login result: bearer token plus the user's profile."""

    token: str
    user: UserRead
