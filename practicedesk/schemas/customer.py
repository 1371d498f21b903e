# practicedesk/schemas/customer.py
import re
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

PHONE_PATTERN = re.compile(r"^\+?[0-9 ().\-]+$")


class CustomerBase(SQLModel):
    """
    Writable customer fields.

    Validation rules:
      - name cannot be empty or whitespace
      - phone_number: digits, spaces and + - ( ) . only
      - email optional, must be valid if present
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    phone_number: str = Field(max_length=20)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = v.strip()
        if not v or not PHONE_PATTERN.match(v):
            raise ValueError("invalid phone number")
        return v


class CustomerCreate(CustomerBase):
    """
    Payload for creating a customer.
    """

    pass


class CustomerUpdate(CustomerBase):
    """
    Whole-record replace: every field is written, so omitting `email`
    clears it.
    """

    pass


class CustomerRead(SQLModel):
    id: uuid.UUID
    name: str
    phone_number: str
    email: str | None = None
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
