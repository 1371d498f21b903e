# practicedesk/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    Firm account and tenant root.

    Identity:
      - id: generated server-side (UUID4)
      - email: stored lowercased; the UNIQUE constraint is the final
        guard against duplicate signups racing each other.

    password_hash is base64(salt || PBKDF2 key) and must never leave
    the backend; read schemas don't include it.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="Lowercased login email",
    )

    password_hash: str = Field(
        max_length=255,
        description="base64(salt || derived key)",
    )

    firm_name: str = Field(
        max_length=255,
        description="Law firm display name",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp (UTC)",
    )
