# practicedesk/models/customer.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from practicedesk.models.user import utc_now


class Customer(SQLModel, table=True):
    """
    A firm's client.

    Ownership:
      - user_id is set at creation and never changes.
      - Deleting the customer deletes its matters.
    """

    __tablename__ = "customers"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        ondelete="CASCADE",
        index=True,
    )

    name: str = Field(max_length=255)

    phone_number: str = Field(max_length=20)

    email: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
