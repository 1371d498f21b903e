# practicedesk/models/matter.py
import uuid
from datetime import datetime
from enum import IntEnum

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field

from practicedesk.models.user import utc_now


class MatterStatus(IntEnum):
    """
    Matter lifecycle. Codes are part of the wire format and the DB
    column, so never renumber them.

    UNKNOWN is a sentinel; it is never set through the API.
    """

    UNKNOWN = 0
    INTAKE = 1
    CONSULTATION = 2
    ENGAGED = 3
    PREPARATION = 4
    ACTIVE = 5
    PENDING_RESOLUTION = 6
    RESOLVED = 7
    BILLING = 8
    CLOSED = 9

    @property
    def display_name(self) -> str:
        return STATUS_DISPLAY_NAMES[self]

    @classmethod
    def selectable(cls) -> list["MatterStatus"]:
        """Statuses a user can pick (everything but the sentinel)."""
        return [s for s in cls if s is not cls.UNKNOWN]


STATUS_DISPLAY_NAMES: dict[MatterStatus, str] = {
    MatterStatus.UNKNOWN: "Unknown",
    MatterStatus.INTAKE: "Intake",
    MatterStatus.CONSULTATION: "Consultation",
    MatterStatus.ENGAGED: "Engaged",
    MatterStatus.PREPARATION: "Preparation",
    MatterStatus.ACTIVE: "Active",
    MatterStatus.PENDING_RESOLUTION: "Pending Resolution",
    MatterStatus.RESOLVED: "Resolved",
    MatterStatus.BILLING: "Billing",
    MatterStatus.CLOSED: "Closed",
}


class Matter(SQLModel, table=True):
    """
    Legal matter under a customer.

    status is stored as its integer code; the CHECK constraint keeps
    anything outside MatterStatus out of the table.
    """

    __tablename__ = "matters"
    __table_args__ = (
        CheckConstraint(
            f"status >= {int(min(MatterStatus))} AND status <= {int(max(MatterStatus))}",
            name="ck_matters_status_range",
        ),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    customer_id: uuid.UUID = Field(
        foreign_key="customers.id",
        ondelete="CASCADE",
        index=True,
    )

    name: str = Field(max_length=255)

    description: str = Field(max_length=2000)

    status: int = Field(
        default=int(MatterStatus.INTAKE),
        index=True,
        description="MatterStatus code",
    )

    assigned_employee: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
