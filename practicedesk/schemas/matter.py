# practicedesk/schemas/matter.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from practicedesk.models.matter import Matter, MatterStatus


class MatterBase(SQLModel):
    """
    Writable matter fields.

    status arrives as its integer code; anything that is not a plain int
    is refused before enum lookup. Codes outside MatterStatus fail the
    enum, and UNKNOWN fails the status_known check.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    description: str = Field(max_length=1000)
    assigned_employee: str | None = Field(default=None, max_length=255)

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v

    @field_validator("assigned_employee")
    @classmethod
    def normalize_employee(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def status_is_int_code(cls, v):
        # bool is an int subclass
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("status must be an integer code")
        return v

    @field_validator("status", check_fields=False)
    @classmethod
    def status_known(cls, v: MatterStatus) -> MatterStatus:
        if v is MatterStatus.UNKNOWN:
            raise ValueError("status must be a known matter status")
        return v


class MatterCreate(MatterBase):
    status: MatterStatus = MatterStatus.INTAKE


class MatterUpdate(MatterBase):
    """Whole-record replace; status is required."""

    status: MatterStatus


class MatterRead(SQLModel):
    id: uuid.UUID
    name: str
    description: str
    status: MatterStatus
    status_display_name: str
    assigned_employee: str | None = None
    customer_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, matter: Matter) -> "MatterRead":
        status = MatterStatus(matter.status)
        return cls(
            id=matter.id,
            name=matter.name,
            description=matter.description,
            status=status,
            status_display_name=status.display_name,
            assigned_employee=matter.assigned_employee,
            customer_id=matter.customer_id,
            created_at=matter.created_at,
            updated_at=matter.updated_at,
        )


class MatterStatusOption(SQLModel):
    """Dropdown entry for status pickers."""

    value: MatterStatus
    label: str
