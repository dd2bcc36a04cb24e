from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel


class AppointmentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Appointment(SQLModel, table=True):
    """Existing booking. Owned by the booking flow; read-only here."""

    __tablename__ = "appointments"
    id: int | None = Field(default=None, primary_key=True)
    tenant_id: str = Field(foreign_key="tenants.id", index=True)
    staff_id: str = Field(foreign_key="staff.id", index=True)
    start_at: datetime = Field(index=True)  # naive UTC
    end_at: datetime = Field(index=True)  # naive UTC
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
