from datetime import UTC, date, datetime, time
from enum import Enum

from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class ExceptionType(str, Enum):
    DAY_OFF = "DAY_OFF"
    SICK_LEAVE = "SICK_LEAVE"
    CUSTOM_HOURS = "CUSTOM_HOURS"


class ScheduleException(SQLModel, table=True):
    """Date-ranged override of a staff member's weekly schedule (both dates inclusive)."""

    __tablename__ = "schedule_exceptions"
    id: int | None = Field(default=None, primary_key=True)
    tenant_id: str = Field(foreign_key="tenants.id", index=True)
    staff_id: str = Field(foreign_key="staff.id", index=True)
    start_date: date = Field(index=True)
    end_date: date = Field(index=True)
    type: ExceptionType
    custom_start_time: time | None = None
    custom_end_time: time | None = None
    reason: str | None = None
    created_at: datetime = Field(default_factory=_utc_naive_now)

    def covers(self, d: date) -> bool:
        return self.start_date <= d <= self.end_date


class ScheduleExceptionCreate(SQLModel):
    start_date: date
    end_date: date
    type: ExceptionType
    custom_start_time: time | None = None
    custom_end_time: time | None = None
    reason: str | None = Field(default=None, max_length=255)
