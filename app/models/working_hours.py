from datetime import time

from sqlmodel import Field, SQLModel


class WorkingHourBase(SQLModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday, 6=Saturday
    is_working_day: bool = True
    start_time: time | None = None
    end_time: time | None = None


class SalonWorkingHour(WorkingHourBase, table=True):
    """Salon weekly opening hours, one row per weekday."""

    __tablename__ = "salon_working_hours"
    id: int | None = Field(default=None, primary_key=True)
    tenant_id: str = Field(foreign_key="tenants.id", index=True)


class StaffWorkingHour(WorkingHourBase, table=True):
    """A staff member's default weekly schedule, independent of the salon hours."""

    __tablename__ = "staff_working_hours"
    id: int | None = Field(default=None, primary_key=True)
    tenant_id: str = Field(foreign_key="tenants.id", index=True)
    staff_id: str = Field(foreign_key="staff.id", index=True)


class WorkingHourInput(WorkingHourBase):
    pass
