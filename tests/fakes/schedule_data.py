"""Shared builders for the salon used across the test suite.

Salon "tenant-1" in Europe/Warsaw, open 09:00-17:00 every day, one stylist
("anna") with the same weekly hours.
"""

from datetime import UTC, datetime, time

from app.models.appointment import Appointment, AppointmentStatus
from app.models.working_hours import SalonWorkingHour, StaffWorkingHour

TENANT_ID = "tenant-1"
STAFF_ID = "anna"
TZ_NAME = "Europe/Warsaw"

# Before any 2025-03 test date, so the past-time rule never applies
EARLY_NOW = datetime(2025, 1, 1, 0, 0, tzinfo=UTC)


def salon_week(
    start: time = time(9, 0),
    end: time = time(17, 0),
    days=range(7),
    tenant_id: str = TENANT_ID,
) -> list[SalonWorkingHour]:
    return [
        SalonWorkingHour(
            id=i + 1,
            tenant_id=tenant_id,
            day_of_week=d,
            is_working_day=d in days,
            start_time=start,
            end_time=end,
        )
        for i, d in enumerate(range(7))
    ]


def staff_week(
    staff_id: str = STAFF_ID,
    start: time = time(9, 0),
    end: time = time(17, 0),
    days=range(7),
    tenant_id: str = TENANT_ID,
) -> list[StaffWorkingHour]:
    return [
        StaffWorkingHour(
            id=100 + i,
            tenant_id=tenant_id,
            staff_id=staff_id,
            day_of_week=d,
            is_working_day=d in days,
            start_time=start,
            end_time=end,
        )
        for i, d in enumerate(range(7))
    ]


def appointment(
    start: datetime,
    end: datetime,
    staff_id: str = STAFF_ID,
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
    tenant_id: str = TENANT_ID,
    appointment_id: int = 1,
) -> Appointment:
    return Appointment(
        id=appointment_id,
        tenant_id=tenant_id,
        staff_id=staff_id,
        start_at=start,
        end_at=end,
        status=status,
    )
