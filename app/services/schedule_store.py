"""Tenant-scoped read model the availability engine depends on.

Every method takes the tenant id so no lookup can cross tenants.
"""

from collections.abc import Sequence
from datetime import UTC, date, datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import run_statement
from app.models.appointment import Appointment, AppointmentStatus
from app.models.schedule_exception import ScheduleException
from app.models.tenant import Staff, Tenant
from app.models.working_hours import SalonWorkingHour, StaffWorkingHour

class ScheduleStore(Protocol):
    async def get_tenant(self, tenant_id: str) -> Tenant | None: ...

    async def get_salon_working_hours(self, tenant_id: str) -> Sequence[SalonWorkingHour]: ...

    async def get_staff(self, tenant_id: str, staff_id: str) -> Staff | None: ...

    async def list_active_staff_ids(self, tenant_id: str) -> Sequence[str]: ...

    async def get_staff_working_hours(self, tenant_id: str, staff_id: str) -> Sequence[StaffWorkingHour]: ...

    async def get_schedule_exceptions(
        self, tenant_id: str, staff_id: str, start: date, end: date
    ) -> Sequence[ScheduleException]:
        """Exceptions of the staff member whose date range intersects [start, end]."""
        ...

    async def get_appointments(
        self, tenant_id: str, staff_id: str | None, start: datetime, end: datetime
    ) -> Sequence[Appointment]:
        """Non-cancelled appointments intersecting [start, end); all staff when staff_id is None."""
        ...


def _naive_utc(dt: datetime) -> datetime:
    """For TIMESTAMP WITHOUT TIME ZONE: compare as naive UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return dt.replace(tzinfo=None)


class SqlScheduleStore:
    """ScheduleStore over the SQLModel tables. Read-only."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _all(self, stmt, what: str) -> list:
        result = await run_statement(self.session, stmt, what)
        return list(result.scalars().all())

    async def get_tenant(self, tenant_id: str) -> Tenant | None:
        rows = await self._all(select(Tenant).where(Tenant.id == tenant_id), "tenant")
        return rows[0] if rows else None

    async def get_salon_working_hours(self, tenant_id: str) -> list[SalonWorkingHour]:
        stmt = (
            select(SalonWorkingHour)
            .where(SalonWorkingHour.tenant_id == tenant_id)
            .order_by(SalonWorkingHour.day_of_week, SalonWorkingHour.id)
        )
        return await self._all(stmt, "salon working hours")

    async def get_staff(self, tenant_id: str, staff_id: str) -> Staff | None:
        stmt = select(Staff).where(Staff.tenant_id == tenant_id, Staff.id == staff_id)
        rows = await self._all(stmt, "staff")
        return rows[0] if rows else None

    async def list_active_staff_ids(self, tenant_id: str) -> list[str]:
        stmt = (
            select(Staff.id)
            .where(Staff.tenant_id == tenant_id, Staff.is_active.is_(True))
            .order_by(Staff.id)
        )
        return await self._all(stmt, "staff directory")

    async def get_staff_working_hours(self, tenant_id: str, staff_id: str) -> list[StaffWorkingHour]:
        stmt = (
            select(StaffWorkingHour)
            .where(StaffWorkingHour.tenant_id == tenant_id, StaffWorkingHour.staff_id == staff_id)
            .order_by(StaffWorkingHour.day_of_week, StaffWorkingHour.id)
        )
        return await self._all(stmt, "staff schedule")

    async def get_schedule_exceptions(
        self, tenant_id: str, staff_id: str, start: date, end: date
    ) -> list[ScheduleException]:
        stmt = (
            select(ScheduleException)
            .where(
                ScheduleException.tenant_id == tenant_id,
                ScheduleException.staff_id == staff_id,
                ScheduleException.start_date <= end,
                ScheduleException.end_date >= start,
            )
            .order_by(ScheduleException.start_date, ScheduleException.id)
        )
        return await self._all(stmt, "schedule exceptions")

    async def get_appointments(
        self, tenant_id: str, staff_id: str | None, start: datetime, end: datetime
    ) -> list[Appointment]:
        stmt = select(Appointment).where(
            Appointment.tenant_id == tenant_id,
            Appointment.status != AppointmentStatus.CANCELED,
            Appointment.start_at < _naive_utc(end),
            Appointment.end_at > _naive_utc(start),
        )
        if staff_id is not None:
            stmt = stmt.where(Appointment.staff_id == staff_id)
        return await self._all(stmt.order_by(Appointment.start_at), "appointments")
