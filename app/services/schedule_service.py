import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import flush_changes, run_statement
from app.core.errors import ExceptionNotFoundError, InvalidRequestError, StaffNotFoundError, TenantNotFoundError
from app.models.schedule_exception import ExceptionType, ScheduleException, ScheduleExceptionCreate
from app.models.tenant import Staff, Tenant
from app.models.working_hours import SalonWorkingHour, StaffWorkingHour, WorkingHourInput

logger = logging.getLogger(__name__)


def validate_working_hours(rows: Sequence[WorkingHourInput]) -> None:
    seen: set[int] = set()
    for row in rows:
        if not 0 <= row.day_of_week <= 6:
            raise InvalidRequestError(f"Invalid dayOfWeek {row.day_of_week}, expected 0-6")
        if row.day_of_week in seen:
            raise InvalidRequestError(f"Duplicate working hours for day {row.day_of_week}")
        seen.add(row.day_of_week)
        if row.is_working_day:
            if row.start_time is None or row.end_time is None:
                raise InvalidRequestError(f"Working day {row.day_of_week} requires startTime and endTime")
            if row.start_time >= row.end_time:
                raise InvalidRequestError(
                    f"Invalid time range for day {row.day_of_week}: startTime must be before endTime"
                )


def validate_exception(data: ScheduleExceptionCreate) -> None:
    if data.start_date > data.end_date:
        raise InvalidRequestError("Start date must be before or equal to end date")
    if data.type == ExceptionType.CUSTOM_HOURS:
        if data.custom_start_time is None or data.custom_end_time is None:
            raise InvalidRequestError("CUSTOM_HOURS type requires customStartTime and customEndTime")
        if data.custom_start_time >= data.custom_end_time:
            raise InvalidRequestError("Custom start time must be before custom end time")


async def _require_tenant(session: AsyncSession, tenant_id: str) -> Tenant:
    result = await run_statement(session, select(Tenant).where(Tenant.id == tenant_id), "tenant")
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise TenantNotFoundError(f"Tenant {tenant_id} not found")
    return tenant


async def _require_staff(session: AsyncSession, tenant_id: str, staff_id: str) -> Staff:
    result = await run_statement(
        session, select(Staff).where(Staff.tenant_id == tenant_id, Staff.id == staff_id), "staff"
    )
    staff = result.scalar_one_or_none()
    if staff is None:
        raise StaffNotFoundError("Staff member not found")
    return staff


async def list_salon_working_hours(session: AsyncSession, tenant_id: str) -> list[SalonWorkingHour]:
    await _require_tenant(session, tenant_id)
    result = await run_statement(
        session,
        select(SalonWorkingHour)
        .where(SalonWorkingHour.tenant_id == tenant_id)
        .order_by(SalonWorkingHour.day_of_week),
        "salon working hours",
    )
    return list(result.scalars().all())


async def replace_salon_working_hours(
    session: AsyncSession, tenant_id: str, rows: Sequence[WorkingHourInput]
) -> list[SalonWorkingHour]:
    """Replace the salon's weekly table with `rows`."""
    validate_working_hours(rows)
    await _require_tenant(session, tenant_id)
    await run_statement(
        session, delete(SalonWorkingHour).where(SalonWorkingHour.tenant_id == tenant_id), "salon working hours"
    )
    created = [SalonWorkingHour(tenant_id=tenant_id, **row.model_dump()) for row in rows]
    session.add_all(created)
    await flush_changes(session, "salon working hours")
    logger.info("Updated salon working hours (%d days) for tenant %s", len(created), tenant_id)
    return sorted(created, key=lambda r: r.day_of_week)


async def get_staff_schedule(
    session: AsyncSession, tenant_id: str, staff_id: str
) -> tuple[Staff, list[StaffWorkingHour], list[ScheduleException]]:
    staff = await _require_staff(session, tenant_id, staff_id)
    hours = await run_statement(
        session,
        select(StaffWorkingHour)
        .where(StaffWorkingHour.tenant_id == tenant_id, StaffWorkingHour.staff_id == staff_id)
        .order_by(StaffWorkingHour.day_of_week),
        "staff schedule",
    )
    exceptions = await run_statement(
        session,
        select(ScheduleException)
        .where(ScheduleException.tenant_id == tenant_id, ScheduleException.staff_id == staff_id)
        .order_by(ScheduleException.start_date),
        "schedule exceptions",
    )
    return staff, list(hours.scalars().all()), list(exceptions.scalars().all())


async def replace_staff_working_hours(
    session: AsyncSession, tenant_id: str, staff_id: str, rows: Sequence[WorkingHourInput]
) -> list[StaffWorkingHour]:
    validate_working_hours(rows)
    staff = await _require_staff(session, tenant_id, staff_id)
    await run_statement(
        session,
        delete(StaffWorkingHour).where(
            StaffWorkingHour.tenant_id == tenant_id, StaffWorkingHour.staff_id == staff_id
        ),
        "staff schedule",
    )
    created = [StaffWorkingHour(tenant_id=tenant_id, staff_id=staff_id, **row.model_dump()) for row in rows]
    session.add_all(created)
    await flush_changes(session, "staff schedule")
    logger.info("Updated schedule for staff %s (%d days)", staff.full_name, len(created))
    return sorted(created, key=lambda r: r.day_of_week)


async def create_schedule_exception(
    session: AsyncSession, tenant_id: str, staff_id: str, data: ScheduleExceptionCreate
) -> ScheduleException:
    validate_exception(data)
    staff = await _require_staff(session, tenant_id, staff_id)
    custom = data.type == ExceptionType.CUSTOM_HOURS
    exception = ScheduleException(
        tenant_id=tenant_id,
        staff_id=staff_id,
        start_date=data.start_date,
        end_date=data.end_date,
        type=data.type,
        custom_start_time=data.custom_start_time if custom else None,
        custom_end_time=data.custom_end_time if custom else None,
        reason=data.reason,
    )

    result = await run_statement(
        session,
        select(ScheduleException.id).where(
            ScheduleException.tenant_id == tenant_id,
            ScheduleException.staff_id == staff_id,
            ScheduleException.start_date <= data.end_date,
            ScheduleException.end_date >= data.start_date,
        ),
        "schedule exceptions",
    )
    overlapping = list(result.scalars().all())
    if overlapping:
        # Accepted; availability resolves overlaps to the newest exception
        logger.warning(
            "New %s exception for staff %s (%s..%s) overlaps existing exceptions %s",
            data.type.value,
            staff_id,
            data.start_date,
            data.end_date,
            overlapping,
        )

    session.add(exception)
    await flush_changes(session, "schedule exception")
    logger.info("Created schedule exception for %s (%s)", staff.full_name, data.type.value)
    return exception


async def delete_schedule_exception(
    session: AsyncSession, tenant_id: str, staff_id: str, exception_id: int
) -> None:
    result = await run_statement(
        session,
        select(ScheduleException).where(
            ScheduleException.id == exception_id,
            ScheduleException.tenant_id == tenant_id,
        ),
        "schedule exception",
    )
    exception = result.scalar_one_or_none()
    if exception is None or exception.staff_id != staff_id:
        raise ExceptionNotFoundError("Exception not found")
    await session.delete(exception)
    await flush_changes(session, "schedule exception")
    logger.info("Deleted schedule exception %s", exception_id)
