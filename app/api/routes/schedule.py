from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_schedule_store, get_tenant_id
from app.api.schemas.common import format_hhmm
from app.api.schemas.schedule import (
    EnvelopeOut,
    ScheduleExceptionIn,
    ScheduleExceptionOut,
    StaffScheduleOut,
    WorkingHourIn,
    WorkingHourOut,
)
from app.core.config import settings
from app.core.db import get_session
from app.core.errors import TenantNotFoundError
from app.services.salon_calendar import Envelope, overall_envelope
from app.services.schedule_service import (
    create_schedule_exception,
    delete_schedule_exception,
    get_staff_schedule,
    list_salon_working_hours,
    replace_salon_working_hours,
    replace_staff_working_hours,
)
from app.services.schedule_store import ScheduleStore

router = APIRouter(tags=["schedule"])


@router.get("/settings/working-hours", response_model=list[WorkingHourOut])
async def get_working_hours(
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> list[WorkingHourOut]:
    rows = await list_salon_working_hours(session, tenant_id)
    return [WorkingHourOut.from_row(r) for r in rows]


@router.put("/settings/working-hours", response_model=list[WorkingHourOut])
async def put_working_hours(
    body: list[WorkingHourIn],
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> list[WorkingHourOut]:
    """Replace the salon's weekly working hours."""
    rows = await replace_salon_working_hours(session, tenant_id, [h.to_input() for h in body])
    return [WorkingHourOut.from_row(r) for r in rows]


@router.get("/settings/working-hours/envelope", response_model=EnvelopeOut)
async def get_working_hours_envelope(
    tenant_id: str = Depends(get_tenant_id),
    store: ScheduleStore = Depends(get_schedule_store),
) -> EnvelopeOut:
    """Earliest opening and latest closing across the week, for sizing a calendar grid."""
    if await store.get_tenant(tenant_id) is None:
        raise TenantNotFoundError(f"Tenant {tenant_id} not found")
    rules = await store.get_salon_working_hours(tenant_id)
    envelope = overall_envelope(rules, Envelope(settings.fallback_envelope_start, settings.fallback_envelope_end))
    return EnvelopeOut(
        earliest_start=format_hhmm(envelope.earliest_start),
        latest_end=format_hhmm(envelope.latest_end),
    )


@router.get("/staff/{staff_id}/schedule", response_model=StaffScheduleOut)
async def get_schedule(
    staff_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> StaffScheduleOut:
    staff, hours, exceptions = await get_staff_schedule(session, tenant_id, staff_id)
    return StaffScheduleOut(
        staff_id=staff.id,
        staff_name=staff.full_name,
        working_hours=[WorkingHourOut.from_row(r) for r in hours],
        exceptions=[ScheduleExceptionOut.from_row(e) for e in exceptions],
    )


@router.put("/staff/{staff_id}/schedule", response_model=list[WorkingHourOut])
async def put_schedule(
    staff_id: str,
    body: list[WorkingHourIn],
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> list[WorkingHourOut]:
    rows = await replace_staff_working_hours(session, tenant_id, staff_id, [h.to_input() for h in body])
    return [WorkingHourOut.from_row(r) for r in rows]


@router.post(
    "/staff/{staff_id}/schedule/exceptions",
    response_model=ScheduleExceptionOut,
    status_code=status.HTTP_201_CREATED,
)
async def post_exception(
    staff_id: str,
    body: ScheduleExceptionIn,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> ScheduleExceptionOut:
    """Vacation, sick leave or custom hours for a date range (inclusive)."""
    exception = await create_schedule_exception(session, tenant_id, staff_id, body.to_create())
    return ScheduleExceptionOut.from_row(exception)


@router.delete("/staff/{staff_id}/schedule/exceptions/{exception_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_exception(
    staff_id: str,
    exception_id: int,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
) -> None:
    await delete_schedule_exception(session, tenant_id, staff_id, exception_id)
