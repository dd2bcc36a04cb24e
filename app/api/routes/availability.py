from fastapi import APIRouter, Depends, Query

from app.api.deps import get_schedule_store, get_tenant_id
from app.api.schemas.availability import AvailableSlotsResponse, SlotInfo, ValidateSlotRequest
from app.services.availability_service import SlotRequest, get_available_slots, validate_slot
from app.services.schedule_store import ScheduleStore

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailableSlotsResponse, response_model_exclude_none=True)
async def available_slots(
    date_param: str = Query(..., alias="date"),
    service_duration_minutes: int = Query(..., alias="serviceDurationMinutes"),
    staff_id: str | None = Query(None, alias="staffId"),
    buffer_minutes: int | None = Query(None, alias="bufferMinutes"),
    tenant_id: str = Depends(get_tenant_id),
    store: ScheduleStore = Depends(get_schedule_store),
) -> AvailableSlotsResponse:
    """Every grid slot of the salon-local date with availability and reason.

    The result is a snapshot, not a reservation.
    """
    snapshot = await get_available_slots(
        store,
        SlotRequest(
            tenant_id=tenant_id,
            date=date_param,
            service_duration_minutes=service_duration_minutes,
            staff_id=staff_id,
            buffer_minutes=buffer_minutes,
        ),
    )
    return AvailableSlotsResponse.from_snapshot(snapshot)


@router.post("/validate", response_model=SlotInfo, response_model_exclude_none=True)
async def validate_booking_slot(
    body: ValidateSlotRequest,
    tenant_id: str = Depends(get_tenant_id),
    store: ScheduleStore = Depends(get_schedule_store),
) -> SlotInfo:
    """Re-check one proposed start against current data (booking commit path)."""
    slot = await validate_slot(
        store,
        tenant_id,
        body.start_utc,
        body.service_duration_minutes,
        staff_id=body.staff_id,
        buffer_minutes=body.buffer_minutes,
    )
    return SlotInfo.from_slot(slot)
