from datetime import datetime

from pydantic import Field

from app.api.schemas.common import CamelModel
from app.services.availability_service import AvailabilitySnapshot
from app.services.slot_service import Slot, UnavailableReason


class SlotInfo(CamelModel):
    start_local: str  # HH:MM, salon wall clock
    end_local: str
    start_utc: datetime
    end_utc: datetime
    available: bool
    unavailable_reason: UnavailableReason | None = None

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotInfo":
        return cls(
            start_local=slot.start_local.strftime("%H:%M"),
            end_local=slot.end_local.strftime("%H:%M"),
            start_utc=slot.start_utc,
            end_utc=slot.end_utc,
            available=slot.available,
            unavailable_reason=slot.unavailable_reason,
        )


class AvailableSlotsResponse(CamelModel):
    """Availability as of the request; not a reservation."""

    date: str  # YYYY-MM-DD
    timezone: str
    timezone_fallback: bool = False
    slots: list[SlotInfo]

    @classmethod
    def from_snapshot(cls, snapshot: AvailabilitySnapshot) -> "AvailableSlotsResponse":
        return cls(
            date=snapshot.date.isoformat(),
            timezone=snapshot.timezone,
            timezone_fallback=snapshot.timezone_fallback,
            slots=[SlotInfo.from_slot(s) for s in snapshot.slots],
        )


class ValidateSlotRequest(CamelModel):
    start_utc: datetime
    service_duration_minutes: int
    staff_id: str | None = None
    buffer_minutes: int = Field(default=0)
