"""Availability queries: request validation, tenant-scoped loading and response shaping
around the slot generator. Pure read path; nothing here writes schedule or booking data."""

import logging
import re
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta

from app.core.config import Settings, settings as default_settings
from app.core.errors import InvalidRequestError, StaffNotFoundError, TenantNotFoundError
from app.services.conflict_index import ConflictIndex
from app.services.salon_calendar import Envelope, overall_envelope, resolve_salon_window
from app.services.schedule_resolver import resolve_staff_window
from app.services.schedule_store import ScheduleStore
from app.services.slot_service import DayContext, Slot, build_candidate, evaluate, generate_slots
from app.services.time_normalizer import ResolvedTimezone, as_utc, resolve_timezone, to_local, to_utc

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class SlotRequest:
    tenant_id: str | None
    date: str  # salon-local calendar date, YYYY-MM-DD
    service_duration_minutes: int
    staff_id: str | None = None
    buffer_minutes: int | None = None


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """Slots computed from the data as it was when the query ran.

    This is a snapshot, not a reservation: nothing is held, and a booking
    must re-validate its slot (see `validate_slot`) when it is committed.
    """

    date: date
    timezone: str
    timezone_fallback: bool
    slots: list[Slot]

    @property
    def available_slots(self) -> list[Slot]:
        return [s for s in self.slots if s.available]


@dataclass(frozen=True)
class _ValidRequest:
    tenant_id: str
    date: date
    duration: int
    buffer: int
    staff_id: str | None


def parse_date(value: str | None) -> date:
    if not value or not _DATE_RE.match(value):
        raise InvalidRequestError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRequestError(f"{value} is not a real calendar date") from None


def _validate_durations(duration: int, buffer: int | None, cfg: Settings) -> int:
    if duration is None or duration <= 0:
        raise InvalidRequestError("serviceDurationMinutes must be greater than 0")
    if duration > cfg.max_service_duration_minutes:
        raise InvalidRequestError(
            f"serviceDurationMinutes must be at most {cfg.max_service_duration_minutes}"
        )
    buffer = buffer or 0
    if buffer < 0 or buffer > cfg.max_buffer_minutes:
        raise InvalidRequestError(f"bufferMinutes must be between 0 and {cfg.max_buffer_minutes}")
    return buffer


def validate_request(request: SlotRequest, cfg: Settings) -> _ValidRequest:
    if not request.tenant_id:
        raise InvalidRequestError("tenantId is required")
    d = parse_date(request.date)
    buffer = _validate_durations(request.service_duration_minutes, request.buffer_minutes, cfg)
    return _ValidRequest(
        tenant_id=request.tenant_id,
        date=d,
        duration=request.service_duration_minutes,
        buffer=buffer,
        staff_id=request.staff_id or None,
    )


async def _load_timezone(store: ScheduleStore, tenant_id: str, cfg: Settings) -> ResolvedTimezone:
    tenant = await store.get_tenant(tenant_id)
    if tenant is None:
        raise TenantNotFoundError(f"Tenant {tenant_id} not found")
    return resolve_timezone(tenant.timezone, cfg.default_timezone)


async def _load_day(
    store: ScheduleStore,
    req: _ValidRequest,
    tz: ResolvedTimezone,
    now: datetime | None,
):
    """Read everything needed for one salon-local day and build the rule context."""
    tenant_id = req.tenant_id
    salon_rules = await store.get_salon_working_hours(tenant_id)

    staff_window = None
    candidate_staff_ids: tuple[str, ...] = ()
    if req.staff_id is not None:
        if await store.get_staff(tenant_id, req.staff_id) is None:
            raise StaffNotFoundError(f"Staff member {req.staff_id} not found")
        staff_rules = await store.get_staff_working_hours(tenant_id, req.staff_id)
        exceptions = await store.get_schedule_exceptions(tenant_id, req.staff_id, req.date, req.date)
        staff_window = resolve_staff_window(req.staff_id, req.date, staff_rules, exceptions)
    else:
        candidate_staff_ids = tuple(await store.list_active_staff_ids(tenant_id))

    # Whole local day, widened by the buffer on both sides
    margin = timedelta(minutes=req.buffer)
    day_start = to_utc(req.date, time(0, 0), tz.tz) - margin
    day_end = to_utc(req.date + timedelta(days=1), time(0, 0), tz.tz) + margin
    appointments = await store.get_appointments(tenant_id, req.staff_id, day_start, day_end)

    ctx = DayContext(
        tenant_id=tenant_id,
        date=req.date,
        tz=tz.tz,
        salon=resolve_salon_window(req.date, salon_rules),
        duration_minutes=req.duration,
        buffer_minutes=req.buffer,
        conflicts=ConflictIndex(tenant_id, appointments),
        staff_id=req.staff_id,
        staff=staff_window,
        candidate_staff_ids=candidate_staff_ids,
        now=as_utc(now) if now is not None else None,
    )
    return ctx, salon_rules


async def get_available_slots(
    store: ScheduleStore,
    request: SlotRequest,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> AvailabilitySnapshot:
    """Labeled slot list for one salon-local date.

    Raises InvalidRequestError before touching the store when the
    request is malformed. `now` defaults to the current time and only affects
    requests dated today in the salon's timezone.
    """
    cfg = settings or default_settings
    req = validate_request(request, cfg)
    tz = await _load_timezone(store, req.tenant_id, cfg)
    ctx, salon_rules = await _load_day(store, req, tz, now or datetime.now(UTC))

    fallback = Envelope(cfg.fallback_envelope_start, cfg.fallback_envelope_end)
    slots = generate_slots(ctx, overall_envelope(salon_rules, fallback), cfg.slot_interval_minutes)
    logger.debug(
        "Availability tenant=%s date=%s staff=%s duration=%d buffer=%d: %d slots, %d available",
        req.tenant_id,
        req.date,
        req.staff_id,
        req.duration,
        req.buffer,
        len(slots),
        sum(1 for s in slots if s.available),
    )
    return AvailabilitySnapshot(
        date=req.date,
        timezone=tz.name,
        timezone_fallback=tz.fallback,
        slots=slots,
    )


async def validate_slot(
    store: ScheduleStore,
    tenant_id: str | None,
    start_utc: datetime,
    service_duration_minutes: int,
    *,
    staff_id: str | None = None,
    buffer_minutes: int | None = None,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> Slot:
    """Classify one proposed start with the same rules as `get_available_slots`.

    Meant for the booking commit path, which must re-check a slot taken from
    an earlier snapshot. The start does not need to be grid-aligned, and any
    start before `now` is rejected as OUTSIDE_WORKING_HOURS.
    """
    cfg = settings or default_settings
    if not tenant_id:
        raise InvalidRequestError("tenantId is required")
    buffer = _validate_durations(service_duration_minutes, buffer_minutes, cfg)
    start_utc = as_utc(start_utc)
    tz = await _load_timezone(store, tenant_id, cfg)
    local_date = to_local(start_utc, tz.tz)[0]
    req = _ValidRequest(
        tenant_id=tenant_id,
        date=local_date,
        duration=service_duration_minutes,
        buffer=buffer,
        staff_id=staff_id or None,
    )
    ctx, _ = await _load_day(store, req, tz, now or datetime.now(UTC))
    ctx = replace(ctx, reject_any_past=True)
    return evaluate(ctx, build_candidate(ctx, start_utc))
