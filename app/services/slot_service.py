"""Slot generation: a fixed 15-minute grid of candidate starts, each labeled
with its availability and, when unavailable, the first matching reason."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from datetime import tzinfo as TzInfo
from enum import Enum

from app.core.config import settings
from app.services.conflict_index import ConflictIndex
from app.services.salon_calendar import Envelope, SalonWindow
from app.services.schedule_resolver import StaffWindow
from app.services.time_normalizer import (
    local_today,
    minutes_of_day,
    time_from_minutes,
    to_local,
    to_utc,
    wall_time_exists,
)


class UnavailableReason(str, Enum):
    APPOINTMENT_CONFLICT = "APPOINTMENT_CONFLICT"
    SALON_CLOSED = "SALON_CLOSED"
    STAFF_OFF = "STAFF_OFF"
    OUTSIDE_WORKING_HOURS = "OUTSIDE_WORKING_HOURS"


@dataclass(frozen=True)
class Slot:
    start_local: time
    end_local: time
    start_utc: datetime
    end_utc: datetime
    available: bool
    unavailable_reason: UnavailableReason | None = None


@dataclass(frozen=True)
class Candidate:
    """One proposed start; minutes are local minutes-of-day, end includes the buffer."""

    start_minutes: int
    span_end_minutes: int
    start_utc: datetime
    end_utc: datetime


@dataclass(frozen=True)
class DayContext:
    """Everything the classification rules need for one tenant, date and request."""

    tenant_id: str
    date: date
    tz: TzInfo
    salon: SalonWindow
    duration_minutes: int
    buffer_minutes: int
    conflicts: ConflictIndex
    staff_id: str | None = None
    staff: StaffWindow | None = None
    candidate_staff_ids: tuple[str, ...] = field(default_factory=tuple)
    now: datetime | None = None
    # Booking re-checks reject every past start, not only those dated today
    reject_any_past: bool = False

    @property
    def span_minutes(self) -> int:
        return self.duration_minutes + self.buffer_minutes

    @property
    def effective_window(self) -> tuple[time, time] | None:
        """Salon window, intersected with the staff window when a staff member was requested."""
        if not self.salon.is_open:
            return None
        start, end = self.salon.start, self.salon.end
        if self.staff_id is not None:
            if self.staff is None or not self.staff.is_open:
                return None
            start, end = max(start, self.staff.start), min(end, self.staff.end)
        if start >= end:
            return None
        return start, end


def _inside(start: time | None, end: time | None, c: Candidate) -> bool:
    if start is None or end is None:
        return False
    return minutes_of_day(start) <= c.start_minutes and c.span_end_minutes <= minutes_of_day(end)


def _salon_closed(ctx: DayContext, c: Candidate) -> bool:
    return not ctx.salon.is_open


def _staff_off(ctx: DayContext, c: Candidate) -> bool:
    if ctx.staff_id is None:
        return False
    if ctx.staff is None or not ctx.staff.is_open:
        return True
    return not _inside(ctx.staff.start, ctx.staff.end, c)


def _outside_working_hours(ctx: DayContext, c: Candidate) -> bool:
    window = ctx.effective_window
    if window is None or not _inside(window[0], window[1], c):
        return True
    # Starts already in the past on the salon's current day are not offered
    if ctx.now is not None and (ctx.reject_any_past or ctx.date == local_today(ctx.now, ctx.tz)):
        return c.start_utc < ctx.now
    return False


def _appointment_conflict(ctx: DayContext, c: Candidate) -> bool:
    buffer = timedelta(minutes=ctx.buffer_minutes)
    lo, hi = c.start_utc - buffer, c.end_utc + buffer
    if ctx.staff_id is not None:
        return bool(ctx.conflicts.find_overlaps(ctx.tenant_id, ctx.staff_id, lo, hi))
    overlaps = ctx.conflicts.find_overlaps(ctx.tenant_id, None, lo, hi)
    if not overlaps:
        return False
    if not ctx.candidate_staff_ids:
        # Salon without a staff directory behaves as a single chair
        return True
    busy = {a.staff_id for a in overlaps}
    return all(staff_id in busy for staff_id in ctx.candidate_staff_ids)


Rule = Callable[[DayContext, Candidate], bool]

# Evaluated top-down, first match wins.
SLOT_RULES: tuple[tuple[UnavailableReason, Rule], ...] = (
    (UnavailableReason.SALON_CLOSED, _salon_closed),
    (UnavailableReason.STAFF_OFF, _staff_off),
    (UnavailableReason.OUTSIDE_WORKING_HOURS, _outside_working_hours),
    (UnavailableReason.APPOINTMENT_CONFLICT, _appointment_conflict),
)


def classify(ctx: DayContext, c: Candidate) -> UnavailableReason | None:
    for reason, rule in SLOT_RULES:
        if rule(ctx, c):
            return reason
    return None


def build_candidate(ctx: DayContext, start_utc: datetime) -> Candidate:
    """Candidate for an arbitrary instant, e.g. a start proposed by a booking flow."""
    start_minutes = minutes_of_day(to_local(start_utc, ctx.tz)[1])
    return Candidate(
        start_minutes=start_minutes,
        span_end_minutes=start_minutes + ctx.span_minutes,
        start_utc=start_utc,
        end_utc=start_utc + timedelta(minutes=ctx.duration_minutes),
    )


def evaluate(ctx: DayContext, c: Candidate) -> Slot:
    reason = classify(ctx, c)
    return Slot(
        start_local=to_local(c.start_utc, ctx.tz)[1],
        end_local=to_local(c.end_utc, ctx.tz)[1],
        start_utc=c.start_utc,
        end_utc=c.end_utc,
        available=reason is None,
        unavailable_reason=reason,
    )


def generate_slots(
    ctx: DayContext,
    envelope: Envelope,
    interval_minutes: int | None = None,
) -> list[Slot]:
    """Labeled slots for every grid-aligned start inside the display envelope.

    Unavailable slots are kept so callers can explain gaps. An envelope
    shorter than the requested span yields an empty list.
    """
    interval = interval_minutes or settings.slot_interval_minutes
    first = -(-minutes_of_day(envelope.earliest_start) // interval) * interval
    last_end = minutes_of_day(envelope.latest_end)

    slots: list[Slot] = []
    for start in range(first, last_end - ctx.span_minutes + 1, interval):
        wall = time_from_minutes(start)
        if not wall_time_exists(ctx.date, wall, ctx.tz):
            # Skipped by a DST spring-forward
            continue
        start_utc = to_utc(ctx.date, wall, ctx.tz)
        candidate = Candidate(
            start_minutes=start,
            span_end_minutes=start + ctx.span_minutes,
            start_utc=start_utc,
            end_utc=start_utc + timedelta(minutes=ctx.duration_minutes),
        )
        slots.append(evaluate(ctx, candidate))
    return slots
