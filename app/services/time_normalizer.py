"""Conversion between salon wall-clock time and UTC instants.

Backed by the IANA database through pytz, so working-hours boundaries follow
DST transitions instead of a fixed offset.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from datetime import tzinfo as TzInfo

import pytz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTimezone:
    tz: TzInfo
    name: str
    fallback: bool = False  # True when the salon's zone was unknown and the default was used


def resolve_timezone(name: str | None, default_name: str) -> ResolvedTimezone:
    """Look up `name`; on failure fall back to `default_name` and flag the result."""
    if name:
        try:
            return ResolvedTimezone(tz=pytz.timezone(name), name=name)
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone %r, falling back to %s", name, default_name)
    else:
        logger.warning("Salon has no timezone configured, falling back to %s", default_name)
    return ResolvedTimezone(tz=pytz.timezone(default_name), name=default_name, fallback=True)


def to_utc(local_date: date, local_time: time, tz: TzInfo) -> datetime:
    """Aware UTC instant for a wall-clock time in `tz`.

    Ambiguous times (clocks going back) resolve to standard time; times inside
    a spring-forward gap are shifted forward by the gap.
    """
    naive = datetime.combine(local_date, local_time)
    localize = getattr(tz, "localize", None)
    if localize is None:
        return naive.replace(tzinfo=tz).astimezone(UTC)
    aware = tz.normalize(localize(naive, is_dst=False))
    return aware.astimezone(UTC)


def wall_time_exists(local_date: date, local_time: time, tz: TzInfo) -> bool:
    """False for wall-clock times skipped when clocks spring forward."""
    return to_local(to_utc(local_date, local_time, tz), tz) == (local_date, local_time)


def to_local(instant: datetime, tz: TzInfo) -> tuple[date, time]:
    """Wall-clock (date, time) in `tz` for an instant. Naive instants are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    local = instant.astimezone(tz)
    return local.date(), local.time().replace(tzinfo=None)


def as_utc(dt: datetime) -> datetime:
    """Aware UTC; naive values (TIMESTAMP WITHOUT TIME ZONE columns) are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def local_today(now: datetime, tz: TzInfo) -> date:
    return to_local(now, tz)[0]


def minutes_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def time_from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def day_of_week(d: date) -> int:
    """Weekday index as stored in working-hours rows: 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7
