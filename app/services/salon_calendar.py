import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, time

from app.core.config import settings
from app.models.working_hours import SalonWorkingHour, WorkingHourBase
from app.services.time_normalizer import day_of_week

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalonWindow:
    is_open: bool
    start: time | None = None
    end: time | None = None


@dataclass(frozen=True)
class Envelope:
    earliest_start: time
    latest_end: time


CLOSED = SalonWindow(is_open=False)


def pick_rule_for_day(rules: Iterable[WorkingHourBase], weekday: int, owner: str) -> WorkingHourBase | None:
    """Row for `weekday`; duplicates resolve to the lowest id and are logged."""
    matches = sorted(
        (r for r in rules if r.day_of_week == weekday),
        key=lambda r: (getattr(r, "id", None) is None, getattr(r, "id", None) or 0),
    )
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "%s has %d working-hour rows for day %d, using id=%s",
            owner,
            len(matches),
            weekday,
            getattr(matches[0], "id", None),
        )
    return matches[0]


def is_valid_window(rule: WorkingHourBase) -> bool:
    return (
        rule.start_time is not None
        and rule.end_time is not None
        and rule.start_time < rule.end_time
    )


def resolve_salon_window(d: date, rules: Sequence[SalonWorkingHour]) -> SalonWindow:
    """Salon opening window for a date; a pure weekday lookup."""
    weekday = day_of_week(d)
    rule = pick_rule_for_day(rules, weekday, "Salon")
    if rule is None:
        logger.warning("Salon has no working-hours row for day %d, treating %s as closed", weekday, d)
        return CLOSED
    if not rule.is_working_day:
        return CLOSED
    if not is_valid_window(rule):
        logger.warning("Salon working hours for day %d are invalid (%s-%s), treating as closed",
                       weekday, rule.start_time, rule.end_time)
        return CLOSED
    return SalonWindow(is_open=True, start=rule.start_time, end=rule.end_time)


def overall_envelope(
    rules: Sequence[SalonWorkingHour],
    fallback: Envelope | None = None,
) -> Envelope:
    """Earliest start and latest end across working days, for sizing a display grid.

    Non-working days are ignored. Without any working day the fallback envelope is returned.
    """
    working = [r for r in rules if r.is_working_day and is_valid_window(r)]
    if not working:
        return fallback or Envelope(settings.fallback_envelope_start, settings.fallback_envelope_end)
    return Envelope(
        earliest_start=min(r.start_time for r in working),
        latest_end=max(r.end_time for r in working),
    )
