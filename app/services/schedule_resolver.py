import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from app.models.schedule_exception import ExceptionType, ScheduleException
from app.models.working_hours import StaffWorkingHour
from app.services.salon_calendar import is_valid_window, pick_rule_for_day
from app.services.time_normalizer import day_of_week

logger = logging.getLogger(__name__)


class WindowSource(str, Enum):
    RULE = "RULE"
    EXCEPTION = "EXCEPTION"


@dataclass(frozen=True)
class StaffWindow:
    is_open: bool
    source: WindowSource
    start: time | None = None
    end: time | None = None

    def contains(self, start: time, end: time) -> bool:
        return self.is_open and self.start <= start and end <= self.end


_CLOSING_TYPES = {ExceptionType.DAY_OFF, ExceptionType.SICK_LEAVE}


def _recency_key(exc: ScheduleException) -> tuple[datetime, int]:
    return (exc.created_at or datetime.min, exc.id or 0)


def pick_exception(staff_id: str, d: date, exceptions: Sequence[ScheduleException]) -> ScheduleException | None:
    """Exception governing `d` for the staff member.

    When several overlap, the most recently created one wins and the overlap is logged.
    """
    applicable = [e for e in exceptions if e.staff_id == staff_id and e.covers(d)]
    if not applicable:
        return None
    applicable.sort(key=_recency_key, reverse=True)
    if len(applicable) > 1:
        logger.warning(
            "Overlapping schedule exceptions for staff %s on %s: ids=%s, using id=%s (%s)",
            staff_id,
            d,
            [e.id for e in applicable],
            applicable[0].id,
            applicable[0].type.value,
        )
    return applicable[0]


def resolve_staff_window(
    staff_id: str,
    d: date,
    rules: Sequence[StaffWorkingHour],
    exceptions: Sequence[ScheduleException],
) -> StaffWindow:
    """Effective working window of a staff member on a date.

    Exceptions take strict priority over the weekly rule. A missing rule row
    means the staff member is not working that day.
    """
    exc = pick_exception(staff_id, d, exceptions)
    if exc is not None:
        if exc.type in _CLOSING_TYPES:
            return StaffWindow(is_open=False, source=WindowSource.EXCEPTION)
        start, end = exc.custom_start_time, exc.custom_end_time
        if start is None or end is None or start >= end:
            logger.warning(
                "CUSTOM_HOURS exception %s for staff %s has invalid times (%s-%s), treating %s as closed",
                exc.id,
                staff_id,
                start,
                end,
                d,
            )
            return StaffWindow(is_open=False, source=WindowSource.EXCEPTION)
        return StaffWindow(is_open=True, source=WindowSource.EXCEPTION, start=start, end=end)

    weekday = day_of_week(d)
    own_rules = [r for r in rules if r.staff_id == staff_id]
    rule = pick_rule_for_day(own_rules, weekday, f"Staff {staff_id}")
    if rule is None:
        logger.warning("Staff %s has no schedule row for day %d, treating %s as closed", staff_id, weekday, d)
        return StaffWindow(is_open=False, source=WindowSource.RULE)
    if not rule.is_working_day:
        return StaffWindow(is_open=False, source=WindowSource.RULE)
    if not is_valid_window(rule):
        logger.warning("Staff %s schedule for day %d is invalid (%s-%s), treating as closed",
                       staff_id, weekday, rule.start_time, rule.end_time)
        return StaffWindow(is_open=False, source=WindowSource.RULE)
    return StaffWindow(is_open=True, source=WindowSource.RULE, start=rule.start_time, end=rule.end_time)
