from datetime import date, time

import pytest

from app.core.errors import InvalidRequestError
from app.models.schedule_exception import ExceptionType, ScheduleExceptionCreate
from app.models.working_hours import WorkingHourInput
from app.services.schedule_service import validate_exception, validate_working_hours


def _day(day: int, start: time | None = time(9, 0), end: time | None = time(17, 0), working: bool = True):
    return WorkingHourInput(day_of_week=day, is_working_day=working, start_time=start, end_time=end)


def test_full_week_is_valid() -> None:
    validate_working_hours([_day(d) for d in range(7)])


def test_closed_day_needs_no_times() -> None:
    validate_working_hours([_day(0, None, None, working=False), _day(1)])


def test_duplicate_weekday_rejected() -> None:
    with pytest.raises(InvalidRequestError, match="Duplicate"):
        validate_working_hours([_day(1), _day(1, time(10, 0))])


def test_working_day_requires_both_times() -> None:
    with pytest.raises(InvalidRequestError, match="requires startTime and endTime"):
        validate_working_hours([_day(2, end=None)])


@pytest.mark.parametrize("start,end", [(time(17, 0), time(9, 0)), (time(9, 0), time(9, 0))])
def test_start_must_precede_end(start, end) -> None:
    with pytest.raises(InvalidRequestError, match="startTime must be before endTime"):
        validate_working_hours([_day(3, start, end)])


def test_out_of_range_weekday_rejected() -> None:
    row = WorkingHourInput.model_construct(day_of_week=7, is_working_day=True, start_time=time(9), end_time=time(17))
    with pytest.raises(InvalidRequestError, match="dayOfWeek"):
        validate_working_hours([row])


def test_exception_dates_must_be_ordered() -> None:
    data = ScheduleExceptionCreate(start_date=date(2025, 3, 12), end_date=date(2025, 3, 10), type=ExceptionType.DAY_OFF)
    with pytest.raises(InvalidRequestError):
        validate_exception(data)


def test_single_day_exception_is_valid() -> None:
    validate_exception(
        ScheduleExceptionCreate(start_date=date(2025, 3, 10), end_date=date(2025, 3, 10), type=ExceptionType.SICK_LEAVE)
    )


def test_custom_hours_need_a_window() -> None:
    missing = ScheduleExceptionCreate(
        start_date=date(2025, 3, 10),
        end_date=date(2025, 3, 10),
        type=ExceptionType.CUSTOM_HOURS,
        custom_start_time=time(10, 0),
    )
    with pytest.raises(InvalidRequestError, match="requires customStartTime"):
        validate_exception(missing)

    inverted = missing.model_copy(update={"custom_end_time": time(8, 0)})
    with pytest.raises(InvalidRequestError, match="Custom start time"):
        validate_exception(inverted)
