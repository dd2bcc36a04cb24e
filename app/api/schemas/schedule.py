from datetime import date

from pydantic import Field

from app.api.schemas.common import HHMM, CamelModel, format_hhmm, parse_hhmm
from app.models.schedule_exception import ExceptionType, ScheduleException, ScheduleExceptionCreate
from app.models.working_hours import WorkingHourBase, WorkingHourInput


class WorkingHourIn(CamelModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time: HHMM | None = None
    end_time: HHMM | None = None
    is_working_day: bool = True

    def to_input(self) -> WorkingHourInput:
        return WorkingHourInput(
            day_of_week=self.day_of_week,
            is_working_day=self.is_working_day,
            start_time=parse_hhmm(self.start_time),
            end_time=parse_hhmm(self.end_time),
        )


class WorkingHourOut(CamelModel):
    day_of_week: int
    start_time: str | None = None
    end_time: str | None = None
    is_working_day: bool

    @classmethod
    def from_row(cls, row: WorkingHourBase) -> "WorkingHourOut":
        return cls(
            day_of_week=row.day_of_week,
            start_time=format_hhmm(row.start_time),
            end_time=format_hhmm(row.end_time),
            is_working_day=row.is_working_day,
        )


class EnvelopeOut(CamelModel):
    earliest_start: str
    latest_end: str


class ScheduleExceptionIn(CamelModel):
    start_date: date
    end_date: date
    type: ExceptionType
    custom_start_time: HHMM | None = None
    custom_end_time: HHMM | None = None
    reason: str | None = Field(default=None, max_length=255)

    def to_create(self) -> ScheduleExceptionCreate:
        return ScheduleExceptionCreate(
            start_date=self.start_date,
            end_date=self.end_date,
            type=self.type,
            custom_start_time=parse_hhmm(self.custom_start_time),
            custom_end_time=parse_hhmm(self.custom_end_time),
            reason=self.reason,
        )


class ScheduleExceptionOut(CamelModel):
    id: int
    staff_id: str
    start_date: date
    end_date: date
    type: ExceptionType
    custom_start_time: str | None = None
    custom_end_time: str | None = None
    reason: str | None = None

    @classmethod
    def from_row(cls, row: ScheduleException) -> "ScheduleExceptionOut":
        return cls(
            id=row.id,
            staff_id=row.staff_id,
            start_date=row.start_date,
            end_date=row.end_date,
            type=row.type,
            custom_start_time=format_hhmm(row.custom_start_time),
            custom_end_time=format_hhmm(row.custom_end_time),
            reason=row.reason,
        )


class StaffScheduleOut(CamelModel):
    staff_id: str
    staff_name: str
    working_hours: list[WorkingHourOut]
    exceptions: list[ScheduleExceptionOut]
