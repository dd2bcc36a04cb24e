from app.models.appointment import Appointment, AppointmentStatus
from app.models.schedule_exception import ExceptionType, ScheduleException, ScheduleExceptionCreate
from app.models.tenant import Staff, Tenant
from app.models.working_hours import SalonWorkingHour, StaffWorkingHour, WorkingHourInput

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "ExceptionType",
    "ScheduleException",
    "ScheduleExceptionCreate",
    "SalonWorkingHour",
    "Staff",
    "StaffWorkingHour",
    "Tenant",
    "WorkingHourInput",
]
