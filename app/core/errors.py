class SchedulingError(Exception):
    """Base class for errors surfaced to availability and schedule callers."""

    status_code = 500
    retryable = False

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(SchedulingError):
    status_code = 400


class TenantNotFoundError(SchedulingError):
    status_code = 404


class StaffNotFoundError(SchedulingError):
    status_code = 404


class ExceptionNotFoundError(SchedulingError):
    status_code = 404


class StoreUnavailableError(SchedulingError):
    """Schedule or appointment data could not be read; the caller may retry."""

    status_code = 503
    retryable = True
