from collections.abc import Iterable
from datetime import datetime

from app.models.appointment import Appointment, AppointmentStatus
from app.services.time_normalizer import as_utc


class ConflictIndex:
    """Non-cancelled appointments of one tenant, queryable by staff and time window."""

    def __init__(self, tenant_id: str, appointments: Iterable[Appointment]) -> None:
        self.tenant_id = tenant_id
        self._entries: list[tuple[datetime, datetime, Appointment]] = sorted(
            (
                (as_utc(a.start_at), as_utc(a.end_at), a)
                for a in appointments
                if a.tenant_id == tenant_id and a.status != AppointmentStatus.CANCELED
            ),
            key=lambda entry: entry[0],
        )

    def find_overlaps(
        self,
        tenant_id: str,
        staff_id: str | None,
        window_start: datetime,
        window_end: datetime,
    ) -> list[Appointment]:
        """Appointments intersecting the half-open window [window_start, window_end).

        With `staff_id=None` every overlapping appointment of the tenant is
        returned; grouping by staff is left to the caller.
        """
        if tenant_id != self.tenant_id:
            return []
        window_start = as_utc(window_start)
        window_end = as_utc(window_end)
        overlaps = []
        for start, end, appt in self._entries:
            if start >= window_end:
                break
            if end > window_start and (staff_id is None or appt.staff_id == staff_id):
                overlaps.append(appt)
        return overlaps

    def __len__(self) -> int:
        return len(self._entries)
