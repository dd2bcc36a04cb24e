from datetime import UTC, datetime

from tests.fakes.schedule_data import STAFF_ID, TENANT_ID, appointment

from app.models.appointment import AppointmentStatus
from app.services.conflict_index import ConflictIndex


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 11, hour, minute, tzinfo=UTC)


def test_half_open_overlap() -> None:
    index = ConflictIndex(TENANT_ID, [appointment(_at(9), _at(10))])
    assert index.find_overlaps(TENANT_ID, STAFF_ID, _at(9, 30), _at(10, 30))
    # Touching intervals do not overlap
    assert not index.find_overlaps(TENANT_ID, STAFF_ID, _at(10), _at(11))
    assert not index.find_overlaps(TENANT_ID, STAFF_ID, _at(8), _at(9))


def test_cancelled_appointments_are_ignored() -> None:
    index = ConflictIndex(TENANT_ID, [appointment(_at(9), _at(10), status=AppointmentStatus.CANCELED)])
    assert len(index) == 0
    assert not index.find_overlaps(TENANT_ID, STAFF_ID, _at(9), _at(10))


def test_naive_datetimes_are_treated_as_utc() -> None:
    index = ConflictIndex(TENANT_ID, [appointment(datetime(2025, 3, 11, 9), datetime(2025, 3, 11, 10))])
    assert index.find_overlaps(TENANT_ID, STAFF_ID, _at(9, 45), _at(10, 15))


def test_staff_filter_and_tenant_scope() -> None:
    index = ConflictIndex(
        TENANT_ID,
        [
            appointment(_at(9), _at(10), staff_id="anna", appointment_id=1),
            appointment(_at(9), _at(10), staff_id="ola", appointment_id=2),
            appointment(_at(9), _at(10), staff_id="anna", tenant_id="other", appointment_id=3),
        ],
    )
    assert [a.id for a in index.find_overlaps(TENANT_ID, "anna", _at(9), _at(10))] == [1]
    assert sorted(a.id for a in index.find_overlaps(TENANT_ID, None, _at(9), _at(10))) == [1, 2]
    assert index.find_overlaps("other", None, _at(9), _at(10)) == []
