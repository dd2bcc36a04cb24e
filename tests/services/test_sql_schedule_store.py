from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import StoreUnavailableError
from app.services.schedule_store import SqlScheduleStore


class _BrokenSession:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        raise self.error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [OperationalError("SELECT 1", {}, Exception("connection refused")), ConnectionResetError("reset by peer")],
)
async def test_read_failures_become_retryable(error) -> None:
    store = SqlScheduleStore(_BrokenSession(error))
    with pytest.raises(StoreUnavailableError) as exc_info:
        await store.get_appointments(
            "tenant-1", None, datetime(2025, 3, 11, tzinfo=UTC), datetime(2025, 3, 12, tzinfo=UTC)
        )
    assert exc_info.value.retryable
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_programming_errors_are_not_masked() -> None:
    store = SqlScheduleStore(_BrokenSession(TypeError("bad statement")))
    with pytest.raises(TypeError):
        await store.get_tenant("tenant-1")
