import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from tests.fakes.memory_schedule_store import MemoryScheduleStore
from tests.fakes.schedule_data import STAFF_ID, TENANT_ID, TZ_NAME, salon_week, staff_week

import app.models  # noqa: F401 - register tables
from app.models.tenant import Staff, Tenant


@pytest.fixture
def store() -> MemoryScheduleStore:
    return MemoryScheduleStore(
        tenants=[Tenant(id=TENANT_ID, name="Salon Aurora", timezone=TZ_NAME)],
        staff=[Staff(id=STAFF_ID, tenant_id=TENANT_ID, first_name="Anna", last_name="Nowak")],
        salon_hours=salon_week(),
        staff_hours=staff_week(),
    )


@pytest_asyncio.fixture
async def session():
    """In-memory SQLite session with one salon and two staff members."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with maker() as s:
        s.add(Tenant(id=TENANT_ID, name="Salon Aurora", timezone=TZ_NAME))
        s.add(Tenant(id="tenant-2", name="Other Salon", timezone=TZ_NAME))
        s.add(Staff(id=STAFF_ID, tenant_id=TENANT_ID, first_name="Anna", last_name="Nowak"))
        s.add(Staff(id="ola", tenant_id=TENANT_ID, first_name="Ola"))
        await s.commit()
        yield s
    await engine.dispose()
