from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.services.schedule_store import ScheduleStore, SqlScheduleStore


def get_tenant_id(
    x_tenant_id: str | None = Header(default=None, alias="X-Tenant-ID"),
    tenant_id: str | None = Query(default=None, alias="tenantId"),
) -> str:
    """Tenant of the request: X-Tenant-ID header, else the tenantId query param."""
    resolved = (x_tenant_id or tenant_id or "").strip()
    if not resolved:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="tenantId is required (X-Tenant-ID header or tenantId query parameter)",
        )
    return resolved


def get_schedule_store(session: AsyncSession = Depends(get_session)) -> ScheduleStore:
    return SqlScheduleStore(session)
