"""
Audit log endpoint (admin only).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import require_admin
from eventra.db.session import get_db
from eventra.schemas.audit import AuditLogResponse
from eventra.services import audit_service

router = APIRouter(
    prefix="/AuditLogs",
    tags=["Audit"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[AuditLogResponse])
async def list_audit_logs(
    entity_name: Optional[str] = Query(None, alias="entityName", max_length=100),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await audit_service.list_audit_logs(db, entity_name, limit)
