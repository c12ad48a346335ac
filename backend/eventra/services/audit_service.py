"""
Audit trail helpers. Entries are added to the caller's unit of work and
committed together with the change they describe.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.models.audit_log import AuditLog
from eventra.models.enums import AuditAction
from eventra.models.user import User


def record_audit(
    db: AsyncSession,
    entity_name: str,
    entity_id,
    action: AuditAction,
    user: Optional[User] = None,
    details: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> AuditLog:
    entry = AuditLog(
        entity_name=entity_name,
        entity_id=str(entity_id),
        action=action,
        user_id=user.id if user is not None else None,
        user_email=user.email if user is not None else None,
        details=details[:1000] if details else None,
        ip_address=ip_address,
    )
    db.add(entry)
    return entry


async def list_audit_logs(
    db: AsyncSession,
    entity_name: Optional[str] = None,
    limit: int = 100,
) -> list[AuditLog]:
    query = select(AuditLog)
    if entity_name:
        query = query.where(AuditLog.entity_name == entity_name)
    query = query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())
