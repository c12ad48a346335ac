"""
Pydantic schemas for audit log entries.
"""

from datetime import datetime
from typing import Optional

from eventra.models.enums import AuditAction
from eventra.schemas.base import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    entity_name: str
    entity_id: str
    action: AuditAction
    user_id: Optional[int]
    user_email: Optional[str]
    details: Optional[str]
    ip_address: Optional[str]
    timestamp: datetime
