"""
Audit log model. The user reference is weak so entries outlive accounts.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from eventra.db.base import Base, utcnow
from eventra.models.enums import AuditAction, enum_type


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    entity_name = Column(String(100), nullable=False)  # Event, Booking, User, ...
    entity_id = Column(String(100), nullable=False)
    action = Column(enum_type(AuditAction, "audit_action"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    user_email = Column(String(100), nullable=True)
    details = Column(String(1000), nullable=True)
    ip_address = Column(String(50), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_name", "entity_id"),
        Index("ix_audit_logs_timestamp", "timestamp"),
    )
