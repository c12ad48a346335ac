"""
Client model: CRM contacts managed from the dashboard (not login accounts).
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from eventra.db.base import Base, utcnow


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    second_name = Column(String(100), nullable=False)
    email = Column(String(256), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=True)
    company = Column(String(200), nullable=True)
    address = Column(String(500), nullable=True)
    date_registered = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_active = Column(Boolean, nullable=False, default=True)
