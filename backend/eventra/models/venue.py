"""
Venue model. Venues referenced by events are deactivated rather than deleted.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, Numeric, String

from eventra.db.base import Base, TimestampMixin


class Venue(Base, TimestampMixin):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    capacity = Column(Integer, nullable=False)
    description = Column(String(500), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    contact_email = Column(String(100), nullable=True)
    price_per_hour = Column(Numeric(10, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_venue_capacity_positive"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, active={self.is_active})>"
