"""
Menu model: catering items, optionally assigned to an event.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String

from eventra.db.base import Base, utcnow


class Menu(Base):
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)  # Appetizer, Main Course, Dessert, Beverage
    description = Column(String(1000), nullable=True)
    price_per_person = Column(Numeric(10, 2), nullable=False)
    minimum_guests = Column(Integer, nullable=False, default=1)
    is_vegetarian = Column(Boolean, nullable=False, default=False)
    is_vegan = Column(Boolean, nullable=False, default=False)
    is_gluten_free = Column(Boolean, nullable=False, default=False)
    allergen_info = Column(String(500), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, name={self.name}, event={self.event_id})>"
