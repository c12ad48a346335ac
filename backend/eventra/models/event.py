"""
Event model with attendee capacity tracking.

Key design decisions:
- `current_attendees` is denormalized and shared by bookings and registrations;
  it is only ever changed through guarded single-statement updates
- `version` is the ORM version counter, so two concurrent edits of the same
  event cannot silently overwrite each other
- Index on `date` for upcoming/ordered listings
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from eventra.db.base import Base, TimestampMixin
from eventra.models.enums import EventCategory, EventStatus, enum_type


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(300), nullable=False)
    description = Column(String(2000), nullable=False)
    max_attendees = Column(Integer, nullable=False)
    current_attendees = Column(Integer, nullable=False, default=0)
    category = Column(enum_type(EventCategory, "event_category"), nullable=False, default=EventCategory.OTHER)
    status = Column(enum_type(EventStatus, "event_status"), nullable=False, default=EventStatus.DRAFT)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="SET NULL"), nullable=True, index=True)
    image_url = Column(String(500), nullable=True)
    ticket_price = Column(Numeric(10, 2), nullable=True)
    is_free = Column(Boolean, nullable=False, default=True)
    requires_approval = Column(Boolean, nullable=False, default=False)
    is_public = Column(Boolean, nullable=False, default=True)
    organizer_name = Column(String(100), nullable=True)
    organizer_email = Column(String(100), nullable=True)
    organizer_phone = Column(String(50), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    version = Column(Integer, nullable=False, default=1)

    venue = relationship("Venue", lazy="joined")

    __table_args__ = (
        CheckConstraint("max_attendees > 0", name="check_max_attendees_positive"),
        CheckConstraint("current_attendees >= 0", name="check_current_attendees_non_negative"),
        Index("ix_events_date", "date"),
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def has_available_seats(self) -> bool:
        return self.current_attendees < self.max_attendees

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, attendees={self.current_attendees}/{self.max_attendees})>"
