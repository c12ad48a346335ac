"""
EventAttendee model: a per-user registration (RSVP) for an event,
independent from ticketed bookings.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from eventra.db.base import Base, utcnow
from eventra.models.enums import AttendeeStatus, enum_type


class EventAttendee(Base):
    __tablename__ = "event_attendees"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    registration_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(enum_type(AttendeeStatus, "attendee_status"), nullable=False, default=AttendeeStatus.REGISTERED)
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    notes = Column(String(500), nullable=True)
    payment_required = Column(Boolean, nullable=False, default=False)
    payment_completed = Column(Boolean, nullable=False, default=False)
    payment_date = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", lazy="joined")
    user = relationship("User", lazy="joined")

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_attendee_user"),
    )

    def __repr__(self) -> str:
        return f"<EventAttendee(id={self.id}, event={self.event_id}, user={self.user_id}, status={self.status})>"
