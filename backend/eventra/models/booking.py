"""
Booking model: a ticketed reservation tying a user to an event.

Key design decisions:
- `booking_reference` is globally unique at the DB level
- One active (non-cancelled) booking per user and event is an application
  rule, so cancelled bookings do not block a new one
- Money columns are Numeric(10, 2); amount_paid never exceeds total_amount
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

from eventra.db.base import Base, TimestampMixin, utcnow
from eventra.models.enums import BookingStatus, enum_type


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_reference = Column(String(100), nullable=False, unique=True)
    booking_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(enum_type(BookingStatus, "booking_status"), nullable=False, default=BookingStatus.PENDING)
    number_of_tickets = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    amount_paid = Column(Numeric(10, 2), nullable=False, default=0)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    payment_method = Column(String(100), nullable=True)
    transaction_id = Column(String(200), nullable=True)
    qr_code = Column(String(500), nullable=True)
    is_checked_in = Column(Boolean, nullable=False, default=False)
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    special_requests = Column(String(1000), nullable=True)
    cancellation_reason = Column(String(1000), nullable=True)
    cancellation_date = Column(DateTime(timezone=True), nullable=True)
    is_approved_by_admin = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", lazy="joined")
    user = relationship("User", lazy="joined")

    __table_args__ = (
        CheckConstraint("number_of_tickets > 0", name="check_booking_tickets_positive"),
        CheckConstraint("amount_paid >= 0", name="check_booking_amount_paid_non_negative"),
        Index("ix_bookings_event_user", "event_id", "user_id"),
    )

    @property
    def remaining_balance(self):
        return self.total_amount - self.amount_paid

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, ref={self.booking_reference}, event={self.event_id}, status={self.status})>"
