"""
Booking service: ticket reservation, payment, check-in and cancellation.

SEAT ACCOUNTING
===============

Problem:
  Two users try to book the last seat simultaneously.
  Both read current_attendees=9 of 10, both add one, both succeed.
  Result: Overbooking.

Solution:
  The seat counter is never written from a value read earlier in the request.
  Every change is a single guarded statement:

    UPDATE events SET current_attendees = current_attendees + :n
    WHERE id = :event_id AND current_attendees + :n <= max_attendees

  and cancellations release seats with

    UPDATE events SET current_attendees = current_attendees - :n
    WHERE id = :event_id AND current_attendees >= :n

  If rows_affected == 0 the guard failed and the request is rejected. The
  database evaluates the guard against the committed row, so no read-then-write
  window exists. The CHECK constraint (current_attendees >= 0) backs up the
  floor.

  Registrations (attendee_service) share the same counter and the same helpers.
"""

import base64
import secrets
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import (
    BusinessRuleError,
    CapacityExceededError,
    DuplicateBookingError,
    InvalidStateError,
    NotFoundError,
    PaymentExceedsBalanceError,
    PermissionDeniedError,
)
from eventra.core.logging import get_logger
from eventra.core.metrics import (
    booking_cancellations,
    booking_latency,
    record_booking_attempt,
    record_check_in,
    record_payment,
)
from eventra.db.base import utcnow
from eventra.models.booking import Booking
from eventra.models.enums import AuditAction, BookingStatus, NotificationType
from eventra.models.event import Event
from eventra.models.user import User
from eventra.schemas.booking import BookingCreate, PaymentRequest
from eventra.services.audit_service import record_audit
from eventra.services.notification_service import notify

logger = get_logger(__name__)


async def _refresh_counter(db: AsyncSession, event_id: int) -> None:
    # Bulk updates bypass the identity map; reload the counter on the loaded event
    event = await db.get(Event, event_id)
    if event is not None:
        await db.refresh(event, attribute_names=["current_attendees", "updated_at"])


async def reserve_seats(db: AsyncSession, event_id: int, count: int) -> bool:
    """Atomically take `count` seats. False when the event would overflow."""
    result = await db.execute(
        update(Event)
        .where(
            Event.id == event_id,
            Event.current_attendees + count <= Event.max_attendees,
        )
        .values(
            current_attendees=Event.current_attendees + count,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    await _refresh_counter(db, event_id)
    return result.rowcount == 1


async def release_seats(db: AsyncSession, event_id: int, count: int) -> bool:
    """
    Atomically give back `count` seats.

    The decrement only applies while the counter still covers `count`. A lower
    counter is left untouched and False is returned.
    """
    result = await db.execute(
        update(Event)
        .where(
            Event.id == event_id,
            Event.current_attendees >= count,
        )
        .values(
            current_attendees=Event.current_attendees - count,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    await _refresh_counter(db, event_id)
    if result.rowcount == 0:
        logger.warning("seat_release_skipped", event_id=event_id, requested=count)
        return False
    return True


def generate_booking_reference(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"BK{now:%Y%m%d}{secrets.randbelow(90000) + 10000}"


def qr_payload(reference: str) -> str:
    return base64.b64encode(reference.encode("utf-8")).decode("ascii")


async def create_booking(
    db: AsyncSession,
    user: User,
    data: BookingCreate,
    ip_address: Optional[str] = None,
) -> Booking:
    """
    Reserve tickets for an event.

    Bookings on free events are confirmed immediately; on paid events they
    stay Pending until fully paid.
    """
    with booking_latency.time():
        event = await db.get(Event, data.event_id)
        if event is None:
            record_booking_attempt("not_found")
            raise NotFoundError("Event")

        if event.current_attendees + data.number_of_tickets > event.max_attendees:
            record_booking_attempt("capacity_exceeded")
            logger.warning(
                "booking_failed_no_seats",
                event_id=event.id,
                requested=data.number_of_tickets,
                current=event.current_attendees,
                max=event.max_attendees,
            )
            raise CapacityExceededError("Not enough seats available.")

        existing = await db.execute(
            select(Booking.id).where(
                Booking.event_id == event.id,
                Booking.user_id == user.id,
                Booking.status != BookingStatus.CANCELLED,
            )
        )
        if existing.first() is not None:
            record_booking_attempt("duplicate")
            logger.warning("booking_failed_duplicate", event_id=event.id, user_id=user.id)
            raise DuplicateBookingError("You already have an active booking for this event.")

        if not await reserve_seats(db, event.id, data.number_of_tickets):
            # Lost the race for the last seats between the check and the update
            record_booking_attempt("capacity_exceeded")
            logger.warning("booking_failed_no_seats", event_id=event.id, requested=data.number_of_tickets)
            raise CapacityExceededError("Not enough seats available.")

        if event.is_free:
            total = Decimal("0")
        else:
            total = (event.ticket_price or Decimal("0")) * data.number_of_tickets

        reference = generate_booking_reference()
        booking = Booking(
            event=event,
            user=user,
            booking_reference=reference,
            number_of_tickets=data.number_of_tickets,
            total_amount=total,
            amount_paid=Decimal("0"),
            status=BookingStatus.CONFIRMED if event.is_free else BookingStatus.PENDING,
            special_requests=data.special_requests,
            qr_code=qr_payload(reference),
        )
        db.add(booking)
        await db.flush()

        notify(
            db,
            user_id=user.id,
            type=NotificationType.REGISTRATION_CONFIRMATION,
            title="Booking Confirmed" if booking.status == BookingStatus.CONFIRMED else "Booking Created",
            message=f"Your booking {reference} for '{event.title}' has been created.",
            event=event,
            booking_id=booking.id,
        )
        record_audit(
            db, "Booking", booking.id, AuditAction.BOOKING_CREATED, user=user,
            details=f"{data.number_of_tickets} ticket(s) for event {event.id}", ip_address=ip_address,
        )
        await db.flush()

    record_booking_attempt("created")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        reference=reference,
        user_id=user.id,
        event_id=event.id,
        tickets=data.number_of_tickets,
        total=str(total),
        status=booking.status.value,
    )
    return booking


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking")
    return booking


async def get_booking_for_user(db: AsyncSession, booking_id: int, user: User) -> Booking:
    """Single booking, visible to its owner and to admins."""
    booking = await get_booking(db, booking_id)
    if booking.user_id != user.id and not user.is_admin:
        raise PermissionDeniedError("You do not have access to this booking.")
    return booking


async def process_payment(
    db: AsyncSession,
    booking_id: int,
    user: User,
    data: PaymentRequest,
    ip_address: Optional[str] = None,
) -> Booking:
    """Apply a payment. Confirms the booking once the total is covered."""
    if data.booking_id != booking_id:
        raise BusinessRuleError("Booking ID mismatch.")

    booking = await get_booking(db, booking_id)
    if booking.user_id != user.id:
        raise PermissionDeniedError("You can only pay for your own bookings.")

    if booking.status == BookingStatus.CANCELLED:
        record_payment(accepted=False)
        raise InvalidStateError("Cannot process payment for cancelled booking.")

    if booking.amount_paid + data.amount > booking.total_amount:
        record_payment(accepted=False)
        logger.warning(
            "payment_rejected_overpayment",
            booking_id=booking.id,
            amount=str(data.amount),
            balance=str(booking.remaining_balance),
        )
        raise PaymentExceedsBalanceError("Payment amount exceeds balance due.")

    booking.amount_paid = booking.amount_paid + data.amount
    booking.payment_method = data.payment_method
    booking.transaction_id = data.transaction_id
    booking.payment_date = datetime.now(timezone.utc)
    if booking.amount_paid >= booking.total_amount:
        booking.status = BookingStatus.CONFIRMED

    notify(
        db,
        user_id=user.id,
        type=NotificationType.PAYMENT_CONFIRMATION,
        title="Payment Received",
        message=f"Payment of {data.amount} received for booking {booking.booking_reference}.",
        event=booking.event,
        booking_id=booking.id,
    )
    record_audit(
        db, "Booking", booking.id, AuditAction.PAYMENT_RECEIVED, user=user,
        details=f"{data.amount} via {data.payment_method}", ip_address=ip_address,
    )
    await db.flush()

    record_payment(accepted=True)
    logger.info(
        "payment_processed",
        booking_id=booking.id,
        amount=str(data.amount),
        amount_paid=str(booking.amount_paid),
        status=booking.status.value,
    )
    return booking


async def check_in(
    db: AsyncSession,
    booking_id: int,
    user: User,
    ip_address: Optional[str] = None,
) -> Booking:
    """Mark a confirmed booking as checked in. Event creator or admin."""
    booking = await get_booking(db, booking_id)
    if booking.event.created_by != user.id and not user.is_admin:
        raise PermissionDeniedError("Only the event organizer can check in attendees.")

    if booking.status != BookingStatus.CONFIRMED:
        raise InvalidStateError("Only confirmed bookings can be checked in.")
    if booking.is_checked_in:
        raise InvalidStateError("Booking already checked in.")

    booking.is_checked_in = True
    booking.check_in_time = datetime.now(timezone.utc)
    record_audit(db, "Booking", booking.id, AuditAction.CHECK_IN, user=user, ip_address=ip_address)
    await db.flush()

    record_check_in("booking")
    logger.info("booking_checked_in", booking_id=booking.id, event_id=booking.event_id)
    return booking


async def cancel_booking(
    db: AsyncSession,
    booking_id: int,
    user: User,
    reason: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> Booking:
    """Cancel a booking and release its seats back to the event."""
    booking = await get_booking(db, booking_id)
    if booking.user_id != user.id and not user.is_admin:
        raise PermissionDeniedError("You can only cancel your own bookings.")

    if booking.status == BookingStatus.CANCELLED:
        raise InvalidStateError("Booking already cancelled.")
    if booking.is_checked_in:
        raise InvalidStateError("Cannot cancel after check-in.")

    booking.status = BookingStatus.CANCELLED
    booking.cancellation_date = datetime.now(timezone.utc)
    booking.cancellation_reason = reason
    await release_seats(db, booking.event_id, booking.number_of_tickets)

    notify(
        db,
        user_id=booking.user_id,
        type=NotificationType.BOOKING_CANCELLED,
        title="Booking Cancelled",
        message=f"Your booking {booking.booking_reference} for '{booking.event.title}' has been cancelled.",
        event=booking.event,
        booking_id=booking.id,
    )
    record_audit(
        db, "Booking", booking.id, AuditAction.BOOKING_CANCELLED, user=user,
        details=reason, ip_address=ip_address,
    )
    await db.flush()

    booking_cancellations.inc()
    logger.info(
        "booking_cancelled",
        booking_id=booking.id,
        user_id=booking.user_id,
        event_id=booking.event_id,
        seats_released=booking.number_of_tickets,
    )
    return booking


async def approve_booking(db: AsyncSession, booking_id: int, admin: User) -> Booking:
    booking = await get_booking(db, booking_id)
    if booking.status == BookingStatus.CANCELLED:
        raise InvalidStateError("Cannot approve a cancelled booking.")

    booking.is_approved_by_admin = True
    record_audit(db, "Booking", booking.id, AuditAction.UPDATE, user=admin, details="Approved by admin")
    await db.flush()

    logger.info("booking_approved", booking_id=booking.id, admin_id=admin.id)
    return booking


async def get_user_bookings(db: AsyncSession, user_id: int) -> list[Booking]:
    """All bookings of a user, newest first."""
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id)
        .order_by(Booking.booking_date.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())


async def get_event_bookings(db: AsyncSession, event_id: int, user: User) -> list[Booking]:
    event = await db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event")
    if event.created_by != user.id and not user.is_admin:
        raise PermissionDeniedError("Only the event organizer can view its bookings.")

    result = await db.execute(
        select(Booking)
        .where(Booking.event_id == event_id)
        .order_by(Booking.booking_date.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())


async def get_all_bookings(db: AsyncSession) -> list[Booking]:
    result = await db.execute(
        select(Booking).order_by(Booking.booking_date.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())
