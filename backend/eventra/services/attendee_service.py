"""
Event registration (RSVP) service.

A registration is independent from a ticketed booking but takes a seat from
the same `current_attendees` counter, through the same guarded updates.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import (
    CapacityExceededError,
    DuplicateBookingError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
)
from eventra.core.logging import get_logger
from eventra.core.metrics import record_check_in, record_registration
from eventra.models.enums import AttendeeStatus, AuditAction, NotificationType
from eventra.models.event import Event
from eventra.models.event_attendee import EventAttendee
from eventra.models.user import User
from eventra.schemas.attendee import RegisterEventRequest
from eventra.services.audit_service import record_audit
from eventra.services.booking_service import release_seats, reserve_seats
from eventra.services.notification_service import notify

logger = get_logger(__name__)


async def list_event_attendees(db: AsyncSession, event_id: int) -> list[EventAttendee]:
    if await db.get(Event, event_id) is None:
        raise NotFoundError("Event")
    result = await db.execute(
        select(EventAttendee)
        .where(EventAttendee.event_id == event_id)
        .order_by(EventAttendee.registration_date.asc(), EventAttendee.id.asc())
    )
    return list(result.scalars().all())


async def list_user_registrations(db: AsyncSession, user_id: int) -> list[EventAttendee]:
    result = await db.execute(
        select(EventAttendee)
        .where(EventAttendee.user_id == user_id)
        .order_by(EventAttendee.registration_date.desc(), EventAttendee.id.desc())
    )
    return list(result.scalars().all())


async def register(
    db: AsyncSession,
    user: User,
    data: RegisterEventRequest,
    ip_address: Optional[str] = None,
) -> EventAttendee:
    event = await db.get(Event, data.event_id)
    if event is None:
        raise NotFoundError("Event")

    existing = await db.execute(
        select(EventAttendee.id).where(
            EventAttendee.event_id == event.id,
            EventAttendee.user_id == user.id,
        )
    )
    if existing.first() is not None:
        record_registration("duplicate")
        raise DuplicateBookingError("You are already registered for this event.")

    if not await reserve_seats(db, event.id, 1):
        record_registration("full")
        logger.warning("registration_failed_full", event_id=event.id, user_id=user.id)
        raise CapacityExceededError("Event is full. No more seats available.")

    attendee = EventAttendee(
        event=event,
        user=user,
        status=AttendeeStatus.REGISTERED,
        notes=data.notes,
        payment_required=data.payment_required or not event.is_free,
        payment_completed=event.is_free,
    )
    db.add(attendee)
    await db.flush()

    notify(
        db,
        user_id=user.id,
        type=NotificationType.REGISTRATION_CONFIRMATION,
        title="Registration Confirmed",
        message=f"You are registered for '{event.title}'.",
        event=event,
    )
    record_audit(
        db, "EventAttendee", attendee.id, AuditAction.REGISTRATION, user=user,
        details=f"Registered for event {event.id}", ip_address=ip_address,
    )
    await db.flush()

    record_registration("registered")
    logger.info("attendee_registered", attendee_id=attendee.id, event_id=event.id, user_id=user.id)
    return attendee


async def get_registration(db: AsyncSession, attendee_id: int, message: str = "Registration not found.") -> EventAttendee:
    attendee = await db.get(EventAttendee, attendee_id)
    if attendee is None:
        raise NotFoundError("EventAttendee", message)
    return attendee


async def check_in(db: AsyncSession, attendee_id: int, admin: User, ip_address: Optional[str] = None) -> EventAttendee:
    attendee = await get_registration(db, attendee_id, "Attendee registration not found.")

    if attendee.status == AttendeeStatus.CANCELLED:
        raise InvalidStateError("Cannot check in a cancelled registration.")
    if attendee.status == AttendeeStatus.CHECKED_IN:
        raise InvalidStateError("Attendee already checked in.")

    attendee.status = AttendeeStatus.CHECKED_IN
    attendee.check_in_time = datetime.now(timezone.utc)
    record_audit(db, "EventAttendee", attendee.id, AuditAction.CHECK_IN, user=admin, ip_address=ip_address)
    await db.flush()

    record_check_in("attendee")
    logger.info("attendee_checked_in", attendee_id=attendee.id, event_id=attendee.event_id)
    return attendee


async def cancel_registration(
    db: AsyncSession,
    attendee_id: int,
    user: User,
    ip_address: Optional[str] = None,
) -> EventAttendee:
    attendee = await get_registration(db, attendee_id)
    if attendee.user_id != user.id and not user.is_admin:
        raise PermissionDeniedError("You can only cancel your own registrations.")

    if attendee.status == AttendeeStatus.CHECKED_IN:
        raise InvalidStateError("Cannot cancel after check-in.")
    if attendee.status == AttendeeStatus.CANCELLED:
        raise InvalidStateError("Registration already cancelled.")

    attendee.status = AttendeeStatus.CANCELLED
    await release_seats(db, attendee.event_id, 1)
    record_audit(
        db, "EventAttendee", attendee.id, AuditAction.UPDATE, user=user,
        details="Registration cancelled", ip_address=ip_address,
    )
    await db.flush()

    record_registration("cancelled")
    logger.info("registration_cancelled", attendee_id=attendee.id, event_id=attendee.event_id, user_id=attendee.user_id)
    return attendee
