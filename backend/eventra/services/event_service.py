"""
Event service handling CRUD operations.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from eventra.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from eventra.core.logging import get_logger
from eventra.models.booking import Booking
from eventra.models.enums import AttendeeStatus, AuditAction, BookingStatus, EventCategory, EventStatus
from eventra.models.event import Event
from eventra.models.event_attendee import EventAttendee
from eventra.models.user import User
from eventra.models.venue import Venue
from eventra.schemas.event import EventCreate, EventUpdate
from eventra.services.audit_service import record_audit

logger = get_logger(__name__)


async def _require_active_venue(db: AsyncSession, venue_id: int) -> None:
    venue = await db.get(Venue, venue_id)
    if venue is None or not venue.is_active:
        raise BusinessRuleError("Invalid or inactive venue.")


def _ensure_can_modify(event: Event, user: User) -> None:
    if event.created_by != user.id and not user.is_admin:
        raise PermissionDeniedError("Only the event creator or an administrator can modify this event.")


async def list_events(
    db: AsyncSession,
    category: Optional[EventCategory] = None,
    status: Optional[EventStatus] = None,
    upcoming: bool = False,
) -> list[Event]:
    """List events ordered by date. Uses the ix_events_date index."""
    query = select(Event)
    if category is not None:
        query = query.where(Event.category == category)
    if status is not None:
        query = query.where(Event.status == status)
    if upcoming:
        query = query.where(Event.date >= datetime.now(timezone.utc))

    result = await db.execute(query.order_by(Event.date.asc(), Event.id.asc()))
    return list(result.scalars().all())


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID."""
    event = await db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event")
    return event


async def is_user_registered(db: AsyncSession, event_id: int, user_id: int) -> bool:
    """True when the user holds an active registration or booking for the event."""
    registered = exists().where(
        EventAttendee.event_id == event_id,
        EventAttendee.user_id == user_id,
        EventAttendee.status != AttendeeStatus.CANCELLED,
    )
    booked = exists().where(
        Booking.event_id == event_id,
        Booking.user_id == user_id,
        Booking.status != BookingStatus.CANCELLED,
    )
    result = await db.execute(select(or_(registered, booked)))
    return bool(result.scalar())


async def create_event(
    db: AsyncSession,
    data: EventCreate,
    user: User,
    ip_address: Optional[str] = None,
) -> Event:
    """Create a new Draft event with no seats taken."""
    if data.venue_id is not None:
        await _require_active_venue(db, data.venue_id)

    event = Event(
        **data.model_dump(),
        status=EventStatus.DRAFT,
        current_attendees=0,
        created_by=user.id,
    )
    db.add(event)
    await db.flush()
    await db.refresh(event)

    record_audit(db, "Event", event.id, AuditAction.CREATE, user=user, details=event.title, ip_address=ip_address)
    await db.flush()

    logger.info("event_created", event_id=event.id, title=event.title, max_attendees=event.max_attendees)
    return event


async def update_event(
    db: AsyncSession,
    event_id: int,
    data: EventUpdate,
    user: User,
    ip_address: Optional[str] = None,
) -> Event:
    """
    Partially update an event.

    The ORM version counter rejects a write based on a stale row. When that
    happens because the event was deleted meanwhile, answer 404; any other
    conflict propagates.
    """
    event = await get_event(db, event_id)
    _ensure_can_modify(event, user)

    changes = data.model_dump(exclude_unset=True)
    if changes.get("venue_id") is not None:
        await _require_active_venue(db, changes["venue_id"])

    is_free = event.is_free if changes.get("is_free") is None else changes["is_free"]
    price = changes["ticket_price"] if "ticket_price" in changes else event.ticket_price
    if not is_free and not (price and price > 0):
        raise BusinessRuleError("Paid events require a ticket price greater than zero.")

    for field, value in changes.items():
        if value is None and field not in ("end_date", "venue_id", "image_url", "ticket_price"):
            continue
        setattr(event, field, value)
    event.updated_by = user.id

    try:
        await db.flush()
    except StaleDataError:
        await db.rollback()
        still_there = await db.execute(select(Event.id).where(Event.id == event_id))
        if still_there.first() is None:
            logger.warning("event_update_conflict", event_id=event_id, reason="deleted")
            raise NotFoundError("Event")
        raise
    await db.refresh(event)

    record_audit(
        db, "Event", event.id, AuditAction.UPDATE, user=user,
        details=", ".join(sorted(changes)), ip_address=ip_address,
    )
    await db.flush()

    logger.info("event_updated", event_id=event.id, fields=sorted(changes), version=event.version)
    return event


async def delete_event(
    db: AsyncSession,
    event_id: int,
    user: User,
    ip_address: Optional[str] = None,
) -> bool:
    """
    Delete an event. Events that already have bookings or registrations are
    cancelled instead. Returns True for a hard delete, False for a cancel.
    """
    event = await get_event(db, event_id)
    _ensure_can_modify(event, user)

    has_bookings = await db.execute(select(Booking.id).where(Booking.event_id == event_id).limit(1))
    has_attendees = await db.execute(select(EventAttendee.id).where(EventAttendee.event_id == event_id).limit(1))

    if has_bookings.first() is not None or has_attendees.first() is not None:
        event.status = EventStatus.CANCELLED
        event.updated_by = user.id
        record_audit(db, "Event", event.id, AuditAction.UPDATE, user=user, details="Cancelled on delete", ip_address=ip_address)
        await db.flush()
        logger.info("event_cancelled", event_id=event.id)
        return False

    await db.delete(event)
    record_audit(db, "Event", event_id, AuditAction.DELETE, user=user, ip_address=ip_address)
    await db.flush()
    logger.info("event_deleted", event_id=event_id)
    return True


async def search_events(db: AsyncSession, term: Optional[str]) -> list[Event]:
    """Case-insensitive match on title, location and description."""
    query = select(Event)
    if term and term.strip():
        pattern = f"%{term.strip().lower()}%"
        query = query.where(
            or_(
                Event.title.ilike(pattern),
                Event.location.ilike(pattern),
                Event.description.ilike(pattern),
            )
        )
    result = await db.execute(query.order_by(Event.date.asc(), Event.id.asc()))
    events = list(result.scalars().all())

    if term and term.strip() and not events:
        raise NotFoundError("Event", f"No events found matching '{term}'.")
    return events
