"""
Service-level tests for the guarded seat counter shared by bookings and registrations.
"""

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import CapacityExceededError
from eventra.models.booking import Booking
from eventra.models.enums import BookingStatus
from eventra.models.event import Event
from eventra.models.event_attendee import EventAttendee
from eventra.schemas.attendee import RegisterEventRequest
from eventra.schemas.booking import BookingCreate
from eventra.services import attendee_service, booking_service
from eventra.services.booking_service import release_seats, reserve_seats


async def _set_counter(db: AsyncSession, event: Event, value: int) -> None:
    """Write the counter behind the session's back, as a concurrent request would."""
    await db.execute(
        update(Event)
        .where(Event.id == event.id)
        .values(current_attendees=value)
        .execution_options(synchronize_session=False)
    )
    await db.refresh(event, attribute_names=["current_attendees"])


def _lose_race_to(db: AsyncSession, event: Event, competitor_count: int):
    """Wrap reserve_seats so another writer fills the event just before the guarded update."""

    async def _racing_reserve(session, event_id, count):
        await _set_counter(db, event, competitor_count)
        return await reserve_seats(session, event_id, count)

    return _racing_reserve


@pytest.mark.asyncio
async def test_reserve_seats_takes_seats(db_session, nearly_full_event):
    assert await reserve_seats(db_session, nearly_full_event.id, 1) is True
    assert nearly_full_event.current_attendees == 10


@pytest.mark.asyncio
async def test_reserve_seats_refuses_overflow(db_session, nearly_full_event):
    assert await reserve_seats(db_session, nearly_full_event.id, 2) is False
    assert nearly_full_event.current_attendees == 9


@pytest.mark.asyncio
async def test_release_seats_decrements(db_session, free_event):
    await _set_counter(db_session, free_event, 5)
    assert await release_seats(db_session, free_event.id, 3) is True
    assert free_event.current_attendees == 2


@pytest.mark.asyncio
async def test_release_seats_leaves_lower_counter_untouched(db_session, free_event):
    await _set_counter(db_session, free_event, 2)
    assert await release_seats(db_session, free_event.id, 3) is False
    assert free_event.current_attendees == 2


@pytest.mark.asyncio
async def test_booking_losing_guard_is_rejected(db_session, monkeypatch, test_user, nearly_full_event):
    """The pre-check sees a free seat, but another writer takes it before the update."""
    monkeypatch.setattr(booking_service, "reserve_seats", _lose_race_to(db_session, nearly_full_event, 10))

    with pytest.raises(CapacityExceededError):
        await booking_service.create_booking(
            db_session, test_user, BookingCreate(event_id=nearly_full_event.id, number_of_tickets=1)
        )

    await db_session.refresh(nearly_full_event)
    assert nearly_full_event.current_attendees == 10
    bookings = await db_session.execute(select(Booking.id).where(Booking.event_id == nearly_full_event.id))
    assert bookings.first() is None


@pytest.mark.asyncio
async def test_registration_losing_guard_is_rejected(db_session, monkeypatch, test_user, nearly_full_event):
    monkeypatch.setattr(attendee_service, "reserve_seats", _lose_race_to(db_session, nearly_full_event, 10))

    with pytest.raises(CapacityExceededError):
        await attendee_service.register(db_session, test_user, RegisterEventRequest(event_id=nearly_full_event.id))

    await db_session.refresh(nearly_full_event)
    assert nearly_full_event.current_attendees == 10
    registrations = await db_session.execute(
        select(EventAttendee.id).where(EventAttendee.event_id == nearly_full_event.id)
    )
    assert registrations.first() is None


@pytest.mark.asyncio
async def test_counter_matches_active_bookings(db_session, test_user, other_user, admin_user, free_event):
    """After bookings and cancellations the counter equals the tickets still held."""
    first = await booking_service.create_booking(
        db_session, test_user, BookingCreate(event_id=free_event.id, number_of_tickets=3)
    )
    await booking_service.create_booking(
        db_session, other_user, BookingCreate(event_id=free_event.id, number_of_tickets=2)
    )
    await booking_service.cancel_booking(db_session, first.id, test_user, reason="Plans changed")
    await booking_service.create_booking(
        db_session, test_user, BookingCreate(event_id=free_event.id, number_of_tickets=4)
    )
    third = await booking_service.create_booking(
        db_session, admin_user, BookingCreate(event_id=free_event.id, number_of_tickets=1)
    )
    await booking_service.cancel_booking(db_session, third.id, admin_user)
    await db_session.commit()

    held = await db_session.execute(
        select(func.coalesce(func.sum(Booking.number_of_tickets), 0)).where(
            Booking.event_id == free_event.id,
            Booking.status != BookingStatus.CANCELLED,
        )
    )
    await db_session.refresh(free_event)
    assert free_event.current_attendees == held.scalar_one() == 6
