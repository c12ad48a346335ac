"""
Booking endpoints: reservation, payment, check-in and cancellation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import client_ip, get_current_user, require_admin
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.booking import (
    BookingCreate,
    BookingResponse,
    CheckInResponse,
    PaymentRequest,
    PaymentResponse,
)
from eventra.services import booking_service
from eventra.services.cache_service import invalidate_event_cache

router = APIRouter(prefix="/Bookings", tags=["Bookings"])


@router.get("/my-bookings", response_model=list[BookingResponse])
async def my_bookings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Bookings of the authenticated user, newest first."""
    bookings = await booking_service.get_user_bookings(db, user.id)
    return [BookingResponse.from_booking(b) for b in bookings]


@router.get("/event/{event_id}", response_model=list[BookingResponse])
async def event_bookings(
    event_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Bookings of one event. Event creator or admin."""
    bookings = await booking_service.get_event_bookings(db, event_id, user)
    return [BookingResponse.from_booking(b) for b in bookings]


@router.get("", response_model=list[BookingResponse])
async def all_bookings(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    bookings = await booking_service.get_all_bookings(db)
    return [BookingResponse.from_booking(b) for b in bookings]


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.get_booking_for_user(db, booking_id, user)
    return BookingResponse.from_booking(booking)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Book tickets for an event.

    Seats are taken with a single guarded update, so concurrent requests
    for the last seats cannot overbook the event.
    """
    booking = await booking_service.create_booking(db, user, data, ip_address=client_ip(request))
    # Seat counts appear in event listings; drop them once the write is committed
    await db.commit()
    await invalidate_event_cache()
    return BookingResponse.from_booking(booking)


@router.post("/{booking_id}/payment", response_model=PaymentResponse)
async def pay_booking(
    booking_id: int,
    data: PaymentRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.process_payment(db, booking_id, user, data, ip_address=client_ip(request))
    return PaymentResponse(
        amount_paid=booking.amount_paid,
        remaining_balance=booking.remaining_balance,
        status=booking.status,
    )


@router.post("/{booking_id}/checkin", response_model=CheckInResponse)
async def check_in_booking(
    booking_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.check_in(db, booking_id, user, ip_address=client_ip(request))
    return CheckInResponse(message="Check-in successful.", check_in_time=booking.check_in_time)


@router.post("/{booking_id}/approve", response_model=MessageResponse)
async def approve_booking(
    booking_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await booking_service.approve_booking(db, booking_id, admin)
    return MessageResponse(message="Booking approved.")


@router.delete("/{booking_id}", response_model=MessageResponse)
async def cancel_booking(
    booking_id: int,
    request: Request,
    reason: Optional[str] = Query(None, max_length=1000),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a booking and release its seats back to the event."""
    await booking_service.cancel_booking(db, booking_id, user, reason=reason, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    return MessageResponse(message="Booking cancelled successfully.")
