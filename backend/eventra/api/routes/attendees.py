"""
Event registration (RSVP) endpoints.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import client_ip, get_current_user, require_admin
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.attendee import EventAttendeeResponse, RegisterEventRequest
from eventra.schemas.base import MessageResponse
from eventra.schemas.booking import CheckInResponse
from eventra.services import attendee_service
from eventra.services.cache_service import invalidate_event_cache

router = APIRouter(prefix="/EventAttendees", tags=["Event Attendees"])


@router.get("/event/{event_id}", response_model=list[EventAttendeeResponse])
async def event_attendees(
    event_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    attendees = await attendee_service.list_event_attendees(db, event_id)
    return [EventAttendeeResponse.from_attendee(a) for a in attendees]


@router.get("/my-registrations", response_model=list[EventAttendeeResponse])
async def my_registrations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    attendees = await attendee_service.list_user_registrations(db, user.id)
    return [EventAttendeeResponse.from_attendee(a) for a in attendees]


@router.post("/register", response_model=EventAttendeeResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterEventRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register the current user for an event. Takes one seat."""
    attendee = await attendee_service.register(db, user, data, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    return EventAttendeeResponse.from_attendee(attendee)


@router.post("/{attendee_id}/checkin", response_model=CheckInResponse)
async def check_in(
    attendee_id: int,
    request: Request,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    attendee = await attendee_service.check_in(db, attendee_id, admin, ip_address=client_ip(request))
    return CheckInResponse(message="Attendee checked in successfully.", check_in_time=attendee.check_in_time)


@router.delete("/{attendee_id}", response_model=MessageResponse)
async def cancel_registration(
    attendee_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await attendee_service.cancel_registration(db, attendee_id, user, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    return MessageResponse(message="Registration cancelled successfully.")
