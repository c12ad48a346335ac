"""
Pydantic schemas for event registrations.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from eventra.models.enums import AttendeeStatus
from eventra.schemas.base import CamelModel


class RegisterEventRequest(CamelModel):
    event_id: int
    notes: Optional[str] = Field(None, max_length=500)
    payment_required: bool = False


class EventAttendeeResponse(CamelModel):
    id: int
    event_id: int
    event_title: str
    user_id: int
    user_name: str
    user_email: str
    registration_date: datetime
    status: AttendeeStatus
    check_in_time: Optional[datetime]
    payment_required: bool
    payment_completed: bool

    @classmethod
    def from_attendee(cls, attendee) -> "EventAttendeeResponse":
        return cls(
            id=attendee.id,
            event_id=attendee.event_id,
            event_title=attendee.event.title,
            user_id=attendee.user_id,
            user_name=attendee.user.username,
            user_email=attendee.user.email,
            registration_date=attendee.registration_date,
            status=attendee.status,
            check_in_time=attendee.check_in_time,
            payment_required=attendee.payment_required,
            payment_completed=attendee.payment_completed,
        )
