"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from eventra.models.enums import EventCategory, EventStatus
from eventra.schemas.base import CamelModel, Money


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: datetime
    end_date: Optional[datetime] = None
    location: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1, max_length=2000)
    max_attendees: int = Field(..., ge=1, le=100000)
    category: EventCategory = EventCategory.OTHER
    venue_id: Optional[int] = None
    image_url: Optional[str] = Field(None, max_length=500)
    ticket_price: Optional[Money] = Field(None, ge=0, le=Decimal("999999.99"))
    is_free: bool = True
    requires_approval: bool = False
    is_public: bool = True
    organizer_name: Optional[str] = Field(None, max_length=100)
    organizer_email: Optional[EmailStr] = None
    organizer_phone: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def require_price_when_paid(self):
        if not self.is_free and not (self.ticket_price and self.ticket_price > 0):
            raise ValueError("Paid events require a ticket price greater than zero")
        return self


class EventUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, max_length=2000)
    max_attendees: Optional[int] = Field(None, ge=1, le=100000)
    category: Optional[EventCategory] = None
    status: Optional[EventStatus] = None
    venue_id: Optional[int] = None
    image_url: Optional[str] = Field(None, max_length=500)
    ticket_price: Optional[Money] = Field(None, ge=0, le=Decimal("999999.99"))
    is_free: Optional[bool] = None
    requires_approval: Optional[bool] = None
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def require_price_when_paid(self):
        # Partial payloads are checked against the stored event by the service
        price_sent = "ticket_price" in self.model_fields_set
        if self.is_free is False and price_sent and not (self.ticket_price and self.ticket_price > 0):
            raise ValueError("Paid events require a ticket price greater than zero")
        return self


class EventResponse(CamelModel):
    id: int
    title: str
    date: datetime
    end_date: Optional[datetime]
    location: str
    description: str
    max_attendees: int
    current_attendees: int
    category: EventCategory
    status: EventStatus
    venue_id: Optional[int]
    venue_name: Optional[str] = None
    image_url: Optional[str]
    ticket_price: Optional[Money]
    is_free: bool
    requires_approval: bool
    is_public: bool
    organizer_name: Optional[str]
    organizer_email: Optional[str]
    organizer_phone: Optional[str]
    created_by: int
    created_at: datetime
    is_user_registered: bool = False
    has_available_seats: bool = True

    @classmethod
    def from_event(cls, event, is_user_registered: bool = False) -> "EventResponse":
        response = cls.model_validate(event)
        response.venue_name = event.venue.name if event.venue is not None else None
        response.is_user_registered = is_user_registered
        return response


class SearchResultResponse(CamelModel):
    id: int
    title: str
    date: datetime
    location: str
    description: str
    max_attendees: int
    current_attendees: int
    category: EventCategory
    status: EventStatus
