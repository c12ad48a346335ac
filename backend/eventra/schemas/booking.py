"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from eventra.models.enums import BookingStatus
from eventra.schemas.base import CamelModel, Money


class BookingCreate(CamelModel):
    event_id: int
    number_of_tickets: int = Field(..., ge=1, le=100)
    special_requests: Optional[str] = Field(None, max_length=1000)


class PaymentRequest(CamelModel):
    booking_id: int
    amount: Decimal = Field(..., ge=Decimal("0.01"), le=Decimal("999999.99"), decimal_places=2)
    payment_method: str = Field(..., min_length=1, max_length=100)
    transaction_id: Optional[str] = Field(None, max_length=200)


class BookingResponse(CamelModel):
    id: int
    event_id: int
    event_title: str
    event_date: datetime
    user_id: int
    user_name: str
    booking_reference: str
    booking_date: datetime
    status: BookingStatus
    number_of_tickets: int
    total_amount: Money
    amount_paid: Money
    payment_date: Optional[datetime]
    payment_method: Optional[str]
    is_checked_in: bool
    check_in_time: Optional[datetime]
    special_requests: Optional[str]
    cancellation_date: Optional[datetime]
    cancellation_reason: Optional[str]
    is_approved_by_admin: bool
    qr_code: Optional[str]

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            event_id=booking.event_id,
            event_title=booking.event.title,
            event_date=booking.event.date,
            user_id=booking.user_id,
            user_name=booking.user.username,
            booking_reference=booking.booking_reference,
            booking_date=booking.booking_date,
            status=booking.status,
            number_of_tickets=booking.number_of_tickets,
            total_amount=booking.total_amount,
            amount_paid=booking.amount_paid,
            payment_date=booking.payment_date,
            payment_method=booking.payment_method,
            is_checked_in=booking.is_checked_in,
            check_in_time=booking.check_in_time,
            special_requests=booking.special_requests,
            cancellation_date=booking.cancellation_date,
            cancellation_reason=booking.cancellation_reason,
            is_approved_by_admin=booking.is_approved_by_admin,
            qr_code=booking.qr_code,
        )


class PaymentResponse(CamelModel):
    message: str = "Payment processed successfully."
    amount_paid: Money
    remaining_balance: Money
    status: BookingStatus


class CheckInResponse(CamelModel):
    message: str
    check_in_time: datetime
