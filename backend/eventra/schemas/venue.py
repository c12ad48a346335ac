"""
Pydantic schemas for venues.
"""

from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from eventra.schemas.base import CamelModel, Money


class VenueCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    capacity: int = Field(..., ge=1, le=100000)
    description: Optional[str] = Field(None, max_length=500)
    contact_phone: Optional[str] = Field(None, max_length=50)
    contact_email: Optional[EmailStr] = None
    price_per_hour: Optional[Money] = Field(None, ge=0, le=Decimal("999999.99"))


class VenueResponse(CamelModel):
    id: int
    name: str
    address: str
    city: Optional[str]
    state: Optional[str]
    postal_code: Optional[str]
    capacity: int
    description: Optional[str]
    contact_phone: Optional[str]
    contact_email: Optional[str]
    price_per_hour: Optional[Money]
    is_active: bool
    event_count: int = 0
