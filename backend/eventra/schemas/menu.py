"""
Pydantic schemas for catering menus.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from eventra.schemas.base import CamelModel, Money


class MenuCreate(CamelModel):
    event_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price_per_person: Money = Field(..., ge=0, le=Decimal("999999.99"))
    minimum_guests: int = Field(1, ge=1)
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    allergen_info: Optional[str] = Field(None, max_length=500)


class MenuResponse(CamelModel):
    id: int
    event_id: Optional[int]
    name: str
    category: Optional[str]
    description: Optional[str]
    price_per_person: Money
    minimum_guests: int
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    allergen_info: Optional[str]
    is_available: bool
