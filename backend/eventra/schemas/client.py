"""
Pydantic schemas for CRM clients.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from eventra.schemas.base import CamelModel


class ClientCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    second_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    company: Optional[str] = Field(None, max_length=200)
    address: Optional[str] = Field(None, max_length=500)


class ClientUpdate(ClientCreate):
    is_active: bool = True


class ClientResponse(CamelModel):
    id: int
    first_name: str
    second_name: str
    email: str
    phone: Optional[str]
    company: Optional[str]
    address: Optional[str]
    date_registered: datetime
    is_active: bool
