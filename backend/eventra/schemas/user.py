"""
Pydantic schemas for authentication and profile endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from eventra.models.enums import UserRole
from eventra.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: Optional[str] = Field(None, min_length=3, max_length=256)


class LoginRequest(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def require_identifier(self):
        if not self.email and not self.username:
            raise ValueError("Either email or username is required")
        return self


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: int
    email: str
    username: str
    first_name: str
    second_name: str
    role: UserRole
    is_active: bool
    date_registered: datetime


class LoginResponse(CamelModel):
    message: str = "Login successful!"
    token: str
    user_id: int
    refresh_token: str
    expires_at: datetime


class ProfileResponse(CamelModel):
    first_name: Optional[str] = None
    second_name: Optional[str] = None
    user_name: Optional[str] = None
    user_mail: Optional[str] = None
    profile_image_base64: Optional[str] = None


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(None, max_length=100)
    second_name: Optional[str] = Field(None, max_length=100)
    user_name: Optional[str] = Field(None, min_length=3, max_length=256)
    user_mail: Optional[EmailStr] = None
    profile_image_base64: Optional[str] = None
