"""
Pydantic schemas for notifications.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from eventra.models.enums import NotificationType
from eventra.schemas.base import CamelModel


class NotificationCreate(CamelModel):
    user_id: int
    type: NotificationType
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=1000)
    event_id: Optional[int] = None
    booking_id: Optional[int] = None
    action_url: Optional[str] = Field(None, max_length=500)


class NotificationResponse(CamelModel):
    id: int
    type: NotificationType
    title: str
    message: str
    event_id: Optional[int]
    event_title: Optional[str] = None
    booking_id: Optional[int]
    is_read: bool
    read_at: Optional[datetime]
    created_at: datetime
    action_url: Optional[str]

    @classmethod
    def from_notification(cls, notification) -> "NotificationResponse":
        response = cls.model_validate(notification)
        response.event_title = notification.event.title if notification.event is not None else None
        return response


class UnreadCountResponse(CamelModel):
    unread_count: int
