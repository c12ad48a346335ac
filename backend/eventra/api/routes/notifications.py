"""
Notification endpoints. Users only ever see their own notifications.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import get_current_user, require_admin
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.notification import NotificationCreate, NotificationResponse, UnreadCountResponse
from eventra.services import notification_service

router = APIRouter(prefix="/Notifications", tags=["Notifications"])


@router.get("/my-notifications", response_model=list[NotificationResponse])
async def my_notifications(
    include_read: bool = Query(False, alias="includeRead"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    notifications = await notification_service.list_user_notifications(db, user.id, include_read)
    return [NotificationResponse.from_notification(n) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return UnreadCountResponse(unread_count=await notification_service.count_unread(db, user.id))


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_read(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await notification_service.mark_all_read(db, user.id)
    return MessageResponse(message=f"{count} notifications marked as read.")


@router.delete("/clear-all", response_model=MessageResponse)
async def clear_all(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await notification_service.clear_all(db, user.id)
    return MessageResponse(message=f"{count} notifications deleted.")


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    notification = await notification_service.get_owned_notification(db, notification_id, user.id)
    return NotificationResponse.from_notification(notification)


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    data: NotificationCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Send a notification to a user. Admin only."""
    notification = await notification_service.create_notification(db, data)
    return NotificationResponse.from_notification(notification)


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await notification_service.mark_read(db, notification_id, user.id)
    return MessageResponse(message="Notification marked as read.")


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await notification_service.delete_notification(db, notification_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
