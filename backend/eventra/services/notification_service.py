"""
Notification service: per-user inbox operations plus the helper other
services use to notify users about bookings and registrations.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import NotFoundError, PermissionDeniedError
from eventra.core.logging import get_logger
from eventra.models.enums import NotificationType
from eventra.models.event import Event
from eventra.models.notification import Notification
from eventra.models.user import User
from eventra.schemas.notification import NotificationCreate

logger = get_logger(__name__)


def notify(
    db: AsyncSession,
    user_id: int,
    type: NotificationType,
    title: str,
    message: str,
    event: Optional[Event] = None,
    booking_id: Optional[int] = None,
    action_url: Optional[str] = None,
) -> Notification:
    """Queue a notification in the current unit of work."""
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title[:200],
        message=message[:1000],
        event=event,
        booking_id=booking_id,
        action_url=action_url,
        is_read=False,
    )
    db.add(notification)
    return notification


async def create_notification(db: AsyncSession, data: NotificationCreate) -> Notification:
    if await db.get(User, data.user_id) is None:
        raise NotFoundError("User")
    event = None
    if data.event_id is not None:
        event = await db.get(Event, data.event_id)
        if event is None:
            raise NotFoundError("Event")

    notification = notify(
        db,
        user_id=data.user_id,
        type=data.type,
        title=data.title,
        message=data.message,
        event=event,
        booking_id=data.booking_id,
        action_url=data.action_url,
    )
    await db.flush()
    logger.info("notification_created", notification_id=notification.id, user_id=data.user_id, type=data.type.value)
    return notification


async def list_user_notifications(db: AsyncSession, user_id: int, include_read: bool = False) -> list[Notification]:
    query = select(Notification).where(Notification.user_id == user_id)
    if not include_read:
        query = query.where(Notification.is_read.is_(False))
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_unread(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
    )
    return result.scalar_one()


async def get_owned_notification(db: AsyncSession, notification_id: int, user_id: int) -> Notification:
    notification = await db.get(Notification, notification_id)
    if notification is None:
        raise NotFoundError("Notification")
    if notification.user_id != user_id:
        raise PermissionDeniedError("You do not have access to this notification.")
    return notification


async def mark_read(db: AsyncSession, notification_id: int, user_id: int) -> Notification:
    notification = await get_owned_notification(db, notification_id, user_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = datetime.now(timezone.utc)
        await db.flush()
    return notification


async def mark_all_read(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(Notification).where(Notification.user_id == user_id, Notification.is_read.is_(False))
    )
    unread = list(result.scalars().all())
    now = datetime.now(timezone.utc)
    for notification in unread:
        notification.is_read = True
        notification.read_at = now
    await db.flush()
    logger.info("notifications_marked_read", user_id=user_id, count=len(unread))
    return len(unread)


async def delete_notification(db: AsyncSession, notification_id: int, user_id: int) -> None:
    notification = await get_owned_notification(db, notification_id, user_id)
    await db.delete(notification)
    await db.flush()


async def clear_all(db: AsyncSession, user_id: int) -> int:
    count = (
        await db.execute(select(func.count(Notification.id)).where(Notification.user_id == user_id))
    ).scalar_one()
    await db.execute(
        delete(Notification)
        .where(Notification.user_id == user_id)
        .execution_options(synchronize_session="fetch")
    )
    logger.info("notifications_cleared", user_id=user_id, count=count)
    return count
