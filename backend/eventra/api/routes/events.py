"""
Event endpoints with Redis caching on list operations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.logging import get_logger
from eventra.core.security import client_ip, get_current_user, get_optional_user
from eventra.db.session import get_db
from eventra.models.enums import EventCategory, EventStatus
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.event import EventCreate, EventResponse, EventUpdate
from eventra.services import event_service
from eventra.services.cache_service import get_cached_events, invalidate_event_cache, set_cached_events

logger = get_logger(__name__)
router = APIRouter(prefix="/Event", tags=["Events"])


@router.get("", response_model=list[EventResponse])
async def list_events(
    category: Optional[EventCategory] = Query(None),
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    upcoming: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    """
    List events ordered by date.
    Results are cached in Redis; any event, booking or registration write
    invalidates the cache.
    """
    category_key = category.value if category else None
    status_key = status_filter.value if status_filter else None

    cached = await get_cached_events(category_key, status_key, upcoming)
    if cached is not None:
        logger.info("events_list_cache_hit", category=category_key, status=status_key, upcoming=upcoming)
        return cached

    events = await event_service.list_events(db, category, status_filter, upcoming)
    response = [EventResponse.from_event(e) for e in events]

    await set_cached_events(
        category_key,
        status_key,
        upcoming,
        [r.model_dump(mode="json", by_alias=True) for r in response],
    )
    return response


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a single event. Not cached (needs real-time seat counts)."""
    event = await event_service.get_event(db, event_id)
    registered = False
    if user is not None:
        registered = await event_service.is_user_registered(db, event.id, user.id)
    return EventResponse.from_event(event, is_user_registered=registered)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event in Draft status. Requires authentication."""
    event = await event_service.create_event(db, data, user, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    return EventResponse.from_event(event)


@router.put("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_event(
    event_id: int,
    data: EventUpdate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partially update an event. Creator or admin only."""
    await event_service.update_event(db, event_id, data, user, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={200: {"model": MessageResponse, "description": "Event cancelled instead of deleted"}},
)
async def delete_event(
    event_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an event. Events with bookings or registrations are cancelled
    instead and a 200 with a message is returned.
    """
    deleted = await event_service.delete_event(db, event_id, user, ip_address=client_ip(request))
    await db.commit()
    await invalidate_event_cache()
    if not deleted:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "Event cancelled (has active registrations/bookings)."},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
