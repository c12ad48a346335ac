"""
Venue service. Venues still referenced by events are deactivated, not deleted.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import NotFoundError
from eventra.core.logging import get_logger
from eventra.models.enums import AuditAction
from eventra.models.event import Event
from eventra.models.user import User
from eventra.models.venue import Venue
from eventra.schemas.venue import VenueCreate, VenueResponse
from eventra.services.audit_service import record_audit

logger = get_logger(__name__)


def _event_count_query():
    return (
        select(Event.venue_id, func.count(Event.id))
        .where(Event.venue_id.is_not(None))
        .group_by(Event.venue_id)
    )


def to_response(venue: Venue, event_count: int = 0) -> VenueResponse:
    response = VenueResponse.model_validate(venue)
    response.event_count = event_count
    return response


async def list_venues(db: AsyncSession, include_inactive: bool = False) -> list[VenueResponse]:
    query = select(Venue)
    if not include_inactive:
        query = query.where(Venue.is_active.is_(True))
    result = await db.execute(query.order_by(Venue.name.asc(), Venue.id.asc()))
    venues = list(result.scalars().all())

    counts = dict((await db.execute(_event_count_query())).all())
    return [to_response(v, counts.get(v.id, 0)) for v in venues]


async def get_venue(db: AsyncSession, venue_id: int) -> Venue:
    venue = await db.get(Venue, venue_id)
    if venue is None:
        raise NotFoundError("Venue")
    return venue


async def count_events(db: AsyncSession, venue_id: int) -> int:
    result = await db.execute(select(func.count(Event.id)).where(Event.venue_id == venue_id))
    return result.scalar_one()


async def get_venue_response(db: AsyncSession, venue_id: int) -> VenueResponse:
    venue = await get_venue(db, venue_id)
    return to_response(venue, await count_events(db, venue_id))


async def create_venue(db: AsyncSession, data: VenueCreate, user: User) -> Venue:
    venue = Venue(**data.model_dump(), is_active=True)
    db.add(venue)
    await db.flush()

    record_audit(db, "Venue", venue.id, AuditAction.CREATE, user=user, details=venue.name)
    await db.flush()

    logger.info("venue_created", venue_id=venue.id, name=venue.name, capacity=venue.capacity)
    return venue


async def update_venue(db: AsyncSession, venue_id: int, data: VenueCreate, user: User) -> Venue:
    venue = await get_venue(db, venue_id)
    for field, value in data.model_dump().items():
        setattr(venue, field, value)

    record_audit(db, "Venue", venue.id, AuditAction.UPDATE, user=user)
    await db.flush()

    logger.info("venue_updated", venue_id=venue.id)
    return venue


async def delete_venue(db: AsyncSession, venue_id: int, user: User) -> bool:
    """Hard delete when unused. Returns False when the venue was only deactivated."""
    venue = await get_venue(db, venue_id)

    if await count_events(db, venue_id) > 0:
        venue.is_active = False
        record_audit(db, "Venue", venue.id, AuditAction.UPDATE, user=user, details="Deactivated on delete")
        await db.flush()
        logger.info("venue_deactivated", venue_id=venue.id)
        return False

    await db.delete(venue)
    record_audit(db, "Venue", venue_id, AuditAction.DELETE, user=user)
    await db.flush()
    logger.info("venue_deleted", venue_id=venue_id)
    return True
