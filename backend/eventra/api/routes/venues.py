"""
Venue endpoints. Reads are public; writes require authentication.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import get_current_user
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.venue import VenueCreate, VenueResponse
from eventra.services import venue_service

router = APIRouter(prefix="/Venues", tags=["Venues"])


@router.get("", response_model=list[VenueResponse])
async def list_venues(
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
):
    return await venue_service.list_venues(db, include_inactive)


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(venue_id: int, db: AsyncSession = Depends(get_db)):
    return await venue_service.get_venue_response(db, venue_id)


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    data: VenueCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    venue = await venue_service.create_venue(db, data, user)
    return venue_service.to_response(venue)


@router.put("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_venue(
    venue_id: int,
    data: VenueCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await venue_service.update_venue(db, venue_id, data, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{venue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={200: {"model": MessageResponse, "description": "Venue deactivated instead of deleted"}},
)
async def delete_venue(
    venue_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a venue, or deactivate it when events still reference it."""
    if not await venue_service.delete_venue(db, venue_id, user):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "Venue deactivated (has associated events)."},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
