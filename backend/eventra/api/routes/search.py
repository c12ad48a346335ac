"""
Event search endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.db.session import get_db
from eventra.schemas.event import SearchResultResponse
from eventra.services import event_service

router = APIRouter(prefix="/Search", tags=["Search"])


@router.get("", response_model=list[SearchResultResponse])
async def search_events(
    term: Optional[str] = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    """
    Case-insensitive search over title, location and description, ordered
    by date. A blank term returns every event; no match is a 404.
    """
    return await event_service.search_events(db, term)
