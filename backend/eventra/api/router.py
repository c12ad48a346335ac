"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from eventra.api.routes import (
    attendees,
    audit,
    auth,
    bookings,
    clients,
    events,
    menus,
    notifications,
    profile,
    search,
    venues,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(profile.router)
api_router.include_router(events.router)
api_router.include_router(venues.router)
api_router.include_router(menus.router)
api_router.include_router(bookings.router)
api_router.include_router(attendees.router)
api_router.include_router(notifications.router)
api_router.include_router(clients.router)
api_router.include_router(search.router)
api_router.include_router(audit.router)
