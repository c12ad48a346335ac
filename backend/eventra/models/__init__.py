from eventra.models.audit_log import AuditLog
from eventra.models.booking import Booking
from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.event_attendee import EventAttendee
from eventra.models.menu import Menu
from eventra.models.notification import Notification
from eventra.models.refresh_token import RefreshToken
from eventra.models.user import User
from eventra.models.venue import Venue

__all__ = [
    "AuditLog", "Booking", "Client", "Event", "EventAttendee",
    "Menu", "Notification", "RefreshToken", "User", "Venue",
]
