from eventra.schemas.attendee import EventAttendeeResponse, RegisterEventRequest
from eventra.schemas.audit import AuditLogResponse
from eventra.schemas.base import CamelModel, MessageResponse, Money
from eventra.schemas.booking import BookingCreate, BookingResponse, PaymentRequest, PaymentResponse
from eventra.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from eventra.schemas.event import EventCreate, EventResponse, EventUpdate, SearchResultResponse
from eventra.schemas.menu import MenuCreate, MenuResponse
from eventra.schemas.notification import NotificationCreate, NotificationResponse, UnreadCountResponse
from eventra.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from eventra.schemas.venue import VenueCreate, VenueResponse

__all__ = [
    "CamelModel", "MessageResponse", "Money",
    "RegisterRequest", "LoginRequest", "LoginResponse", "UserResponse",
    "EventCreate", "EventUpdate", "EventResponse", "SearchResultResponse",
    "BookingCreate", "BookingResponse", "PaymentRequest", "PaymentResponse",
    "RegisterEventRequest", "EventAttendeeResponse",
    "VenueCreate", "VenueResponse",
    "MenuCreate", "MenuResponse",
    "NotificationCreate", "NotificationResponse", "UnreadCountResponse",
    "ClientCreate", "ClientUpdate", "ClientResponse",
    "AuditLogResponse",
]
