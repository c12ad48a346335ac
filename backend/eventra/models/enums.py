"""
Enumerations shared by models and schemas.

Values are the wire/storage names ("Pending", "CheckedIn", ...).
"""

import enum

from sqlalchemy import Enum as SAEnum


class EventCategory(str, enum.Enum):
    CONFERENCE = "Conference"
    WORKSHOP = "Workshop"
    SEMINAR = "Seminar"
    MEETUP = "Meetup"
    CONCERT = "Concert"
    EXHIBITION = "Exhibition"
    WEDDING = "Wedding"
    BIRTHDAY = "Birthday"
    CORPORATE = "Corporate"
    SPORTS = "Sports"
    FESTIVAL = "Festival"
    OTHER = "Other"


class EventStatus(str, enum.Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    POSTPONED = "Postponed"


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
    REFUNDED = "Refunded"


class AttendeeStatus(str, enum.Enum):
    REGISTERED = "Registered"
    CHECKED_IN = "CheckedIn"
    CANCELLED = "Cancelled"
    NO_SHOW = "NoShow"


class NotificationType(str, enum.Enum):
    EVENT_REMINDER = "EventReminder"
    EVENT_UPDATE = "EventUpdate"
    EVENT_CANCELLATION = "EventCancellation"
    REGISTRATION_CONFIRMATION = "RegistrationConfirmation"
    PAYMENT_CONFIRMATION = "PaymentConfirmation"
    BOOKING_CANCELLED = "BookingCancelled"
    NEW_EVENT_CREATED = "NewEventCreated"
    SYSTEM_ANNOUNCEMENT = "SystemAnnouncement"


class AuditAction(str, enum.Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    LOGIN = "Login"
    LOGOUT = "Logout"
    REGISTRATION = "Registration"
    BOOKING_CREATED = "BookingCreated"
    BOOKING_CANCELLED = "BookingCancelled"
    CHECK_IN = "CheckIn"
    PAYMENT_RECEIVED = "PaymentReceived"


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


def enum_type(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """VARCHAR-backed enum column storing member values."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
