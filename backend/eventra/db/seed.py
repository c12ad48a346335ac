"""
Demo data for local development.

Run on startup when SEED_DEMO_DATA=true, or directly:

    python -m eventra.db.seed

Every group is skipped when its table already has rows, so the seeder can
run against an existing database.
"""

import asyncio
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.logging import get_logger, setup_logging
from eventra.core.security import hash_password
from eventra.db.base import utcnow
from eventra.db.session import AsyncSessionLocal
from eventra.models.enums import EventCategory, EventStatus, UserRole
from eventra.models.event import Event
from eventra.models.menu import Menu
from eventra.models.user import User
from eventra.models.venue import Venue

logger = get_logger(__name__)

ADMIN_EMAIL = "dev@eventra.local"
ADMIN_PASSWORD = "Dev@12345!"
USER_PASSWORD = "User@12345!"

SAMPLE_USERS = [
    ("john.doe", "john.doe@example.com", "John", "Doe"),
    ("jane.smith", "jane.smith@example.com", "Jane", "Smith"),
]

VENUES = [
    dict(
        name="Grand Conference Center", address="123 Main Street", city="New York", state="NY",
        postal_code="10001", capacity=500, contact_email="info@grandconference.com",
        description="Modern conference center with state-of-the-art facilities",
        price_per_hour=Decimal("250.00"),
    ),
    dict(
        name="Downtown Event Space", address="456 Oak Avenue", city="Los Angeles", state="CA",
        postal_code="90001", capacity=200, contact_email="bookings@downtownevents.com",
        description="Elegant event space in the heart of downtown",
        price_per_hour=Decimal("150.00"),
    ),
    dict(
        name="Riverside Gardens", address="789 River Road", city="Chicago", state="IL",
        postal_code="60601", capacity=150, contact_email="events@riversidegardens.com",
        description="Beautiful outdoor venue with garden setting",
        price_per_hour=Decimal("180.00"),
    ),
]

# (venue index, days from now, fields)
EVENTS = [
    (0, 30, dict(
        title="Tech Conference", location="Grand Conference Center", max_attendees=500,
        description="Annual technology conference with talks, workshops and networking.",
        category=EventCategory.CONFERENCE, ticket_price=Decimal("299.99"), is_free=False,
        organizer_name="Tech Events Inc",
    )),
    (1, 7, dict(
        title="Community Meetup - Web Development", location="Downtown Event Space", max_attendees=50,
        description="Monthly meetup for web developers to share knowledge and network.",
        category=EventCategory.MEETUP, is_free=True, organizer_name="Dev Community",
    )),
    (0, 60, dict(
        title="Annual Charity Gala", location="Grand Conference Center", max_attendees=300,
        description="Charity gala supporting local education initiatives. Formal attire required.",
        category=EventCategory.CORPORATE, ticket_price=Decimal("150.00"), is_free=False,
        requires_approval=True, organizer_name="Education Foundation",
    )),
    (2, 90, dict(
        title="Summer Music Festival", location="Riverside Gardens", max_attendees=1000,
        description="Outdoor music festival with local and international artists.",
        category=EventCategory.FESTIVAL, ticket_price=Decimal("89.99"), is_free=False,
        organizer_name="Live Music Events",
    )),
]

# (event title, fields)
MENUS = [
    ("Tech Conference", dict(
        name="Standard Conference Package", category="Catering", price_per_person=Decimal("45.00"),
        minimum_guests=50, description="Breakfast pastries, buffet lunch and afternoon snacks.",
        allergen_info="Contains gluten, dairy, nuts",
    )),
    ("Tech Conference", dict(
        name="Premium Vegan Package", category="Catering", price_per_person=Decimal("55.00"),
        minimum_guests=25, is_vegetarian=True, is_vegan=True, is_gluten_free=True,
        description="Plant-based cuisine with organic ingredients.",
        allergen_info="May contain tree nuts",
    )),
    ("Annual Charity Gala", dict(
        name="Gala Dinner - Classic", category="Fine Dining", price_per_person=Decimal("85.00"),
        minimum_guests=100, description="Three-course plated dinner with wine pairing.",
        allergen_info="Contains gluten, dairy, shellfish",
    )),
]


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


async def _seed_users(db: AsyncSession) -> User:
    admin = (await db.execute(select(User).where(User.email == ADMIN_EMAIL))).scalar_one_or_none()
    if admin is None:
        admin = User(
            email=ADMIN_EMAIL,
            username="devadmin",
            first_name="Dev",
            second_name="Admin",
            hashed_password=hash_password(ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
        db.add(admin)

    for username, email, first_name, second_name in SAMPLE_USERS:
        exists = (await db.execute(select(User.id).where(User.email == email))).first()
        if exists is None:
            db.add(User(
                email=email,
                username=username,
                first_name=first_name,
                second_name=second_name,
                hashed_password=hash_password(USER_PASSWORD),
            ))

    await db.flush()
    return admin


async def seed_demo_data(db: AsyncSession) -> None:
    admin = await _seed_users(db)

    if await _count(db, Venue) == 0:
        db.add_all(Venue(**fields) for fields in VENUES)
        await db.flush()
        logger.info("seeded_venues", count=len(VENUES))

    if await _count(db, Event) == 0:
        venues = list((await db.execute(select(Venue).order_by(Venue.id))).scalars().all())
        now = utcnow()
        for venue_index, days, fields in EVENTS:
            db.add(Event(
                **fields,
                date=now + timedelta(days=days),
                status=EventStatus.PUBLISHED,
                venue_id=venues[venue_index].id if venue_index < len(venues) else None,
                created_by=admin.id,
            ))
        await db.flush()
        logger.info("seeded_events", count=len(EVENTS))

    if await _count(db, Menu) == 0:
        events = {e.title: e.id for e in (await db.execute(select(Event))).scalars().all()}
        menus = [Menu(event_id=events.get(title), **fields) for title, fields in MENUS]
        db.add_all(menus)
        await db.flush()
        logger.info("seeded_menus", count=len(menus))

    logger.info("demo_data_ready", admin=ADMIN_EMAIL)


async def _main() -> None:
    setup_logging()
    async with AsyncSessionLocal() as session:
        await seed_demo_data(session)
        await session.commit()


if __name__ == "__main__":
    asyncio.run(_main())
