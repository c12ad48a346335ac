"""
Catering menu service.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import NotFoundError
from eventra.core.logging import get_logger
from eventra.models.event import Event
from eventra.models.menu import Menu
from eventra.schemas.menu import MenuCreate

logger = get_logger(__name__)


async def list_available(db: AsyncSession) -> list[Menu]:
    result = await db.execute(
        select(Menu).where(Menu.is_available.is_(True)).order_by(Menu.name.asc(), Menu.id.asc())
    )
    return list(result.scalars().all())


async def list_for_event(db: AsyncSession, event_id: int) -> list[Menu]:
    """Available menus of an event; an unknown event simply has none."""
    if await db.get(Event, event_id) is None:
        return []
    result = await db.execute(
        select(Menu)
        .where(Menu.event_id == event_id, Menu.is_available.is_(True))
        .order_by(Menu.name.asc(), Menu.id.asc())
    )
    return list(result.scalars().all())


async def get_menu(db: AsyncSession, menu_id: int) -> Menu:
    menu = await db.get(Menu, menu_id)
    if menu is None:
        raise NotFoundError("Menu")
    return menu


async def _require_event(db: AsyncSession, event_id) -> None:
    if event_id is not None and await db.get(Event, event_id) is None:
        raise NotFoundError("Event")


async def create_menu(db: AsyncSession, data: MenuCreate) -> Menu:
    await _require_event(db, data.event_id)
    menu = Menu(**data.model_dump(), is_available=True)
    db.add(menu)
    await db.flush()

    logger.info("menu_created", menu_id=menu.id, event_id=menu.event_id, name=menu.name)
    return menu


async def update_menu(db: AsyncSession, menu_id: int, data: MenuCreate) -> Menu:
    menu = await get_menu(db, menu_id)
    await _require_event(db, data.event_id)
    for field, value in data.model_dump().items():
        setattr(menu, field, value)
    await db.flush()

    logger.info("menu_updated", menu_id=menu.id)
    return menu


async def delete_menu(db: AsyncSession, menu_id: int) -> None:
    menu = await get_menu(db, menu_id)
    await db.delete(menu)
    await db.flush()
    logger.info("menu_deleted", menu_id=menu_id)


async def set_availability(db: AsyncSession, menu_id: int, is_available: bool) -> Menu:
    menu = await get_menu(db, menu_id)
    menu.is_available = is_available
    await db.flush()

    logger.info("menu_availability_changed", menu_id=menu.id, is_available=is_available)
    return menu
