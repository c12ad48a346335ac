"""
Catering menu endpoints.
"""

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import get_current_user
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.menu import MenuCreate, MenuResponse
from eventra.services import menu_service

router = APIRouter(prefix="/Menus", tags=["Menus"])


@router.get("", response_model=list[MenuResponse])
async def list_menus(db: AsyncSession = Depends(get_db)):
    """Available catalog menus."""
    return await menu_service.list_available(db)


@router.get("/event/{event_id}", response_model=list[MenuResponse])
async def list_event_menus(event_id: int, db: AsyncSession = Depends(get_db)):
    return await menu_service.list_for_event(db, event_id)


@router.get("/{menu_id}", response_model=MenuResponse)
async def get_menu(menu_id: int, db: AsyncSession = Depends(get_db)):
    return await menu_service.get_menu(db, menu_id)


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
async def create_menu(
    data: MenuCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await menu_service.create_menu(db, data)


@router.put("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_menu(
    menu_id: int,
    data: MenuCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await menu_service.update_menu(db, menu_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu(
    menu_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await menu_service.delete_menu(db, menu_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{menu_id}/availability", response_model=MessageResponse)
async def set_availability(
    menu_id: int,
    is_available: bool = Body(...),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Enable or disable a menu. The body is a bare JSON boolean."""
    await menu_service.set_availability(db, menu_id, is_available)
    return MessageResponse(message=f"Menu {'enabled' if is_available else 'disabled'} successfully.")
