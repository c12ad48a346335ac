"""
CRM client endpoints. All routes require authentication.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import get_current_user
from eventra.db.session import get_db
from eventra.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from eventra.services import client_service

router = APIRouter(
    prefix="/Clients",
    tags=["Clients"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[ClientResponse])
async def list_clients(db: AsyncSession = Depends(get_db)):
    """Active clients, newest first."""
    return await client_service.list_active(db)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: int, db: AsyncSession = Depends(get_db)):
    return await client_service.get_client(db, client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(data: ClientCreate, db: AsyncSession = Depends(get_db)):
    return await client_service.create_client(db, data)


@router.put("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_client(client_id: int, data: ClientUpdate, db: AsyncSession = Depends(get_db)):
    await client_service.update_client(db, client_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int, db: AsyncSession = Depends(get_db)):
    await client_service.delete_client(db, client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
