"""
CRM client service.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import BusinessRuleError, NotFoundError
from eventra.core.logging import get_logger
from eventra.models.client import Client
from eventra.schemas.client import ClientCreate, ClientUpdate

logger = get_logger(__name__)


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: Optional[int] = None) -> None:
    query = select(Client.id).where(Client.email == email)
    if exclude_id is not None:
        query = query.where(Client.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise BusinessRuleError("A client with this email already exists.")


async def list_active(db: AsyncSession) -> list[Client]:
    result = await db.execute(
        select(Client)
        .where(Client.is_active.is_(True))
        .order_by(Client.date_registered.desc(), Client.id.desc())
    )
    return list(result.scalars().all())


async def get_client(db: AsyncSession, client_id: int) -> Client:
    client = await db.get(Client, client_id)
    if client is None:
        raise NotFoundError("Client")
    return client


async def create_client(db: AsyncSession, data: ClientCreate) -> Client:
    email = data.email.lower()
    await _ensure_email_free(db, email)

    client = Client(**data.model_dump(exclude={"email"}), email=email, is_active=True)
    db.add(client)
    await db.flush()

    logger.info("client_created", client_id=client.id)
    return client


async def update_client(db: AsyncSession, client_id: int, data: ClientUpdate) -> Client:
    client = await get_client(db, client_id)
    email = data.email.lower()
    await _ensure_email_free(db, email, exclude_id=client.id)

    for field, value in data.model_dump(exclude={"email"}).items():
        setattr(client, field, value)
    client.email = email
    await db.flush()

    logger.info("client_updated", client_id=client.id)
    return client


async def delete_client(db: AsyncSession, client_id: int) -> None:
    client = await get_client(db, client_id)
    await db.delete(client)
    await db.flush()
    logger.info("client_deleted", client_id=client_id)
