"""
Password hashing and bearer-token request dependencies.
"""

from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.config import get_settings
from eventra.core.logging import get_logger
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.services.token_service import TokenService

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache()
def get_token_service() -> TokenService:
    return TokenService(get_settings().token_config())


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()[:50]
    return request.client.host if request.client else None


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: AsyncSession,
    tokens: TokenService,
) -> Optional[User]:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    claims = tokens.verify(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid or expired token.")
    user = await db.get(User, claims.user_id)
    if user is None or not user.is_active:
        logger.warning("token_user_rejected", user_id=claims.user_id)
        raise _unauthorized("User not found.")
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    user = await _resolve_user(credentials, db, tokens)
    if user is None:
        raise _unauthorized("Not authenticated.")
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[User]:
    """Current user when a token is presented, None for anonymous requests."""
    return await _resolve_user(credentials, db, tokens)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        logger.warning("admin_required", user_id=user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required.",
        )
    return user
