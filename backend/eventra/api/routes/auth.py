"""
Authentication endpoints: register, login, token refresh and logout.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import client_ip, get_current_user, get_token_service
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.user import LoginRequest, LoginResponse, RefreshRequest, RegisterRequest
from eventra.services import auth_service
from eventra.services.token_service import TokenService

router = APIRouter(prefix="/Auth", tags=["Authentication"])


def _login_response(pair: auth_service.TokenPair) -> LoginResponse:
    return LoginResponse(
        token=pair.access_token,
        user_id=pair.user.id,
        refresh_token=pair.refresh_token,
        expires_at=pair.expires_at,
    )


@router.post("/Register", response_model=MessageResponse)
async def register(data: RegisterRequest, request: Request, db: AsyncSession = Depends(get_db)):
    """Register a new user account."""
    await auth_service.register_user(db, data, ip_address=client_ip(request))
    return MessageResponse(message="User registered successfully. Please log in.")


@router.post("/Login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Authenticate with e-mail (or username) and password."""
    pair = await auth_service.authenticate_user(db, data, tokens, ip_address=client_ip(request))
    return _login_response(pair)


@router.post("/Refresh", response_model=LoginResponse)
async def refresh(
    data: RefreshRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange a refresh token for a new token pair. The old refresh token is revoked."""
    pair = await auth_service.refresh_tokens(db, data.refresh_token, tokens, ip_address=client_ip(request))
    return _login_response(pair)


@router.post("/Logout", response_model=MessageResponse)
async def logout(
    data: RefreshRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.logout(db, data.refresh_token, user, ip_address=client_ip(request))
    return MessageResponse(message="Logged out successfully.")
