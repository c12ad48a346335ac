"""
Profile endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.security import client_ip, get_current_user, get_token_service
from eventra.db.session import get_db
from eventra.models.user import User
from eventra.schemas.base import MessageResponse
from eventra.schemas.user import ProfileResponse, ProfileUpdate
from eventra.services import profile_service
from eventra.services.token_service import TokenService

router = APIRouter(prefix="/Profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return profile_service.to_profile(user)


@router.put("", response_model=MessageResponse)
async def update_profile(
    data: ProfileUpdate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update names, username and avatar. The e-mail address cannot be changed here."""
    await profile_service.update_profile(db, user, data, ip_address=client_ip(request))
    return MessageResponse(message="Profile updated successfully")


@router.post("/request-email-change", response_model=MessageResponse)
async def request_email_change(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Start an e-mail change; the confirmation token is delivered out of band."""
    await profile_service.request_email_change(db, user, data.user_mail, tokens)
    return MessageResponse(message="Confirmation link sent to the new email address.")


@router.post("/confirm-email-change", response_model=MessageResponse)
async def confirm_email_change(
    token: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    await profile_service.confirm_email_change(db, token, tokens)
    return MessageResponse(message="Email address successfully updated and confirmed.")
