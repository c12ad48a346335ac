"""
Profile service: self-service edits of the signed-in user's account.

E-mail changes go through a signed confirmation token; the plain profile
update refuses to touch the address.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import BusinessRuleError
from eventra.core.logging import get_logger
from eventra.models.enums import AuditAction
from eventra.models.user import User
from eventra.schemas.user import ProfileResponse, ProfileUpdate
from eventra.services.audit_service import record_audit
from eventra.services.token_service import TokenService

logger = get_logger(__name__)


def to_profile(user: User) -> ProfileResponse:
    return ProfileResponse(
        first_name=user.first_name,
        second_name=user.second_name,
        user_name=user.username,
        user_mail=user.email,
        profile_image_base64=user.profile_image_base64,
    )


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate, ip_address: Optional[str] = None) -> User:
    if data.user_mail is not None and data.user_mail.lower() != user.email:
        raise BusinessRuleError("Email change must be initiated via the secure 'request-email-change' endpoint.")

    if data.user_name is not None and data.user_name != user.username:
        taken = await db.execute(select(User.id).where(User.username == data.user_name, User.id != user.id))
        if taken.first() is not None:
            raise BusinessRuleError("Username is already taken.")
        user.username = data.user_name

    if data.first_name is not None:
        user.first_name = data.first_name
    if data.second_name is not None:
        user.second_name = data.second_name
    if data.profile_image_base64 is not None:
        user.profile_image_base64 = data.profile_image_base64 or None

    record_audit(db, "User", user.id, AuditAction.UPDATE, user=user, details="Profile updated", ip_address=ip_address)
    await db.flush()

    logger.info("profile_updated", user_id=user.id)
    return user


async def request_email_change(db: AsyncSession, user: User, new_email: Optional[str], tokens: TokenService) -> str:
    """Issue an e-mail change token. Delivery is out of band."""
    if not new_email:
        raise BusinessRuleError("New email address must be provided in the UserMail field.")
    new_email = new_email.lower()
    if new_email == user.email:
        raise BusinessRuleError("New email is the same as the current email.")

    taken = await db.execute(select(User.id).where(User.email == new_email))
    if taken.first() is not None:
        raise BusinessRuleError("Email is already in use.")

    token = tokens.create_email_change_token(user, new_email)
    logger.info("email_change_requested", user_id=user.id)
    return token


async def confirm_email_change(db: AsyncSession, token: str, tokens: TokenService) -> User:
    verified = tokens.verify_email_change_token(token)
    if verified is None:
        raise BusinessRuleError("Email change confirmation failed.")
    user_id, new_email = verified

    user = await db.get(User, user_id)
    if user is None:
        raise BusinessRuleError("User not found.")

    taken = await db.execute(select(User.id).where(User.email == new_email, User.id != user.id))
    if taken.first() is not None:
        raise BusinessRuleError("Email change confirmation failed.")

    old_email = user.email
    if user.username == old_email:
        user.username = new_email
    user.email = new_email
    record_audit(db, "User", user.id, AuditAction.UPDATE, user=user, details="Email changed")
    await db.flush()

    logger.info("email_changed", user_id=user.id)
    return user
