"""
Authentication service handling registration, login and refresh-token rotation.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventra.core.errors import AuthenticationError, BusinessRuleError, PermissionDeniedError
from eventra.core.logging import get_logger
from eventra.core.security import hash_password, verify_password
from eventra.models.enums import AuditAction, UserRole
from eventra.models.refresh_token import RefreshToken
from eventra.models.user import User
from eventra.schemas.user import LoginRequest, RegisterRequest
from eventra.services.audit_service import record_audit
from eventra.services.token_service import TokenService

logger = get_logger(__name__)


@dataclass
class TokenPair:
    user: User
    access_token: str
    refresh_token: str
    expires_at: datetime


async def register_user(db: AsyncSession, data: RegisterRequest, ip_address: Optional[str] = None) -> User:
    """
    Register a new user with hashed password.
    Username defaults to the e-mail address.
    """
    email = data.email.lower()
    username = data.username or email

    result = await db.execute(select(User.id).where(User.email == email))
    if result.first() is not None:
        logger.warning("registration_failed", reason="email_exists", email=email)
        raise BusinessRuleError("User with this email already exists.")

    result = await db.execute(select(User.id).where(User.username == username))
    if result.first() is not None:
        logger.warning("registration_failed", reason="username_exists", username=username)
        raise BusinessRuleError("Username is already taken.")

    user = User(
        email=email,
        username=username,
        first_name=data.first_name,
        second_name=data.last_name,
        hashed_password=hash_password(data.password),
        role=UserRole.USER,
    )
    db.add(user)
    await db.flush()

    record_audit(db, "User", user.id, AuditAction.CREATE, user=user, ip_address=ip_address)
    await db.flush()

    logger.info("user_registered", user_id=user.id, email=user.email)
    return user


async def _issue_tokens(
    db: AsyncSession,
    user: User,
    tokens: TokenService,
    ip_address: Optional[str],
) -> tuple[TokenPair, RefreshToken]:
    issued = tokens.create_refresh_token()
    refresh = RefreshToken(
        user_id=user.id,
        token=issued.token,
        expires_at=issued.expires_at,
        created_by_ip=ip_address,
    )
    db.add(refresh)
    pair = TokenPair(
        user=user,
        access_token=tokens.create_access_token(user),
        refresh_token=issued.token,
        expires_at=tokens.access_token_expiry(),
    )
    return pair, refresh


async def authenticate_user(
    db: AsyncSession,
    data: LoginRequest,
    tokens: TokenService,
    ip_address: Optional[str] = None,
) -> TokenPair:
    """
    Authenticate by e-mail or username and issue an access/refresh pair.
    Raises 401 if credentials are invalid.
    """
    identifier = (data.email or data.username).strip()
    result = await db.execute(
        select(User).where(or_(User.email == identifier.lower(), User.username == identifier))
    )
    user = result.scalars().first()

    if user is None or not verify_password(data.password, user.hashed_password):
        logger.warning("login_failed", identifier=identifier)
        raise AuthenticationError("Invalid credentials.")

    if not user.is_active:
        logger.warning("login_failed", reason="inactive", user_id=user.id)
        raise PermissionDeniedError("Account is deactivated.")

    user.last_login_at = datetime.now(timezone.utc)
    pair, _ = await _issue_tokens(db, user, tokens, ip_address)
    record_audit(db, "User", user.id, AuditAction.LOGIN, user=user, ip_address=ip_address)
    await db.flush()

    logger.info("user_logged_in", user_id=user.id)
    return pair


async def _load_refresh_token(db: AsyncSession, token: str) -> RefreshToken:
    result = await db.execute(select(RefreshToken).where(RefreshToken.token == token))
    stored = result.scalar_one_or_none()
    if stored is None or not stored.is_active:
        logger.warning("refresh_token_rejected", found=stored is not None)
        raise AuthenticationError("Invalid or expired refresh token.")
    return stored


async def refresh_tokens(
    db: AsyncSession,
    token: str,
    tokens: TokenService,
    ip_address: Optional[str] = None,
) -> TokenPair:
    """Redeem a refresh token: revoke it and issue a new pair."""
    stored = await _load_refresh_token(db, token)
    user = await db.get(User, stored.user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Invalid or expired refresh token.")

    pair, replacement = await _issue_tokens(db, user, tokens, ip_address)
    stored.is_revoked = True
    stored.revoked_at = datetime.now(timezone.utc)
    stored.revoked_by_ip = ip_address
    stored.replaced_by_token = replacement.token
    await db.flush()

    logger.info("refresh_token_rotated", user_id=user.id, token_id=stored.id)
    return pair


async def logout(
    db: AsyncSession,
    token: str,
    user: User,
    ip_address: Optional[str] = None,
) -> None:
    """Revoke the presented refresh token."""
    stored = await _load_refresh_token(db, token)
    if stored.user_id != user.id:
        raise AuthenticationError("Invalid or expired refresh token.")

    stored.is_revoked = True
    stored.revoked_at = datetime.now(timezone.utc)
    stored.revoked_by_ip = ip_address
    record_audit(db, "User", user.id, AuditAction.LOGOUT, user=user, ip_address=ip_address)
    await db.flush()

    logger.info("user_logged_out", user_id=user.id)
