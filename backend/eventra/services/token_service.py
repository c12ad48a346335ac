"""
Token issuance and verification.

Access tokens are signed JWTs carrying the user's identity claims.
Refresh tokens are opaque random strings persisted by the auth service.
Everything the service needs comes from the TokenConfig passed in at
construction; nothing is read from global settings here.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from eventra.core.config import TokenConfig
from eventra.core.logging import get_logger

logger = get_logger(__name__)

EMAIL_CHANGE_PURPOSE = "email_change"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    given_name: str
    family_name: str
    role: str
    expires_at: datetime


@dataclass(frozen=True)
class IssuedRefreshToken:
    token: str
    expires_at: datetime


class TokenService:
    def __init__(self, config: TokenConfig):
        self._config = config

    def create_access_token(self, user, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "given_name": user.first_name,
            "family_name": user.second_name,
            "role": getattr(user.role, "value", user.role),
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": int(now.timestamp()),
            "exp": now + timedelta(days=self._config.access_token_expire_days),
        }
        return jwt.encode(claims, self._config.secret_key, algorithm=self._config.algorithm)

    def access_token_expiry(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        return now + timedelta(days=self._config.access_token_expire_days)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """Return the token's claims, or None if it is invalid or expired."""
        payload = self._decode(token)
        if payload is None or payload.get("purpose"):
            return None
        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            logger.warning("token_rejected", reason="bad_subject")
            return None
        return TokenClaims(
            user_id=user_id,
            email=payload.get("email", ""),
            given_name=payload.get("given_name", ""),
            family_name=payload.get("family_name", ""),
            role=payload.get("role", "user"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    def create_refresh_token(self, now: Optional[datetime] = None) -> IssuedRefreshToken:
        now = now or datetime.now(timezone.utc)
        return IssuedRefreshToken(
            token=secrets.token_urlsafe(64),
            expires_at=now + timedelta(days=self._config.refresh_token_expire_days),
        )

    def create_email_change_token(self, user, new_email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "new_email": new_email,
            "purpose": EMAIL_CHANGE_PURPOSE,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": int(now.timestamp()),
            "exp": now + timedelta(hours=self._config.email_change_token_expire_hours),
        }
        return jwt.encode(claims, self._config.secret_key, algorithm=self._config.algorithm)

    def verify_email_change_token(self, token: str) -> Optional[tuple[int, str]]:
        """Return (user_id, new_email) for a valid e-mail change token."""
        payload = self._decode(token)
        if payload is None or payload.get("purpose") != EMAIL_CHANGE_PURPOSE:
            return None
        try:
            return int(payload["sub"]), payload["new_email"]
        except (KeyError, TypeError, ValueError):
            return None

    def _decode(self, token: str) -> Optional[dict]:
        try:
            return jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
            )
        except JWTError as e:
            logger.warning("token_rejected", reason=str(e))
            return None
