"""
Unit tests for TokenService.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from jose import jwt

from eventra.core.config import get_settings
from eventra.services.token_service import TokenService

CONFIG = get_settings().token_config()
USER = SimpleNamespace(id=7, email="ada@example.com", first_name="Ada", second_name="Lovelace", role="admin")


def test_access_token_round_trip():
    service = TokenService(CONFIG)
    claims = service.verify(service.create_access_token(USER))

    assert claims is not None
    assert claims.user_id == 7
    assert claims.email == "ada@example.com"
    assert claims.given_name == "Ada"
    assert claims.family_name == "Lovelace"
    assert claims.role == "admin"


def test_access_token_carries_issuer_and_audience():
    token = TokenService(CONFIG).create_access_token(USER)
    payload = jwt.get_unverified_claims(token)
    assert payload["iss"] == CONFIG.issuer
    assert payload["aud"] == CONFIG.audience
    assert jwt.get_unverified_header(token)["alg"] == CONFIG.algorithm


def test_expired_access_token_rejected():
    service = TokenService(CONFIG)
    issued_long_ago = datetime.now(timezone.utc) - timedelta(days=CONFIG.access_token_expire_days + 1)
    assert service.verify(service.create_access_token(USER, now=issued_long_ago)) is None


def test_token_from_other_key_rejected():
    forged = TokenService(replace(CONFIG, secret_key="x" * 64)).create_access_token(USER)
    assert TokenService(CONFIG).verify(forged) is None


def test_wrong_audience_rejected():
    other_app = TokenService(replace(CONFIG, audience="someone-else")).create_access_token(USER)
    assert TokenService(CONFIG).verify(other_app) is None


def test_refresh_tokens_are_unique_and_expire_later():
    service = TokenService(CONFIG)
    now = datetime.now(timezone.utc)
    first = service.create_refresh_token(now)
    second = service.create_refresh_token(now)

    assert first.token != second.token
    assert first.expires_at == now + timedelta(days=CONFIG.refresh_token_expire_days)


def test_email_change_token_is_not_an_access_token():
    service = TokenService(CONFIG)
    token = service.create_email_change_token(USER, "new@example.com")

    assert service.verify_email_change_token(token) == (7, "new@example.com")
    assert service.verify(token) is None
    assert service.verify_email_change_token(service.create_access_token(USER)) is None
