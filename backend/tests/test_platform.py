"""
Tests for health, metrics, error envelopes, audit trail, caching and demo seeding.
"""

import json

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from eventra.db.seed import ADMIN_EMAIL, seed_demo_data
from eventra.models.event import Event
from eventra.models.menu import Menu
from eventra.models.user import User
from eventra.models.venue import Venue
from eventra.services import cache_service


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient, auth_headers, free_event):
    await client.post(
        "/api/Bookings",
        json={"eventId": free_event.id, "numberOfTickets": 1},
        headers=auth_headers,
    )

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'eventra_booking_attempts_total{result="created"}' in response.text


@pytest.mark.asyncio
async def test_unknown_route_uses_message_envelope(client: AsyncClient):
    response = await client.get("/api/DoesNotExist")
    assert response.status_code == 404
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_audit_log_records_booking(client: AsyncClient, auth_headers, admin_headers, free_event):
    booking = (
        await client.post(
            "/api/Bookings",
            json={"eventId": free_event.id, "numberOfTickets": 1},
            headers=auth_headers,
        )
    ).json()

    forbidden = await client.get("/api/AuditLogs", headers=auth_headers)
    assert forbidden.status_code == 403

    response = await client.get("/api/AuditLogs", params={"entityName": "Booking"}, headers=admin_headers)
    assert response.status_code == 200
    entries = response.json()
    assert len(entries) == 1
    assert entries[0]["action"] == "BookingCreated"
    assert entries[0]["entityId"] == str(booking["id"])
    assert entries[0]["userEmail"] == "test@example.com"


class FakeRedis:
    """In-memory stand-in covering the calls the cache service makes."""

    def __init__(self):
        self.store = {}
        self.on_delete = None

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def delete(self, key):
        if self.on_delete is not None:
            self.on_delete()
        self.store.pop(key, None)

    async def scan_iter(self, match=None, count=None):
        prefix = match.rstrip("*")
        for key in list(self.store):
            if key.startswith(prefix):
                yield key


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()

    async def _get_redis():
        return fake

    monkeypatch.setattr(cache_service, "get_redis", _get_redis)
    return fake


def test_event_list_key():
    key = cache_service.make_event_list_key("Concert", None, True)
    assert key == "events:list:category=Concert&status=*&upcoming=True"


@pytest.mark.asyncio
async def test_event_list_served_from_cache(client: AsyncClient, fake_redis, free_event):
    first = await client.get("/api/Event")
    assert [e["id"] for e in first.json()] == [free_event.id]

    key = cache_service.make_event_list_key(None, None, False)
    cached = json.loads(fake_redis.store[key])
    cached[0]["title"] = "From cache"
    fake_redis.store[key] = json.dumps(cached)

    second = await client.get("/api/Event")
    assert second.json()[0]["title"] == "From cache"


@pytest.mark.asyncio
async def test_booking_invalidates_event_list_cache(client: AsyncClient, fake_redis, auth_headers, free_event):
    await client.get("/api/Event")
    assert fake_redis.store

    await client.post(
        "/api/Bookings",
        json={"eventId": free_event.id, "numberOfTickets": 4},
        headers=auth_headers,
    )
    assert fake_redis.store == {}

    listed = (await client.get("/api/Event")).json()
    assert listed[0]["currentAttendees"] == 4


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_seed_demo_data_is_idempotent(db_session):
    await seed_demo_data(db_session)
    await db_session.commit()
    counts = [await _count(db_session, m) for m in (User, Venue, Event, Menu)]
    assert counts == [3, 3, 4, 3]

    await seed_demo_data(db_session)
    await db_session.commit()
    assert [await _count(db_session, m) for m in (User, Venue, Event, Menu)] == counts

    admin = (await db_session.execute(select(User).where(User.email == ADMIN_EMAIL))).scalar_one()
    assert admin.is_admin


@pytest.mark.asyncio
async def test_cache_invalidated_after_commit(client: AsyncClient, db_session, fake_redis, auth_headers, free_event):
    """A list request racing the write must not be able to re-cache stale counts."""
    pending_at_delete = []
    fake_redis.on_delete = lambda: pending_at_delete.append(db_session.in_transaction())

    await client.get("/api/Event")
    booking = (
        await client.post(
            "/api/Bookings",
            json={"eventId": free_event.id, "numberOfTickets": 2},
            headers=auth_headers,
        )
    ).json()
    await client.get("/api/Event")
    await client.delete(f"/api/Bookings/{booking['id']}", headers=auth_headers)

    assert pending_at_delete == [False, False]
