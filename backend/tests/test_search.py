"""
Tests for event search.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def catalogue(admin_user, make_event):
    now = datetime.now(timezone.utc)
    await make_event(admin_user, title="Jazz Night", location="Blue Note", description="Live jazz", date=now + timedelta(days=5))
    await make_event(admin_user, title="Python Workshop", location="Library", description="Hands-on coding", date=now + timedelta(days=1))
    await make_event(admin_user, title="Rooftop Party", location="Jazz Bar Rooftop", description="Drinks", date=now + timedelta(days=9))


@pytest.mark.asyncio
async def test_search_matches_title_and_location(client: AsyncClient, catalogue):
    response = await client.get("/api/Search", params={"term": "JAZZ"})
    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Jazz Night", "Rooftop Party"]


@pytest.mark.asyncio
async def test_search_matches_description(client: AsyncClient, catalogue):
    response = await client.get("/api/Search", params={"term": "coding"})
    assert [e["title"] for e in response.json()] == ["Python Workshop"]
    assert set(response.json()[0]) == {
        "id", "title", "date", "location", "description",
        "maxAttendees", "currentAttendees", "category", "status",
    }


@pytest.mark.asyncio
async def test_blank_search_returns_everything_by_date(client: AsyncClient, catalogue):
    response = await client.get("/api/Search", params={"term": "  "})
    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Python Workshop", "Jazz Night", "Rooftop Party"]


@pytest.mark.asyncio
async def test_search_without_matches(client: AsyncClient, catalogue):
    response = await client.get("/api/Search", params={"term": "opera"})
    assert response.status_code == 404
    assert response.json() == {"message": "No events found matching 'opera'."}
