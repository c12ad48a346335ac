"""
Tests for venue endpoints.
"""

import pytest
from httpx import AsyncClient

VENUE = {
    "name": "Harbour Pavilion",
    "address": "12 Pier Road",
    "city": "Portside",
    "capacity": 300,
    "contactEmail": "hello@harbour.example.com",
    "pricePerHour": 120.5,
}


@pytest.mark.asyncio
async def test_create_venue(client: AsyncClient, auth_headers):
    response = await client.post("/api/Venues", json=VENUE, headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Harbour Pavilion"
    assert data["capacity"] == 300
    assert data["pricePerHour"] == 120.5
    assert data["isActive"] is True
    assert data["eventCount"] == 0


@pytest.mark.asyncio
async def test_create_venue_requires_auth(client: AsyncClient):
    response = await client.post("/api/Venues", json=VENUE)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_venue_validation(client: AsyncClient, auth_headers):
    response = await client.post("/api/Venues", json={**VENUE, "capacity": 0}, headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_venue_counts_events(client: AsyncClient, admin_user, venue, make_event):
    await make_event(admin_user, venue_id=venue.id)
    await make_event(admin_user, venue_id=venue.id, title="Second")

    response = await client.get(f"/api/Venues/{venue.id}")
    assert response.status_code == 200
    assert response.json()["eventCount"] == 2


@pytest.mark.asyncio
async def test_get_missing_venue(client: AsyncClient):
    response = await client.get("/api/Venues/99999")
    assert response.status_code == 404
    assert response.json() == {"message": "Venue not found."}


@pytest.mark.asyncio
async def test_list_hides_inactive_venues(client: AsyncClient, db_session, auth_headers, venue):
    await client.post("/api/Venues", json=VENUE, headers=auth_headers)
    venue.is_active = False
    await db_session.commit()

    active = await client.get("/api/Venues")
    assert [v["name"] for v in active.json()] == ["Harbour Pavilion"]

    everything = await client.get("/api/Venues", params={"includeInactive": "true"})
    assert {v["name"] for v in everything.json()} == {"Harbour Pavilion", "Test Hall"}


@pytest.mark.asyncio
async def test_update_venue(client: AsyncClient, auth_headers, venue):
    response = await client.put(
        f"/api/Venues/{venue.id}",
        json={**VENUE, "name": "Test Hall Annex", "capacity": 250},
        headers=auth_headers,
    )
    assert response.status_code == 204

    data = (await client.get(f"/api/Venues/{venue.id}")).json()
    assert data["name"] == "Test Hall Annex"
    assert data["capacity"] == 250


@pytest.mark.asyncio
async def test_update_missing_venue(client: AsyncClient, auth_headers):
    response = await client.put("/api/Venues/99999", json=VENUE, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_unused_venue(client: AsyncClient, auth_headers, venue):
    response = await client.delete(f"/api/Venues/{venue.id}", headers=auth_headers)
    assert response.status_code == 204

    assert (await client.get(f"/api/Venues/{venue.id}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_venue_in_use_deactivates(client: AsyncClient, auth_headers, admin_user, venue, make_event):
    await make_event(admin_user, venue_id=venue.id)

    response = await client.delete(f"/api/Venues/{venue.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Venue deactivated (has associated events)."

    data = (await client.get(f"/api/Venues/{venue.id}")).json()
    assert data["isActive"] is False
