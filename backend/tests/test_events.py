"""
Tests for event CRUD endpoints.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from eventra.models.enums import EventCategory, EventStatus


def _event_payload(**overrides) -> dict:
    payload = {
        "title": "Python Conference 2026",
        "description": "Annual Python gathering",
        "date": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
        "location": "Convention Center",
        "maxAttendees": 500,
        "category": "Conference",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, auth_headers, test_user):
    """Authenticated user can create an event; it starts as a Draft."""
    response = await client.post("/api/Event", json=_event_payload(), headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Python Conference 2026"
    assert data["maxAttendees"] == 500
    assert data["currentAttendees"] == 0
    assert data["status"] == "Draft"
    assert data["category"] == "Conference"
    assert data["createdBy"] == test_user.id
    assert data["hasAvailableSeats"] is True
    assert data["venueName"] is None


@pytest.mark.asyncio
async def test_create_event_at_venue(client: AsyncClient, auth_headers, venue):
    response = await client.post("/api/Event", json=_event_payload(venueId=venue.id), headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["venueId"] == venue.id
    assert response.json()["venueName"] == "Test Hall"


@pytest.mark.asyncio
async def test_create_event_inactive_venue(client: AsyncClient, db_session, auth_headers, venue):
    venue.is_active = False
    await db_session.commit()

    response = await client.post("/api/Event", json=_event_payload(venueId=venue.id), headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or inactive venue."


@pytest.mark.asyncio
async def test_create_event_unauthenticated(client: AsyncClient):
    response = await client.post("/api/Event", json=_event_payload())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_event_invalid_capacity(client: AsyncClient, auth_headers):
    response = await client.post("/api/Event", json=_event_payload(maxAttendees=0), headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "One or more validation errors occurred."


@pytest.mark.asyncio
async def test_create_paid_event_requires_price(client: AsyncClient, auth_headers):
    for price in (None, 0):
        response = await client.post(
            "/api/Event", json=_event_payload(isFree=False, ticketPrice=price), headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "One or more validation errors occurred."

    response = await client.post(
        "/api/Event", json=_event_payload(isFree=False, ticketPrice=25), headers=auth_headers
    )
    assert response.status_code == 201
    assert response.json()["ticketPrice"] == 25.0


@pytest.mark.asyncio
async def test_update_to_paid_requires_price(client: AsyncClient, admin_headers, free_event):
    response = await client.put(f"/api/Event/{free_event.id}", json={"isFree": False}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Paid events require a ticket price greater than zero."

    response = await client.put(
        f"/api/Event/{free_event.id}", json={"isFree": False, "ticketPrice": 0}, headers=admin_headers
    )
    assert response.status_code == 400

    response = await client.put(
        f"/api/Event/{free_event.id}", json={"isFree": False, "ticketPrice": 15}, headers=admin_headers
    )
    assert response.status_code == 204
    data = (await client.get(f"/api/Event/{free_event.id}")).json()
    assert data["isFree"] is False
    assert data["ticketPrice"] == 15.0


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, free_event):
    response = await client.get(f"/api/Event/{free_event.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == free_event.id
    assert data["title"] == "Test Meetup"
    assert data["isFree"] is True
    assert data["isUserRegistered"] is False


@pytest.mark.asyncio
async def test_get_nonexistent_event(client: AsyncClient):
    response = await client.get("/api/Event/99999")
    assert response.status_code == 404
    assert response.json() == {"message": "Event not found."}


@pytest.mark.asyncio
async def test_list_events_ordered_by_date(client: AsyncClient, admin_user, make_event):
    now = datetime.now(timezone.utc)
    await make_event(admin_user, title="Later", date=now + timedelta(days=20))
    await make_event(admin_user, title="Sooner", date=now + timedelta(days=2))

    response = await client.get("/api/Event")
    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Sooner", "Later"]


@pytest.mark.asyncio
async def test_list_events_filters(client: AsyncClient, admin_user, make_event):
    now = datetime.now(timezone.utc)
    await make_event(admin_user, title="Past Workshop", category=EventCategory.WORKSHOP, date=now - timedelta(days=3))
    await make_event(admin_user, title="Future Workshop", category=EventCategory.WORKSHOP)
    await make_event(admin_user, title="Draft Concert", category=EventCategory.CONCERT, status=EventStatus.DRAFT)

    by_category = await client.get("/api/Event", params={"category": "Workshop"})
    assert {e["title"] for e in by_category.json()} == {"Past Workshop", "Future Workshop"}

    by_status = await client.get("/api/Event", params={"status": "Draft"})
    assert [e["title"] for e in by_status.json()] == ["Draft Concert"]

    upcoming = await client.get("/api/Event", params={"category": "Workshop", "upcoming": "true"})
    assert [e["title"] for e in upcoming.json()] == ["Future Workshop"]


@pytest.mark.asyncio
async def test_list_events_unknown_category(client: AsyncClient):
    response = await client.get("/api/Event", params={"category": "Picnic"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_event(client: AsyncClient, admin_headers, free_event):
    response = await client.put(
        f"/api/Event/{free_event.id}",
        json={"title": "Renamed Meetup", "maxAttendees": 150, "status": "Published"},
        headers=admin_headers,
    )
    assert response.status_code == 204

    data = (await client.get(f"/api/Event/{free_event.id}")).json()
    assert data["title"] == "Renamed Meetup"
    assert data["maxAttendees"] == 150
    # Untouched fields keep their values
    assert data["location"] == "Test Venue"


@pytest.mark.asyncio
async def test_update_event_not_creator(client: AsyncClient, auth_headers, free_event):
    """Only the creator or an admin may edit an event."""
    response = await client.put(f"/api/Event/{free_event.id}", json={"title": "Hijacked"}, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_own_event(client: AsyncClient, auth_headers):
    created = (await client.post("/api/Event", json=_event_payload(), headers=auth_headers)).json()

    response = await client.put(
        f"/api/Event/{created['id']}",
        json={"status": "Published"},
        headers=auth_headers,
    )
    assert response.status_code == 204
    assert (await client.get(f"/api/Event/{created['id']}")).json()["status"] == "Published"


@pytest.mark.asyncio
async def test_update_nonexistent_event(client: AsyncClient, admin_headers):
    response = await client.put("/api/Event/99999", json={"title": "Ghost"}, headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_event_without_bookings(client: AsyncClient, admin_headers, free_event):
    response = await client.delete(f"/api/Event/{free_event.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/Event/{free_event.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_event_with_bookings_cancels_it(client: AsyncClient, auth_headers, admin_headers, free_event):
    await client.post(
        "/api/Bookings",
        json={"eventId": free_event.id, "numberOfTickets": 1},
        headers=auth_headers,
    )

    response = await client.delete(f"/api/Event/{free_event.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Event cancelled (has active registrations/bookings)."

    data = (await client.get(f"/api/Event/{free_event.id}")).json()
    assert data["status"] == "Cancelled"


@pytest.mark.asyncio
async def test_delete_event_not_creator(client: AsyncClient, auth_headers, free_event):
    response = await client.delete(f"/api/Event/{free_event.id}", headers=auth_headers)
    assert response.status_code == 403
