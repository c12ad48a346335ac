"""
Tests for event registrations (RSVPs) and their share of the seat counter.
"""

import pytest
from httpx import AsyncClient


async def _register(client: AsyncClient, headers, event_id: int, **extra):
    return await client.post(
        "/api/EventAttendees/register",
        json={"eventId": event_id, **extra},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_register_for_free_event(client: AsyncClient, auth_headers, test_user, free_event):
    response = await _register(client, auth_headers, free_event.id, notes="Vegetarian")
    assert response.status_code == 201
    data = response.json()
    assert data["eventId"] == free_event.id
    assert data["eventTitle"] == "Test Meetup"
    assert data["userId"] == test_user.id
    assert data["userEmail"] == "test@example.com"
    assert data["status"] == "Registered"
    assert data["paymentRequired"] is False
    assert data["paymentCompleted"] is True

    event = (await client.get(f"/api/Event/{free_event.id}")).json()
    assert event["currentAttendees"] == 1


@pytest.mark.asyncio
async def test_register_for_paid_event_requires_payment(client: AsyncClient, auth_headers, paid_event):
    data = (await _register(client, auth_headers, paid_event.id)).json()
    assert data["paymentRequired"] is True
    assert data["paymentCompleted"] is False


@pytest.mark.asyncio
async def test_register_twice(client: AsyncClient, auth_headers, free_event):
    await _register(client, auth_headers, free_event.id)

    response = await _register(client, auth_headers, free_event.id)
    assert response.status_code == 400
    assert response.json()["message"] == "You are already registered for this event."


@pytest.mark.asyncio
async def test_register_for_full_event(client: AsyncClient, auth_headers, other_headers, nearly_full_event):
    assert (await _register(client, auth_headers, nearly_full_event.id)).status_code == 201

    response = await _register(client, other_headers, nearly_full_event.id)
    assert response.status_code == 400
    assert response.json()["message"] == "Event is full. No more seats available."


@pytest.mark.asyncio
async def test_registrations_and_bookings_share_capacity(
    client: AsyncClient, auth_headers, other_headers, nearly_full_event
):
    """An RSVP takes the last seat, so a ticket booking no longer fits."""
    assert (await _register(client, auth_headers, nearly_full_event.id)).status_code == 201

    response = await client.post(
        "/api/Bookings",
        json={"eventId": nearly_full_event.id, "numberOfTickets": 1},
        headers=other_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Not enough seats available."


@pytest.mark.asyncio
async def test_register_for_missing_event(client: AsyncClient, auth_headers):
    response = await _register(client, auth_headers, 99999)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_event_attendees(client: AsyncClient, auth_headers, other_headers, free_event):
    await _register(client, auth_headers, free_event.id)
    await _register(client, other_headers, free_event.id)

    response = await client.get(f"/api/EventAttendees/event/{free_event.id}", headers=auth_headers)
    assert response.status_code == 200
    assert [a["userName"] for a in response.json()] == ["testuser", "otheruser"]


@pytest.mark.asyncio
async def test_list_attendees_of_missing_event(client: AsyncClient, auth_headers):
    response = await client.get("/api/EventAttendees/event/99999", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_my_registrations(client: AsyncClient, auth_headers, other_headers, free_event, paid_event):
    await _register(client, auth_headers, free_event.id)
    await _register(client, auth_headers, paid_event.id)
    await _register(client, other_headers, free_event.id)

    response = await client.get("/api/EventAttendees/my-registrations", headers=auth_headers)
    assert response.status_code == 200
    assert {a["eventId"] for a in response.json()} == {free_event.id, paid_event.id}


@pytest.mark.asyncio
async def test_check_in_attendee(client: AsyncClient, auth_headers, admin_headers, free_event):
    attendee_id = (await _register(client, auth_headers, free_event.id)).json()["id"]

    forbidden = await client.post(f"/api/EventAttendees/{attendee_id}/checkin", headers=auth_headers)
    assert forbidden.status_code == 403

    response = await client.post(f"/api/EventAttendees/{attendee_id}/checkin", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Attendee checked in successfully."

    again = await client.post(f"/api/EventAttendees/{attendee_id}/checkin", headers=admin_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Attendee already checked in."

    cancel = await client.delete(f"/api/EventAttendees/{attendee_id}", headers=auth_headers)
    assert cancel.status_code == 400
    assert cancel.json()["message"] == "Cannot cancel after check-in."


@pytest.mark.asyncio
async def test_check_in_missing_registration(client: AsyncClient, admin_headers):
    response = await client.post("/api/EventAttendees/4242/checkin", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Attendee registration not found."


@pytest.mark.asyncio
async def test_cancel_registration_releases_seat(client: AsyncClient, auth_headers, admin_headers, free_event):
    attendee_id = (await _register(client, auth_headers, free_event.id)).json()["id"]

    response = await client.delete(f"/api/EventAttendees/{attendee_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Registration cancelled successfully."
    assert (await client.get(f"/api/Event/{free_event.id}")).json()["currentAttendees"] == 0

    again = await client.delete(f"/api/EventAttendees/{attendee_id}", headers=auth_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Registration already cancelled."

    check_in = await client.post(f"/api/EventAttendees/{attendee_id}/checkin", headers=admin_headers)
    assert check_in.status_code == 400
    assert check_in.json()["message"] == "Cannot check in a cancelled registration."


@pytest.mark.asyncio
async def test_cancel_someone_elses_registration(client: AsyncClient, auth_headers, other_headers, free_event):
    attendee_id = (await _register(client, auth_headers, free_event.id)).json()["id"]

    response = await client.delete(f"/api/EventAttendees/{attendee_id}", headers=other_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_cancelled_registration_still_blocks_reregistering(client: AsyncClient, auth_headers, free_event):
    attendee_id = (await _register(client, auth_headers, free_event.id)).json()["id"]
    await client.delete(f"/api/EventAttendees/{attendee_id}", headers=auth_headers)

    response = await _register(client, auth_headers, free_event.id)
    assert response.status_code == 400
