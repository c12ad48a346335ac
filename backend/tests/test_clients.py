"""
Tests for the CRM client endpoints.
"""

import pytest
from httpx import AsyncClient

CLIENT = {
    "firstName": "Ada",
    "secondName": "Lovelace",
    "email": "Ada@Analytical.example.com",
    "phone": "555-0100",
    "company": "Analytical Engines Ltd",
}


@pytest.mark.asyncio
async def test_clients_require_auth(client: AsyncClient):
    assert (await client.get("/api/Clients")).status_code == 401
    assert (await client.post("/api/Clients", json=CLIENT)).status_code == 401


@pytest.mark.asyncio
async def test_create_and_get_client(client: AsyncClient, auth_headers):
    response = await client.post("/api/Clients", json=CLIENT, headers=auth_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "ada@analytical.example.com"
    assert created["isActive"] is True

    fetched = await client.get(f"/api/Clients/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["company"] == "Analytical Engines Ltd"


@pytest.mark.asyncio
async def test_duplicate_client_email(client: AsyncClient, auth_headers):
    await client.post("/api/Clients", json=CLIENT, headers=auth_headers)

    response = await client.post(
        "/api/Clients",
        json={**CLIENT, "email": "ada@analytical.example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "A client with this email already exists."


@pytest.mark.asyncio
async def test_list_only_active_clients(client: AsyncClient, auth_headers):
    ada = (await client.post("/api/Clients", json=CLIENT, headers=auth_headers)).json()
    await client.post(
        "/api/Clients",
        json={**CLIENT, "firstName": "Charles", "secondName": "Babbage", "email": "charles@example.com"},
        headers=auth_headers,
    )

    response = await client.put(
        f"/api/Clients/{ada['id']}",
        json={**CLIENT, "isActive": False},
        headers=auth_headers,
    )
    assert response.status_code == 204

    listed = (await client.get("/api/Clients", headers=auth_headers)).json()
    assert [c["firstName"] for c in listed] == ["Charles"]


@pytest.mark.asyncio
async def test_update_client_to_taken_email(client: AsyncClient, auth_headers):
    ada = (await client.post("/api/Clients", json=CLIENT, headers=auth_headers)).json()
    await client.post("/api/Clients", json={**CLIENT, "email": "taken@example.com"}, headers=auth_headers)

    response = await client.put(
        f"/api/Clients/{ada['id']}",
        json={**CLIENT, "email": "taken@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_client(client: AsyncClient, auth_headers):
    created = (await client.post("/api/Clients", json=CLIENT, headers=auth_headers)).json()

    response = await client.delete(f"/api/Clients/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/Clients/{created['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Client not found."}
