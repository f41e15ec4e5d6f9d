"""
Tests for marking events as interesting.
"""

import pytest
from httpx import AsyncClient

from factories import auth_headers, make_user


@pytest.mark.asyncio
async def test_add_and_check_interest(client: AsyncClient, user, event):
    response = await client.post(
        "/api/v1/interests", json={"eventId": event.id}, headers=auth_headers(user)
    )
    assert response.status_code == 201
    assert response.json()["eventId"] == event.id

    check = await client.get(
        f"/api/v1/interests/check/{event.id}", headers=auth_headers(user)
    )
    assert check.json() == {"interested": True}


@pytest.mark.asyncio
async def test_duplicate_interest(client: AsyncClient, user, event):
    body = {"eventId": event.id}
    await client.post("/api/v1/interests", json=body, headers=auth_headers(user))
    response = await client.post(
        "/api/v1/interests", json=body, headers=auth_headers(user)
    )
    assert response.status_code == 409
    assert response.json()["message"] == "You are already interested in this event"


@pytest.mark.asyncio
async def test_interest_in_missing_event(client: AsyncClient, user):
    response = await client.post(
        "/api/v1/interests", json={"eventId": "nope"}, headers=auth_headers(user)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_remove_interest(client: AsyncClient, user, event):
    url = f"/api/v1/interests/event/{event.id}"
    missing = await client.delete(url, headers=auth_headers(user))
    assert missing.status_code == 404
    assert missing.json()["message"] == "Interest record not found"

    await client.post(
        "/api/v1/interests", json={"eventId": event.id}, headers=auth_headers(user)
    )
    response = await client.delete(url, headers=auth_headers(user))
    assert response.status_code == 200
    check = await client.get(
        f"/api/v1/interests/check/{event.id}", headers=auth_headers(user)
    )
    assert check.json() == {"interested": False}


@pytest.mark.asyncio
async def test_my_interests(client: AsyncClient, user, event):
    await client.post(
        "/api/v1/interests", json={"eventId": event.id}, headers=auth_headers(user)
    )
    response = await client.get(
        "/api/v1/interests/my-interests", headers=auth_headers(user)
    )
    body = response.json()
    assert body["meta"]["total"] == 1
    assert body["meta"]["take"] == 10
    assert body["data"][0]["event"]["name"] == event.name


@pytest.mark.asyncio
async def test_interested_users_for_organizer_only(
    client: AsyncClient, db_session, user, admin, other_admin, event
):
    fan = await make_user(db_session, "big_fan")
    for member in (user, fan):
        await client.post(
            "/api/v1/interests",
            json={"eventId": event.id},
            headers=auth_headers(member),
        )

    url = f"/api/v1/interests/event/{event.id}/users"
    denied = await client.get(url, headers=auth_headers(user))
    assert denied.status_code == 403
    assert denied.json()["message"] == (
        "Only the event organizer or administrators can view interested users"
    )

    response = await client.get(url, headers=auth_headers(admin))
    assert response.json()["meta"]["total"] == 2

    response = await client.get(
        url, params={"search": "fan"}, headers=auth_headers(other_admin)
    )
    assert [i["userId"] for i in response.json()["data"]] == [fan.id]
