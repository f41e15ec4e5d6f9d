"""
Tests for volunteer applications.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.api.events.models import EventStatus
from app.api.notifications.models import Notifications, NotificationType
from app.api.users.models import CurrentRole
from factories import auth_headers, make_event, make_volunteer


@pytest.mark.asyncio
async def test_apply_and_notify_organizer(
    client: AsyncClient, db_session, user, admin, event
):
    response = await client.post(
        "/api/v1/volunteers/applications",
        json={"eventId": event.id, "motivation": "I like helping"},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["userId"] == user.id

    notifications = (
        await db_session.execute(
            select(Notifications).where(Notifications.user_id == admin.id)
        )
    ).scalars().all()
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.APPLICATION_UPDATE
    assert notifications[0].application_id == f"{user.id}:{event.id}"


@pytest.mark.asyncio
async def test_apply_twice_conflicts(client: AsyncClient, user, event):
    body = {"eventId": event.id}
    await client.post(
        "/api/v1/volunteers/applications", json=body, headers=auth_headers(user)
    )
    response = await client.post(
        "/api/v1/volunteers/applications", json=body, headers=auth_headers(user)
    )
    assert response.status_code == 409
    assert response.json()["message"] == (
        "You have already applied to volunteer for this event"
    )


@pytest.mark.asyncio
async def test_apply_requires_attendee_role(
    client: AsyncClient, db_session, user, event
):
    user.current_role = CurrentRole.VOLUNTEER
    await db_session.commit()
    response = await client.post(
        "/api/v1/volunteers/applications",
        json={"eventId": event.id},
        headers=auth_headers(user),
    )
    assert response.status_code == 403
    assert response.json()["message"] == (
        "Only users with ATTENDEE role can apply for volunteer positions"
    )


@pytest.mark.asyncio
async def test_apply_to_closed_event(
    client: AsyncClient, db_session, user, admin, category
):
    draft = await make_event(db_session, admin, category, status=EventStatus.DRAFT)
    response = await client.post(
        "/api/v1/volunteers/applications",
        json={"eventId": draft.id},
        headers=auth_headers(user),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_organizer_approves_application(
    client: AsyncClient, db_session, user, admin, event
):
    await client.post(
        "/api/v1/volunteers/applications",
        json={"eventId": event.id},
        headers=auth_headers(user),
    )
    response = await client.patch(
        f"/api/v1/volunteers/{user.id}:{event.id}/status",
        json={"status": "APPROVED"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"
    assert response.json()["approvedAt"] is not None

    listing = await client.get(
        f"/api/v1/volunteers/event/{event.id}", headers=auth_headers(admin)
    )
    assert [v["userId"] for v in listing.json()] == [user.id]


@pytest.mark.asyncio
async def test_applicant_cannot_approve_self(client: AsyncClient, user, event):
    await client.post(
        "/api/v1/volunteers/applications",
        json={"eventId": event.id},
        headers=auth_headers(user),
    )
    response = await client.patch(
        f"/api/v1/volunteers/{user.id}/{event.id}/status",
        json={"status": "APPROVED"},
        headers=auth_headers(user),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_malformed_application_id(client: AsyncClient, admin, db_session):
    response = await client.get(
        "/api/v1/volunteers/not-a-key", headers=auth_headers(admin)
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        'Invalid volunteer application ID format - must be "userId:eventId"'
    )


@pytest.mark.asyncio
async def test_event_volunteers_status_filter(
    client: AsyncClient, db_session, user, admin, event
):
    await make_volunteer(db_session, user, event)
    response = await client.get(
        f"/api/v1/volunteers/event/{event.id}",
        params={"status": "pending"},
        headers=auth_headers(admin),
    )
    assert response.json() == []

    response = await client.get(
        f"/api/v1/volunteers/event/{event.id}",
        params={"status": "bogus"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid volunteer status"


@pytest.mark.asyncio
async def test_withdraw_application(
    client: AsyncClient, db_session, user, event
):
    await make_volunteer(db_session, user, event)
    response = await client.delete(
        f"/api/v1/volunteers/{user.id}/{event.id}", headers=auth_headers(user)
    )
    assert response.status_code == 200
    mine = await client.get(
        "/api/v1/volunteers/my-applications", headers=auth_headers(user)
    )
    assert mine.json() == []
