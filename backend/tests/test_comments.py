"""
Tests for event comments and ratings.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from app.api.events.attendance.models import AttendanceStatus
from app.api.events.models import EventStatus
from factories import auth_headers, make_attendance, make_event, make_user


@pytest_asyncio.fixture
async def past_event(db_session, admin, category):
    return await make_event(
        db_session,
        admin,
        category,
        name="Last Week",
        status=EventStatus.COMPLETED,
        days=-7,
    )


@pytest_asyncio.fixture
async def attendee(db_session, past_event):
    member = await make_user(db_session, "attendee")
    await make_attendance(db_session, member, past_event, AttendanceStatus.JOINED)
    return member


async def post_comment(client, member, event, rating=5, text="Great event"):
    return await client.post(
        "/api/v1/comments-ratings",
        json={"eventId": event.id, "commentText": text, "rating": rating},
        headers=auth_headers(member),
    )


@pytest.mark.asyncio
async def test_attendee_can_comment(client: AsyncClient, attendee, past_event):
    response = await post_comment(client, attendee, past_event)
    assert response.status_code == 201
    data = response.json()
    assert data["rating"] == 5
    assert data["status"] == "ACTIVE"
    assert data["user"]["id"] == attendee.id
    assert data["event"]["name"] == "Last Week"


@pytest.mark.asyncio
async def test_cannot_comment_before_event_ends(client: AsyncClient, db_session, event):
    member = await make_user(db_session, "early_bird")
    await make_attendance(db_session, member, event, AttendanceStatus.JOINED)
    response = await post_comment(client, member, event)
    assert response.status_code == 403
    assert response.json()["message"] == (
        "Comments and ratings can only be submitted after the event has ended"
    )


@pytest.mark.asyncio
async def test_cannot_comment_on_cancelled_event(
    client: AsyncClient, db_session, admin, category
):
    cancelled = await make_event(
        db_session, admin, category, status=EventStatus.CANCELLED, days=-1
    )
    member = await make_user(db_session, "member")
    await make_attendance(db_session, member, cancelled, AttendanceStatus.JOINED)
    response = await post_comment(client, member, cancelled)
    assert response.status_code == 403
    assert response.json()["message"] == (
        "Comments and ratings cannot be submitted for cancelled events"
    )


@pytest.mark.asyncio
async def test_only_joined_attendees_comment(
    client: AsyncClient, db_session, user, past_event
):
    response = await post_comment(client, user, past_event)
    assert response.status_code == 403
    assert response.json()["message"] == (
        "Only attendees of the event can submit comments and ratings"
    )

    await make_attendance(db_session, user, past_event, AttendanceStatus.NO_SHOW)
    response = await post_comment(client, user, past_event)
    assert response.json()["message"] == (
        "You must have attended the event to submit comments and ratings"
    )


@pytest.mark.asyncio
async def test_duplicate_comment(client: AsyncClient, attendee, past_event):
    await post_comment(client, attendee, past_event)
    response = await post_comment(client, attendee, past_event, rating=1)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_rating_out_of_range(client: AsyncClient, attendee, past_event):
    response = await post_comment(client, attendee, past_event, rating=6)
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_rating_stats(client: AsyncClient, db_session, attendee, past_event):
    second = await make_user(db_session, "second")
    await make_attendance(db_session, second, past_event, AttendanceStatus.JOINED)
    await post_comment(client, attendee, past_event, rating=5)
    await post_comment(client, second, past_event, rating=2)

    response = await client.get(
        f"/api/v1/comments-ratings/event/{past_event.id}/stats",
        headers=auth_headers(attendee),
    )
    body = response.json()
    assert body["averageRating"] == 3.5
    assert body["totalRatings"] == 2
    assert body["highestRating"] == 5
    assert body["lowestRating"] == 2
    assert [b["count"] for b in body["ratingDistribution"]] == [0, 1, 0, 0, 1]


@pytest.mark.asyncio
async def test_owner_cannot_moderate(client: AsyncClient, attendee, past_event):
    created = await post_comment(client, attendee, past_event)
    url = f"/api/v1/comments-ratings/{created.json()['id']}"

    response = await client.patch(
        url,
        json={"rating": 3, "status": "DELETED"},
        headers=auth_headers(attendee),
    )
    assert response.status_code == 200
    assert response.json()["rating"] == 3
    assert response.json()["status"] == "ACTIVE"


@pytest.mark.asyncio
async def test_organizer_moderates(client: AsyncClient, admin, attendee, past_event):
    created = await post_comment(client, attendee, past_event)
    url = f"/api/v1/comments-ratings/{created.json()['id']}"

    response = await client.patch(
        url, json={"status": "DELETED"}, headers=auth_headers(admin)
    )
    assert response.json()["status"] == "DELETED"

    listed = await client.get(
        f"/api/v1/comments-ratings/event/{past_event.id}",
        headers=auth_headers(attendee),
    )
    assert listed.json() == []


@pytest.mark.asyncio
async def test_stranger_cannot_edit(client: AsyncClient, user, attendee, past_event):
    created = await post_comment(client, attendee, past_event)
    response = await client.delete(
        f"/api/v1/comments-ratings/{created.json()['id']}", headers=auth_headers(user)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_hides_comment(client: AsyncClient, attendee, past_event):
    created = await post_comment(client, attendee, past_event)
    response = await client.delete(
        f"/api/v1/comments-ratings/{created.json()['id']}",
        headers=auth_headers(attendee),
    )
    assert response.json()["status"] == "DELETED"

    mine = await client.get(
        "/api/v1/comments-ratings/my-comments", headers=auth_headers(attendee)
    )
    assert mine.json() == []

    # a deleted comment no longer blocks a new one
    again = await post_comment(client, attendee, past_event)
    assert again.status_code == 201


@pytest.mark.asyncio
async def test_user_comments_admin_only(
    client: AsyncClient, admin, attendee, past_event
):
    await post_comment(client, attendee, past_event)
    url = f"/api/v1/comments-ratings/user/{attendee.id}"

    denied = await client.get(url, headers=auth_headers(attendee))
    assert denied.status_code == 403

    response = await client.get(url, headers=auth_headers(admin))
    assert len(response.json()) == 1
