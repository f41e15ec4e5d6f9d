"""
Tests for attendance registration, check-in and bulk check-in.
"""

import pytest
from httpx import AsyncClient

from app.api.events.attendance.models import AttendanceStatus
from app.api.events.models import EventStatus
from factories import (
    auth_headers,
    make_attendance,
    make_event,
    make_user,
    make_volunteer,
)


@pytest.mark.asyncio
async def test_register_self(client: AsyncClient, user, event):
    response = await client.post(
        "/api/v1/attendance", json={"eventId": event.id}, headers=auth_headers(user)
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "REGISTERED"
    assert data["attendanceId"] == f"{user.id}:{event.id}"
    assert data["checkedInAt"] is None


@pytest.mark.asyncio
async def test_user_cannot_register_someone_else(
    client: AsyncClient, db_session, user, event
):
    friend = await make_user(db_session, "friend")
    response = await client.post(
        "/api/v1/attendance",
        json={"eventId": event.id, "userId": friend.id},
        headers=auth_headers(user),
    )
    assert response.status_code == 403
    assert response.json()["message"] == (
        "You do not have permission to register attendees for events"
    )


@pytest.mark.asyncio
async def test_register_for_completed_event(
    client: AsyncClient, db_session, user, admin, category
):
    done = await make_event(
        db_session, admin, category, status=EventStatus.COMPLETED, days=-1
    )
    response = await client.post(
        "/api/v1/attendance", json={"eventId": done.id}, headers=auth_headers(user)
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot register attendees for a completed event"
    )


@pytest.mark.asyncio
async def test_check_in_requires_published_event(
    client: AsyncClient, db_session, user, admin, category
):
    draft = await make_event(db_session, admin, category, status=EventStatus.DRAFT)
    await make_attendance(db_session, user, draft)
    response = await client.patch(
        f"/api/v1/attendance/{user.id}/{draft.id}",
        json={"status": "JOINED"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot check in attendees for events that are not currently active"
    )


@pytest.mark.asyncio
async def test_status_changes_stamp_times_once(
    client: AsyncClient, db_session, user, admin, event
):
    await make_attendance(db_session, user, event)
    url = f"/api/v1/attendance/{user.id}:{event.id}"

    joined = await client.patch(
        url, json={"status": "JOINED"}, headers=auth_headers(admin)
    )
    assert joined.status_code == 200
    checked_in_at = joined.json()["checkedInAt"]
    assert checked_in_at is not None
    assert joined.json()["updatedById"] == admin.id

    left = await client.patch(
        url, json={"status": "LEFT_EARLY"}, headers=auth_headers(admin)
    )
    assert left.json()["checkedOutAt"] is not None

    rejoined = await client.patch(
        url, json={"status": "JOINED"}, headers=auth_headers(admin)
    )
    assert rejoined.json()["checkedInAt"] == checked_in_at


@pytest.mark.asyncio
async def test_malformed_attendance_id(client: AsyncClient, admin):
    response = await client.get(
        "/api/v1/attendance/garbage", headers=auth_headers(admin)
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        'Invalid attendance ID format - must be "userId:eventId"'
    )


@pytest.mark.asyncio
async def test_missing_attendance(client: AsyncClient, admin, event):
    response = await client.get(
        f"/api/v1/attendance/nobody/{event.id}", headers=auth_headers(admin)
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Attendance record not found"


@pytest.mark.asyncio
async def test_list_attendees_with_search(
    client: AsyncClient, db_session, user, admin, event
):
    alice = await make_user(db_session, "alice_smith")
    await make_attendance(db_session, alice, event, AttendanceStatus.JOINED)
    await make_attendance(db_session, user, event)

    response = await client.get(
        f"/api/v1/attendance/event/{event.id}",
        params={"search": "alice"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    body = response.json()
    assert [a["userId"] for a in body["data"]] == [alice.id]
    assert body["meta"]["total"] == 1

    response = await client.get(
        f"/api/v1/attendance/event/{event.id}",
        params={"status": "registered", "take": 1},
        headers=auth_headers(admin),
    )
    assert [a["userId"] for a in response.json()["data"]] == [user.id]


@pytest.mark.asyncio
async def test_approved_volunteer_can_list_attendees(
    client: AsyncClient, db_session, user, event
):
    await make_volunteer(db_session, user, event)
    response = await client.get(
        f"/api/v1/attendance/event/{event.id}", headers=auth_headers(user)
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_plain_user_cannot_list_attendees(client: AsyncClient, user, event):
    response = await client.get(
        f"/api/v1/attendance/event/{event.id}", headers=auth_headers(user)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_attendance_stats(client: AsyncClient, db_session, user, admin, event):
    other = await make_user(db_session, "other")
    await make_attendance(db_session, user, event, AttendanceStatus.JOINED)
    await make_attendance(db_session, other, event, AttendanceStatus.NO_SHOW)

    response = await client.get(
        f"/api/v1/attendance/event/{event.id}/stats", headers=auth_headers(admin)
    )
    assert response.json() == {
        "eventId": event.id,
        "total": 2,
        "registered": 0,
        "joined": 1,
        "leftEarly": 0,
        "noShow": 1,
    }


@pytest.mark.asyncio
async def test_bulk_check_in_reports_each_user(
    client: AsyncClient, db_session, user, admin, event
):
    other = await make_user(db_session, "other")
    await make_attendance(db_session, user, event)

    response = await client.post(
        f"/api/v1/attendance/event/{event.id}/bulk-check-in",
        json={"userIds": [user.id, other.id, "ghost"]},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["checkedInCount"] == 2
    assert body["failedCount"] == 1
    failed = [r for r in body["results"] if not r["success"]]
    assert failed == [
        {
            "success": False,
            "userId": "ghost",
            "attendanceId": None,
            "userName": None,
            "error": "User with ID ghost not found",
        }
    ]


@pytest.mark.parametrize(
    "user_ids, message",
    [
        ([], "At least one user ID is required"),
        (["a", "a"], "Duplicate user IDs are not allowed"),
        (["a", " "], "All user IDs must be valid strings"),
    ],
)
@pytest.mark.asyncio
async def test_bulk_check_in_validation(
    client: AsyncClient, admin, event, user_ids, message
):
    response = await client.post(
        f"/api/v1/attendance/event/{event.id}/bulk-check-in",
        json={"userIds": user_ids},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    assert response.json()["message"] == message


@pytest.mark.parametrize("status", [EventStatus.DRAFT, EventStatus.CANCELLED])
@pytest.mark.asyncio
async def test_bulk_check_in_requires_published_event(
    client: AsyncClient, db_session, user, admin, category, status
):
    inactive = await make_event(db_session, admin, category, status=status)
    await make_attendance(db_session, user, inactive)

    response = await client.post(
        f"/api/v1/attendance/event/{inactive.id}/bulk-check-in",
        json={"userIds": [user.id]},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Cannot check in attendees for events that are not currently active"
    )

    record = await client.get(
        f"/api/v1/attendance/{user.id}/{inactive.id}", headers=auth_headers(admin)
    )
    assert record.json()["status"] == "REGISTERED"
    assert record.json()["checkedInAt"] is None


@pytest.mark.asyncio
async def test_bulk_check_in_marks_rows_joined(
    client: AsyncClient, db_session, user, admin, event
):
    other = await make_user(db_session, "other")
    await make_attendance(db_session, user, event)

    await client.post(
        f"/api/v1/attendance/event/{event.id}/bulk-check-in",
        json={"userIds": [user.id, other.id]},
        headers=auth_headers(admin),
    )

    for member in (user, other):
        record = await client.get(
            f"/api/v1/attendance/{member.id}:{event.id}", headers=auth_headers(admin)
        )
        assert record.status_code == 200
        assert record.json()["status"] == "JOINED"
        assert record.json()["checkedInAt"] is not None
        assert record.json()["updatedById"] == admin.id
