from typing import Annotated, Optional

from fastapi import APIRouter, Query, status

from app.api.events.attendance import service
from app.api.events.attendance.models import AttendanceStatus
from app.api.events.attendance.schemas import (
    AttendanceCreate,
    AttendanceResponse,
    AttendanceStats,
    AttendanceUpdate,
    BulkCheckInRequest,
    BulkCheckInResponse,
)
from app.core.auth.dependencies import AuthActor
from app.core.response.pagination import PaginatedResponse
from app.core.utils.keys import CompositeKey
from app.core.validations.exceptions import RequestValidationError
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/attendance")


def _parse_status(value: str | None) -> AttendanceStatus | None:
    if not value:
        return None
    try:
        return AttendanceStatus(value.upper())
    except ValueError:
        raise RequestValidationError("Invalid attendance status")


@router.post(
    "", summary="Register an attendee", status_code=status.HTTP_201_CREATED
)
async def register(
    attendance: AttendanceCreate, actor: AuthActor, session: SessionDep
) -> AttendanceResponse:
    return await service.register(session, actor, attendance)


@router.get("/event/{event_id}", summary="List attendees of an event")
async def list_event_attendees(
    event_id: str,
    actor: AuthActor,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    status: Annotated[Optional[str], Query()] = None,
    search: Annotated[Optional[str], Query()] = None,
    skip: Annotated[int, Query()] = 0,
    take: Annotated[int, Query()] = 100,
) -> PaginatedResponse[AttendanceResponse]:
    return await service.list_event_attendees(
        session,
        session_factory,
        actor,
        event_id,
        status=_parse_status(status),
        search=search.strip() if search else None,
        skip=skip,
        take=take,
    )


@router.get("/event/{event_id}/stats", summary="Attendance counts by status")
async def attendance_stats(
    event_id: str, actor: AuthActor, session: SessionDep
) -> AttendanceStats:
    return await service.get_stats(session, actor, event_id)


@router.post("/event/{event_id}/bulk-check-in", summary="Check in many attendees")
async def bulk_check_in(
    event_id: str, body: BulkCheckInRequest, actor: AuthActor, session: SessionDep
) -> BulkCheckInResponse:
    return await service.bulk_check_in(session, actor, event_id, body.user_ids)


@router.get("/{user_id}/{event_id}", summary="Get an attendance record")
async def get_attendance(
    user_id: str, event_id: str, actor: AuthActor, session: SessionDep
) -> AttendanceResponse:
    return await service.get_attendance(session, actor, CompositeKey(user_id, event_id))


@router.patch("/{user_id}/{event_id}", summary="Update an attendance record")
async def update_attendance(
    user_id: str,
    event_id: str,
    changes: AttendanceUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> AttendanceResponse:
    return await service.update_attendance(
        session, actor, CompositeKey(user_id, event_id), changes
    )


@router.delete("/{user_id}/{event_id}", summary="Unregister an attendee")
async def unregister(
    user_id: str, event_id: str, actor: AuthActor, session: SessionDep
) -> AttendanceResponse:
    return await service.unregister(session, actor, CompositeKey(user_id, event_id))


@router.get("/{attendance_id}", summary="Get an attendance record by userId:eventId")
async def get_attendance_by_token(
    attendance_id: str, actor: AuthActor, session: SessionDep
) -> AttendanceResponse:
    return await service.get_attendance(
        session, actor, CompositeKey.parse(attendance_id)
    )


@router.patch(
    "/{attendance_id}", summary="Update an attendance record by userId:eventId"
)
async def update_attendance_by_token(
    attendance_id: str,
    changes: AttendanceUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> AttendanceResponse:
    return await service.update_attendance(
        session, actor, CompositeKey.parse(attendance_id), changes
    )


@router.delete("/{attendance_id}", summary="Unregister an attendee by userId:eventId")
async def unregister_by_token(
    attendance_id: str, actor: AuthActor, session: SessionDep
) -> AttendanceResponse:
    return await service.unregister(session, actor, CompositeKey.parse(attendance_id))
