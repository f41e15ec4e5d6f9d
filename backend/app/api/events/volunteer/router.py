from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from app.api.events.volunteer import service
from app.api.events.volunteer.models import VolunteerStatus
from app.api.events.volunteer.schemas import (
    VolunteerApplicationCreate,
    VolunteerResponse,
    VolunteerStatusUpdate,
    VolunteerWithEvent,
)
from app.core.auth.dependencies import AuthActor
from app.core.utils.keys import CompositeKey
from app.core.validations.exceptions import RequestValidationError
from app.db.core import SessionDep

router = APIRouter(prefix="/volunteers")

APPLICATION = "volunteer application"


def _parse_status_filter(value: str | None) -> VolunteerStatus | None:
    if value is None:
        return VolunteerStatus.APPROVED
    if value.lower() == "all":
        return None
    try:
        return VolunteerStatus(value.upper())
    except ValueError:
        raise RequestValidationError("Invalid volunteer status")


@router.post(
    "/applications",
    summary="Apply to volunteer for an event",
    status_code=status.HTTP_201_CREATED,
)
async def apply(
    application: VolunteerApplicationCreate, actor: AuthActor, session: SessionDep
) -> VolunteerResponse:
    return await service.apply(session, actor, application)


@router.get("/my-applications", summary="List my volunteer applications")
async def my_applications(
    actor: AuthActor, session: SessionDep
) -> List[VolunteerWithEvent]:
    return await service.list_my_applications(session, actor)


@router.get("/event/{event_id}", summary="List volunteers of an event")
async def event_volunteers(
    event_id: str,
    actor: AuthActor,
    session: SessionDep,
    status: Annotated[Optional[str], Query()] = None,
) -> List[VolunteerResponse]:
    """Approved volunteers by default; pass ``status=all`` for every application."""
    return await service.list_event_volunteers(
        session, actor, event_id, _parse_status_filter(status)
    )


@router.get("/{user_id}/{event_id}", summary="Get a volunteer application")
async def get_application(
    user_id: str, event_id: str, actor: AuthActor, session: SessionDep
) -> VolunteerWithEvent:
    return await service.get_application(session, actor, CompositeKey(user_id, event_id))


@router.get("/{application_id}", summary="Get a volunteer application by userId:eventId")
async def get_application_by_token(
    application_id: str, actor: AuthActor, session: SessionDep
) -> VolunteerWithEvent:
    key = CompositeKey.parse(application_id, APPLICATION)
    return await service.get_application(session, actor, key)


@router.patch("/{user_id}/{event_id}/status", summary="Approve or reject an application")
async def update_status(
    user_id: str,
    event_id: str,
    body: VolunteerStatusUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> VolunteerResponse:
    return await service.update_status(
        session, actor, CompositeKey(user_id, event_id), body.status
    )


@router.patch(
    "/{application_id}/status",
    summary="Approve or reject an application by userId:eventId",
)
async def update_status_by_token(
    application_id: str,
    body: VolunteerStatusUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> VolunteerResponse:
    key = CompositeKey.parse(application_id, APPLICATION)
    return await service.update_status(session, actor, key, body.status)


@router.delete("/{user_id}/{event_id}", summary="Withdraw or remove a volunteer")
async def remove(
    user_id: str, event_id: str, actor: AuthActor, session: SessionDep
) -> VolunteerResponse:
    return await service.remove(session, actor, CompositeKey(user_id, event_id))


@router.delete(
    "/{application_id}", summary="Withdraw or remove a volunteer by userId:eventId"
)
async def remove_by_token(
    application_id: str, actor: AuthActor, session: SessionDep
) -> VolunteerResponse:
    key = CompositeKey.parse(application_id, APPLICATION)
    return await service.remove(session, actor, key)
