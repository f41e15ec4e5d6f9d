from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.events import service
from app.api.events.dashboard.router import router as dashboard_router
from app.api.events.query import get_event_filters
from app.api.events.schemas import (
    EventCreate,
    EventFilters,
    EventResponse,
    EventStatusUpdate,
    EventUpdate,
    VolunteerToggle,
)
from app.core.auth.dependencies import AdminActor, AuthActor
from app.core.response.pagination import PaginatedResponse, PaginationParams
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/events")

router.include_router(dashboard_router, tags=["dashboard"])


@router.post(
    "", summary="Create a new event", status_code=status.HTTP_201_CREATED
)
async def create_event(
    actor: AdminActor, event: EventCreate, session: SessionDep
) -> EventResponse:
    return await service.create_event(session, actor, event)


@router.get("", summary="List events")
async def list_events(
    pagination: PaginationParams,
    filters: Annotated[EventFilters, Depends(get_event_filters)],
    session_factory: SessionFactoryDep,
) -> PaginatedResponse[EventResponse]:
    """List events with optional status, category, search and date filters."""
    return await service.list_events(
        session_factory, filters, pagination.page, pagination.limit
    )


@router.get("/organizer/{organizer_id}", summary="List events of an organizer")
async def list_organizer_events(
    organizer_id: str,
    pagination: PaginationParams,
    session: SessionDep,
    session_factory: SessionFactoryDep,
) -> PaginatedResponse[EventResponse]:
    return await service.list_events_by_organizer(
        session, session_factory, organizer_id, pagination.page, pagination.limit
    )


@router.get("/{event_id}", summary="Get event info")
async def get_event(event_id: str, session: SessionDep) -> EventResponse:
    return await service.get_event(session, event_id)


@router.patch("/{event_id}", summary="Update an event")
async def update_event(
    event_id: str, event: EventUpdate, actor: AuthActor, session: SessionDep
) -> EventResponse:
    return await service.update_event(session, actor, event_id, event)


@router.patch("/{event_id}/status", summary="Update event status")
async def update_event_status(
    event_id: str, body: EventStatusUpdate, actor: AuthActor, session: SessionDep
) -> EventResponse:
    return await service.update_event_status(session, actor, event_id, body.status)


@router.patch(
    "/{event_id}/volunteers/toggle", summary="Open or close volunteer applications"
)
async def toggle_volunteer_acceptance(
    event_id: str,
    actor: AuthActor,
    session: SessionDep,
    body: VolunteerToggle | None = None,
) -> EventResponse:
    return await service.toggle_volunteer_acceptance(
        session, actor, event_id, body.accepting_volunteers if body else None
    )


@router.delete("/{event_id}", summary="Delete an event")
async def delete_event(
    event_id: str, actor: AuthActor, session: SessionDep
) -> EventResponse:
    return await service.delete_event(session, actor, event_id)
