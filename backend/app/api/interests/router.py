from typing import Annotated, Optional

from fastapi import APIRouter, Query, status

from app.api.interests import service
from app.api.interests.schemas import (
    InterestCheck,
    InterestCreate,
    InterestPublic,
    InterestWithEvent,
    InterestWithUser,
    MessageResponse,
)
from app.core.auth.dependencies import AuthActor
from app.core.response.pagination import PaginatedResponse
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/interests")


@router.post(
    "", summary="Mark an event as interesting", status_code=status.HTTP_201_CREATED
)
async def add_interest(
    interest: InterestCreate, actor: AuthActor, session: SessionDep
) -> InterestPublic:
    return await service.add_interest(session, actor, interest.event_id)


@router.delete("/event/{event_id}", summary="Remove an event from my interests")
async def remove_interest(
    event_id: str, actor: AuthActor, session: SessionDep
) -> MessageResponse:
    return await service.remove_interest(session, actor, event_id)


@router.get("/my-interests", summary="List events I am interested in")
async def my_interests(
    actor: AuthActor,
    session_factory: SessionFactoryDep,
    skip: Annotated[int, Query()] = 0,
    take: Annotated[int, Query()] = 10,
) -> PaginatedResponse[InterestWithEvent]:
    return await service.list_my_interests(session_factory, actor, skip, take)


@router.get("/event/{event_id}/users", summary="List users interested in an event")
async def interested_users(
    event_id: str,
    actor: AuthActor,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    search: Annotated[Optional[str], Query()] = None,
    skip: Annotated[int, Query()] = 0,
    take: Annotated[int, Query()] = 10,
) -> PaginatedResponse[InterestWithUser]:
    return await service.list_interested_users(
        session, session_factory, actor, event_id, search, skip, take
    )


@router.get("/check/{event_id}", summary="Check whether I am interested in an event")
async def check_interest(
    event_id: str, actor: AuthActor, session: SessionDep
) -> InterestCheck:
    return await service.check_interest(session, actor, event_id)
