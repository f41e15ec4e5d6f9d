from typing import Annotated

from fastapi import APIRouter, Query

from app.api.notifications import service
from app.api.notifications.schemas import NotificationCount, NotificationSchema
from app.core.auth.dependencies import AuthActor
from app.core.response.pagination import PaginatedResponse, PaginationParams
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/notifications")


@router.get("", summary="List my notifications")
async def list_notifications(
    pagination: PaginationParams,
    actor: AuthActor,
    session_factory: SessionFactoryDep,
    unread_only: Annotated[bool, Query(alias="unreadOnly")] = False,
) -> PaginatedResponse[NotificationSchema]:
    return await service.list_notifications(
        session_factory, actor.id, pagination.page, pagination.limit, unread_only
    )


@router.get("/unread-count", summary="Count my unread notifications")
async def unread_count(actor: AuthActor, session: SessionDep) -> NotificationCount:
    return await service.unread_count(session, actor.id)


@router.patch("/mark-all-read", summary="Mark all my notifications as read")
async def mark_all_as_read(actor: AuthActor, session: SessionDep) -> NotificationCount:
    return await service.mark_all_as_read(session, actor.id)


@router.get("/{notification_id}", summary="Get one of my notifications")
async def get_notification(
    notification_id: str, actor: AuthActor, session: SessionDep
) -> NotificationSchema:
    return await service.get_notification(session, actor.id, notification_id)


@router.patch("/{notification_id}/read", summary="Mark a notification as read")
async def mark_as_read(
    notification_id: str, actor: AuthActor, session: SessionDep
) -> NotificationSchema:
    return await service.mark_as_read(session, actor.id, notification_id)
