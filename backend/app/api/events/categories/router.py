from typing import List

from fastapi import APIRouter, status

from app.api.events.categories import service
from app.api.events.categories.schemas import EventCategoryDetail
from app.api.events.schemas import (
    EventCategoryCreate,
    EventCategoryResponse,
    EventCategoryUpdate,
    EventCategoryWithCount,
)
from app.core.auth.dependencies import AdminActor
from app.db.core import SessionDep

router = APIRouter(prefix="/categories")


@router.post(
    "",
    summary="Create a new event category",
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    actor: AdminActor, category: EventCategoryCreate, session: SessionDep
) -> EventCategoryResponse:
    return await service.create_category(session, category)


@router.get("", summary="List all event categories")
async def list_categories(session: SessionDep) -> List[EventCategoryWithCount]:
    return await service.list_categories_with_counts(session)


@router.get("/{category_id}", summary="Get a category with its latest events")
async def get_category(category_id: str, session: SessionDep) -> EventCategoryDetail:
    return await service.get_category(session, category_id)


@router.patch("/{category_id}", summary="Update an event category")
async def update_category(
    category_id: str,
    category: EventCategoryUpdate,
    actor: AdminActor,
    session: SessionDep,
) -> EventCategoryResponse:
    return await service.update_category(session, category_id, category)


@router.delete("/{category_id}", summary="Delete an unused event category")
async def delete_category(
    category_id: str, actor: AdminActor, session: SessionDep
) -> EventCategoryResponse:
    return await service.delete_category(session, category_id)
