from typing import Annotated, Optional

from fastapi import APIRouter, Query, status

from app.api.tasks import service
from app.api.tasks.schemas import TaskCreate, TaskResponse, TaskUpdate
from app.core.auth.dependencies import AuthActor
from app.core.response.pagination import PaginatedResponse, PaginationParams
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/tasks")


@router.post("", summary="Create a task", status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate, actor: AuthActor, session: SessionDep
) -> TaskResponse:
    return await service.create_task(session, actor, task)


@router.get("", summary="List tasks")
async def list_tasks(
    actor: AuthActor,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    pagination: PaginationParams,
    event_id: Annotated[Optional[str], Query(alias="eventId")] = None,
) -> PaginatedResponse[TaskResponse]:
    return await service.list_tasks(
        session, session_factory, actor, event_id, pagination.page, pagination.limit
    )


@router.get("/{task_id}", summary="Get a task")
async def get_task(task_id: str, actor: AuthActor, session: SessionDep) -> TaskResponse:
    return await service.get_visible_task(session, actor, task_id)


@router.put("/{task_id}", summary="Update a task")
async def update_task(
    task_id: str, changes: TaskUpdate, actor: AuthActor, session: SessionDep
) -> TaskResponse:
    return await service.update_task(session, actor, task_id, changes)


@router.delete("/{task_id}", summary="Delete a task")
async def delete_task(task_id: str, actor: AuthActor, session: SessionDep):
    return await service.delete_task(session, actor, task_id)
