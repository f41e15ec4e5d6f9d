from fastapi import APIRouter, status

from app.api.tasks.assignments import service
from app.api.tasks.assignments.schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentUpdate,
)
from app.core.auth.dependencies import AdminActor, AuthActor
from app.core.response.pagination import PaginatedResponse, PaginationParams
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/assignments")


@router.post(
    "", summary="Assign a task to a volunteer", status_code=status.HTTP_201_CREATED
)
async def assign(
    assignment: AssignmentCreate, actor: AuthActor, session: SessionDep
) -> AssignmentResponse:
    return await service.assign(session, actor, assignment)


@router.get("", summary="List all task assignments")
async def list_assignments(
    actor: AdminActor,
    session_factory: SessionFactoryDep,
    pagination: PaginationParams,
) -> PaginatedResponse[AssignmentResponse]:
    return await service.list_assignments(
        session_factory, pagination.page, pagination.limit
    )


@router.get("/volunteer/{volunteer_id}", summary="List a volunteer's assignments")
async def list_by_volunteer(
    volunteer_id: str,
    actor: AuthActor,
    session_factory: SessionFactoryDep,
    pagination: PaginationParams,
) -> PaginatedResponse[AssignmentResponse]:
    return await service.list_by_volunteer(
        session_factory, actor, volunteer_id, pagination.page, pagination.limit
    )


@router.get("/task/{task_id}", summary="List assignments of a task")
async def list_by_task(
    task_id: str,
    actor: AuthActor,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    pagination: PaginationParams,
) -> PaginatedResponse[AssignmentResponse]:
    return await service.list_by_task(
        session, session_factory, actor, task_id, pagination.page, pagination.limit
    )


@router.patch("/{assignment_id}", summary="Update an assignment's status")
async def update_status(
    assignment_id: str,
    changes: AssignmentUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> AssignmentResponse:
    return await service.update_status(session, actor, assignment_id, changes)


@router.delete("/{assignment_id}", summary="Remove an assignment")
async def unassign(assignment_id: str, actor: AuthActor, session: SessionDep):
    return await service.unassign(session, actor, assignment_id)
