import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.models import Events
from app.api.events.volunteer.service import is_approved_volunteer
from app.api.notifications.models import NotificationType
from app.api.notifications.service import add_notification
from app.api.tasks.assignments.schemas import AssignmentCreate, AssignmentUpdate
from app.api.tasks.models import TaskAssignments, Tasks
from app.api.tasks.service import get_task, is_task_staff
from app.core.auth.permissions import Actor
from app.core.response.pagination import paginate
from app.core.validations.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    RequestValidationError,
)
from app.core.validations.schema import validate_unique

logger = logging.getLogger(__name__)


def _base_query():
    return (
        select(TaskAssignments)
        .join(Tasks, Tasks.id == TaskAssignments.task_id)
        .join(Events, Events.id == Tasks.event_id)
        .where(Events.deleted_at.is_(None))
        .order_by(TaskAssignments.created_at.desc(), TaskAssignments.id)
    )


async def get_assignment(session: AsyncSession, assignment_id: str) -> TaskAssignments:
    result = await session.execute(
        select(TaskAssignments)
        .where(TaskAssignments.id == assignment_id)
        .execution_options(populate_existing=True)
    )
    assignment = result.scalars().first()
    if assignment is None:
        raise NotFoundError("Assignment", assignment_id)
    return assignment


async def assign(
    session: AsyncSession, actor: Actor, assignment: AssignmentCreate
) -> TaskAssignments:
    task = await get_task(session, assignment.task_id)
    if not is_task_staff(actor, task):
        raise PermissionDeniedError("You do not have permission to assign this task")
    if not await is_approved_volunteer(session, assignment.volunteer_id, task.event_id):
        raise RequestValidationError("The volunteer is not approved for this event")
    await validate_unique(
        session,
        "Volunteer is already assigned to this task",
        unique_together=[
            {
                "task_id": (TaskAssignments, task.id),
                "volunteer_id": (TaskAssignments, assignment.volunteer_id),
            }
        ],
    )

    db_assignment = TaskAssignments(
        task_id=task.id,
        volunteer_id=assignment.volunteer_id,
        assigned_by_id=actor.id,
        status=assignment.status,
    )
    session.add(db_assignment)
    add_notification(
        session,
        assignment.volunteer_id,
        NotificationType.TASK_ASSIGNMENT,
        f'You have been assigned a new task: "{task.name}" '
        f'for event "{task.event.name}"',
        event_id=task.event_id,
    )
    await session.commit()
    logger.info("Task %s assigned to %s", task.id, assignment.volunteer_id)
    return await get_assignment(session, db_assignment.id)


async def list_assignments(
    session_factory: async_sessionmaker, page: int, limit: int
):
    return await paginate(session_factory, _base_query(), page, limit)


async def list_by_volunteer(
    session_factory: async_sessionmaker,
    actor: Actor,
    volunteer_id: str,
    page: int,
    limit: int,
):
    if not actor.is_admin and actor.id != volunteer_id:
        raise PermissionDeniedError("You can only view your own task assignments")
    query = _base_query().where(TaskAssignments.volunteer_id == volunteer_id)
    return await paginate(session_factory, query, page, limit)


async def list_by_task(
    session: AsyncSession,
    session_factory: async_sessionmaker,
    actor: Actor,
    task_id: str,
    page: int,
    limit: int,
):
    task = await get_task(session, task_id)
    if not is_task_staff(actor, task):
        raise PermissionDeniedError(
            "You do not have permission to view assignments for this task"
        )
    query = _base_query().where(TaskAssignments.task_id == task_id)
    return await paginate(session_factory, query, page, limit)


async def update_status(
    session: AsyncSession, actor: Actor, assignment_id: str, changes: AssignmentUpdate
) -> TaskAssignments:
    assignment = await get_assignment(session, assignment_id)
    task = await get_task(session, assignment.task_id)
    is_volunteer = assignment.volunteer_id == actor.id
    if not is_volunteer and not is_task_staff(actor, task):
        raise PermissionDeniedError(
            "You do not have permission to update this assignment"
        )

    assignment.status = changes.status
    if is_volunteer:
        add_notification(
            session,
            task.event.organizer_id,
            NotificationType.TASK_ASSIGNMENT,
            f'{assignment.volunteer.full_name} updated task "{task.name}" '
            f"status to {changes.status.value}",
            event_id=task.event_id,
        )
    await session.commit()
    return await get_assignment(session, assignment_id)


async def unassign(session: AsyncSession, actor: Actor, assignment_id: str) -> dict:
    assignment = await get_assignment(session, assignment_id)
    task = await get_task(session, assignment.task_id)
    if not is_task_staff(actor, task):
        raise PermissionDeniedError(
            "You do not have permission to remove this assignment"
        )
    add_notification(
        session,
        assignment.volunteer_id,
        NotificationType.TASK_ASSIGNMENT,
        f'You have been unassigned from task "{task.name}"',
        event_id=task.event_id,
    )
    await session.delete(assignment)
    await session.commit()
    logger.info("Assignment %s removed by %s", assignment_id, actor.id)
    return {"message": "Assignment removed successfully"}
