import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.models import Events
from app.api.events.service import get_event
from app.api.notifications.models import NotificationType
from app.api.notifications.service import add_notification
from app.api.tasks.models import Tasks
from app.api.tasks.schemas import TaskCreate, TaskUpdate
from app.core.auth.permissions import Actor, ensure_allowed
from app.core.response.pagination import paginate
from app.core.validations.exceptions import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


def is_task_staff(actor: Actor, task: Tasks) -> bool:
    """Admins and the organizer of the task's event."""
    return actor.is_admin or task.event.organizer_id == actor.id


async def get_task(session: AsyncSession, task_id: str) -> Tasks:
    result = await session.execute(
        select(Tasks)
        .join(Events, Events.id == Tasks.event_id)
        .where(Tasks.id == task_id, Events.deleted_at.is_(None))
        .execution_options(populate_existing=True)
    )
    task = result.scalars().first()
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


async def get_modifiable_task(session: AsyncSession, actor: Actor, task_id: str):
    task = await get_task(session, task_id)
    if not is_task_staff(actor, task):
        raise PermissionDeniedError("You do not have permission to modify this task")
    return task


def notify_assignees(session: AsyncSession, task: Tasks, message: str) -> None:
    for assignment in task.assignments:
        add_notification(
            session,
            assignment.volunteer_id,
            NotificationType.TASK_ASSIGNMENT,
            message,
            event_id=task.event_id,
        )


async def create_task(session: AsyncSession, actor: Actor, task: TaskCreate) -> Tasks:
    event = await get_event(session, task.event_id)
    ensure_allowed(actor, event.organizer_id, "create tasks for")
    db_task = Tasks(
        event_id=event.id,
        name=task.name,
        description=task.description,
        type=task.type,
        due_date=task.due_date,
        status=task.status,
    )
    session.add(db_task)
    await session.commit()
    logger.info("Task %s created for event %s", db_task.id, event.id)
    return await get_task(session, db_task.id)


async def list_tasks(
    session: AsyncSession,
    session_factory: async_sessionmaker,
    actor: Actor,
    event_id: str | None,
    page: int,
    limit: int,
):
    query = (
        select(Tasks)
        .join(Events, Events.id == Tasks.event_id)
        .where(Events.deleted_at.is_(None))
    )
    if event_id:
        event = await get_event(session, event_id)
        if not actor.is_admin and event.organizer_id != actor.id:
            raise PermissionDeniedError(
                "You do not have permission to view tasks for this event"
            )
        query = query.where(Tasks.event_id == event_id)
    elif not actor.is_admin:
        query = query.where(Events.organizer_id == actor.id)
    query = query.order_by(Tasks.created_at.desc(), Tasks.id)
    return await paginate(session_factory, query, page, limit)


async def get_visible_task(session: AsyncSession, actor: Actor, task_id: str) -> Tasks:
    task = await get_task(session, task_id)
    assigned = any(a.volunteer_id == actor.id for a in task.assignments)
    if not is_task_staff(actor, task) and not assigned:
        raise PermissionDeniedError("You do not have permission to view this task")
    return task


async def update_task(
    session: AsyncSession, actor: Actor, task_id: str, changes: TaskUpdate
) -> Tasks:
    task = await get_modifiable_task(session, actor, task_id)
    for key, value in changes.model_dump(exclude_unset=True).items():
        if value is not None or key in ("description", "type", "due_date"):
            setattr(task, key, value)
    notify_assignees(session, task, f'Task "{task.name}" has been updated')
    await session.commit()
    return await get_task(session, task_id)


async def delete_task(session: AsyncSession, actor: Actor, task_id: str) -> dict:
    task = await get_modifiable_task(session, actor, task_id)
    notify_assignees(session, task, f'Task "{task.name}" has been cancelled')
    await session.delete(task)
    await session.commit()
    logger.info("Task %s deleted by %s", task_id, actor.id)
    return {"message": "Task deleted successfully"}
