import logging
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.attendance.models import AttendanceStatus, EventAttendances
from app.api.events.attendance.schemas import AttendanceCreate, AttendanceUpdate
from app.api.events.models import Events, EventStatus
from app.api.events.service import get_event
from app.api.events.volunteer.service import ensure_event_access
from app.api.users.models import Users
from app.core.auth.permissions import Actor
from app.core.response.pagination import paginate_skip_take
from app.core.utils.keys import CompositeKey
from app.core.validations.exceptions import NotFoundError, RequestValidationError
from app.db.mixins import utcnow

logger = logging.getLogger(__name__)

MAX_BULK_USERS = 100
INACTIVE_EVENT = "Cannot check in attendees for events that are not currently active"


def validate_user_ids(user_ids: list[str]) -> None:
    if not user_ids:
        raise RequestValidationError("At least one user ID is required")
    if len(user_ids) > MAX_BULK_USERS:
        raise RequestValidationError(
            f"Cannot process more than {MAX_BULK_USERS} users at once"
        )
    if any(not user_id or not user_id.strip() for user_id in user_ids):
        raise RequestValidationError("All user IDs must be valid strings")
    if len(set(user_ids)) != len(user_ids):
        raise RequestValidationError("Duplicate user IDs are not allowed")


def ensure_check_in_allowed(event: Events, status: AttendanceStatus | None) -> None:
    if status == AttendanceStatus.JOINED and event.status != EventStatus.PUBLISHED:
        raise RequestValidationError(INACTIVE_EVENT)


def apply_status(
    attendance: EventAttendances,
    status: AttendanceStatus,
    actor_id: str,
    now: datetime | None = None,
) -> None:
    """Move ``attendance`` to ``status``.

    ``checked_in_at`` is stamped on the first JOINED only and
    ``checked_out_at`` on the first LEFT_EARLY only.
    """
    now = now or utcnow()
    attendance.status = status
    attendance.updated_by_id = actor_id
    if status == AttendanceStatus.JOINED and attendance.checked_in_at is None:
        attendance.checked_in_at = now
    if status == AttendanceStatus.LEFT_EARLY and attendance.checked_out_at is None:
        attendance.checked_out_at = now


async def _find_attendance(
    session: AsyncSession, key: CompositeKey
) -> EventAttendances:
    result = await session.execute(
        select(EventAttendances)
        .where(
            EventAttendances.user_id == key.user_id,
            EventAttendances.event_id == key.event_id,
        )
        .execution_options(populate_existing=True)
    )
    attendance = result.scalars().first()
    if attendance is None:
        raise NotFoundError("Attendance", message="Attendance record not found")
    return attendance


async def register(
    session: AsyncSession, actor: Actor, attendance: AttendanceCreate
) -> EventAttendances:
    user_id = attendance.user_id or actor.id
    event = await get_event(session, attendance.event_id)
    await ensure_event_access(
        session, actor, event, "register attendees for", target_user_id=user_id
    )
    if await session.get(Users, user_id) is None:
        raise NotFoundError("User", user_id)
    if event.status == EventStatus.COMPLETED:
        raise RequestValidationError("Cannot register attendees for a completed event")
    ensure_check_in_allowed(event, attendance.status)

    key = CompositeKey(user_id, event.id)
    db_attendance = await session.get(EventAttendances, (user_id, event.id))
    if db_attendance is None:
        db_attendance = EventAttendances(
            user_id=user_id, event_id=event.id, notes=attendance.notes
        )
        session.add(db_attendance)
    elif attendance.notes is not None:
        db_attendance.notes = attendance.notes
    apply_status(db_attendance, attendance.status, actor.id)
    await session.commit()
    logger.info("Attendance %s registered as %s", key, attendance.status.value)
    return await _find_attendance(session, key)


async def get_attendance(
    session: AsyncSession, actor: Actor, key: CompositeKey
) -> EventAttendances:
    attendance = await _find_attendance(session, key)
    event = await get_event(session, key.event_id)
    await ensure_event_access(
        session, actor, event, "view attendees for", target_user_id=key.user_id
    )
    return attendance


async def update_attendance(
    session: AsyncSession, actor: Actor, key: CompositeKey, changes: AttendanceUpdate
) -> EventAttendances:
    attendance = await _find_attendance(session, key)
    event = await get_event(session, key.event_id)
    await ensure_event_access(session, actor, event, "update attendance for")
    ensure_check_in_allowed(event, changes.status)

    if changes.notes is not None:
        attendance.notes = changes.notes
    if changes.status is not None:
        apply_status(attendance, changes.status, actor.id)
    else:
        attendance.updated_by_id = actor.id
    await session.commit()
    return await _find_attendance(session, key)


async def unregister(
    session: AsyncSession, actor: Actor, key: CompositeKey
) -> EventAttendances:
    attendance = await _find_attendance(session, key)
    event = await get_event(session, key.event_id)
    await ensure_event_access(
        session, actor, event, "unregister attendees for", target_user_id=key.user_id
    )
    await session.delete(attendance)
    await session.commit()
    logger.info("Attendance %s removed by %s", key, actor.id)
    return attendance


async def list_event_attendees(
    session: AsyncSession,
    session_factory: async_sessionmaker,
    actor: Actor,
    event_id: str,
    status: AttendanceStatus | None = None,
    search: str | None = None,
    skip: int = 0,
    take: int = 100,
):
    event = await get_event(session, event_id)
    await ensure_event_access(session, actor, event, "view attendees for")

    query = (
        select(EventAttendances)
        .join(Users, Users.id == EventAttendances.user_id)
        .where(EventAttendances.event_id == event_id)
    )
    if status is not None:
        query = query.where(EventAttendances.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Users.full_name.ilike(pattern),
                Users.email.ilike(pattern),
                Users.username.ilike(pattern),
            )
        )
    query = query.order_by(
        EventAttendances.created_at.desc(), EventAttendances.user_id
    )
    return await paginate_skip_take(session_factory, query, skip, take)


async def get_stats(session: AsyncSession, actor: Actor, event_id: str) -> dict:
    event = await get_event(session, event_id)
    await ensure_event_access(session, actor, event, "view attendance statistics for")

    result = await session.execute(
        select(EventAttendances.status, func.count())
        .where(EventAttendances.event_id == event_id)
        .group_by(EventAttendances.status)
    )
    counts = {status: count for status, count in result.all()}
    return {
        "event_id": event_id,
        "total": sum(counts.values()),
        "registered": counts.get(AttendanceStatus.REGISTERED, 0),
        "joined": counts.get(AttendanceStatus.JOINED, 0),
        "left_early": counts.get(AttendanceStatus.LEFT_EARLY, 0),
        "no_show": counts.get(AttendanceStatus.NO_SHOW, 0),
    }


async def bulk_check_in(
    session: AsyncSession, actor: Actor, event_id: str, user_ids: list[str]
) -> dict:
    """Check in every user independently; one failure never aborts the rest."""
    validate_user_ids(user_ids)
    event = await get_event(session, event_id)
    await ensure_event_access(session, actor, event, "check in attendees for")
    ensure_check_in_allowed(event, AttendanceStatus.JOINED)

    results = []
    for user_id in user_ids:
        key = CompositeKey(user_id, event_id)
        try:
            user = await session.get(Users, user_id)
            if user is None:
                results.append(
                    {
                        "success": False,
                        "user_id": user_id,
                        "error": f"User with ID {user_id} not found",
                    }
                )
                continue
            user_name = user.full_name
            attendance = await session.get(EventAttendances, (user_id, event_id))
            if attendance is None:
                attendance = EventAttendances(user_id=user_id, event_id=event_id)
                session.add(attendance)
            apply_status(attendance, AttendanceStatus.JOINED, actor.id)
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.warning("Bulk check-in failed for %s: %s", key, exc)
            results.append(
                {"success": False, "user_id": user_id, "error": "Check-in failed"}
            )
            continue
        results.append(
            {
                "success": True,
                "user_id": user_id,
                "attendance_id": str(key),
                "user_name": user_name,
            }
        )

    checked_in = sum(1 for result in results if result["success"])
    logger.info(
        "Bulk check-in for event %s: %s succeeded, %s failed",
        event_id,
        checked_in,
        len(results) - checked_in,
    )
    return {
        "event_id": event_id,
        "checked_in_count": checked_in,
        "failed_count": len(results) - checked_in,
        "results": results,
    }
