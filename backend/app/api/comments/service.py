import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.comments.models import CommentRatings, CommentStatus
from app.api.comments.schemas import CommentRatingCreate, CommentRatingUpdate
from app.api.events.attendance.models import AttendanceStatus, EventAttendances
from app.api.events.models import Events, EventStatus
from app.api.events.service import get_event
from app.core.auth.permissions import Actor
from app.core.validations.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from app.db.mixins import utcnow

logger = logging.getLogger(__name__)

RATING_SCALE = range(1, 6)


def ensure_event_ended(event: Events, now: datetime | None = None) -> None:
    now = now or utcnow()
    event_time = event.date_time
    if event_time.tzinfo is None:
        event_time = event_time.replace(tzinfo=timezone.utc)
    if event.status != EventStatus.COMPLETED and event_time >= now:
        raise PermissionDeniedError(
            "Comments and ratings can only be submitted after the event has ended"
        )
    if event.status == EventStatus.CANCELLED:
        raise PermissionDeniedError(
            "Comments and ratings cannot be submitted for cancelled events"
        )


async def ensure_attended(session: AsyncSession, user_id: str, event_id: str) -> None:
    attendance = await session.get(EventAttendances, (user_id, event_id))
    if attendance is None:
        raise PermissionDeniedError(
            "Only attendees of the event can submit comments and ratings"
        )
    if attendance.status != AttendanceStatus.JOINED:
        raise PermissionDeniedError(
            "You must have attended the event to submit comments and ratings"
        )


async def _get_comment(session: AsyncSession, comment_id: str) -> CommentRatings:
    result = await session.execute(
        select(CommentRatings)
        .where(CommentRatings.id == comment_id)
        .execution_options(populate_existing=True)
    )
    comment = result.scalars().first()
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    return comment


def _ensure_can_modify(actor: Actor, comment: CommentRatings) -> bool:
    """Return whether ``actor`` moderates the comment rather than owns it."""
    is_moderator = actor.is_admin or comment.event.organizer_id == actor.id
    if comment.user_id != actor.id and not is_moderator:
        raise PermissionDeniedError(
            "You can only modify your own comments or comments on events you organize"
        )
    return is_moderator


async def create_comment(
    session: AsyncSession, actor: Actor, comment: CommentRatingCreate
) -> CommentRatings:
    event = await get_event(session, comment.event_id)
    ensure_event_ended(event)
    await ensure_attended(session, actor.id, event.id)

    duplicate = await session.scalar(
        select(func.count())
        .select_from(CommentRatings)
        .where(
            CommentRatings.user_id == actor.id,
            CommentRatings.event_id == event.id,
            CommentRatings.status == CommentStatus.ACTIVE,
        )
    )
    if duplicate:
        raise ConflictError(
            "You have already submitted a comment and rating for this event"
        )

    db_comment = CommentRatings(
        event_id=event.id,
        user_id=actor.id,
        comment_text=comment.comment_text,
        rating=comment.rating,
    )
    session.add(db_comment)
    await session.commit()
    logger.info("Comment %s added to event %s", db_comment.id, event.id)
    return await _get_comment(session, db_comment.id)


async def get_comment(session: AsyncSession, comment_id: str) -> CommentRatings:
    return await _get_comment(session, comment_id)


async def update_comment(
    session: AsyncSession, actor: Actor, comment_id: str, changes: CommentRatingUpdate
) -> CommentRatings:
    comment = await _get_comment(session, comment_id)
    is_moderator = _ensure_can_modify(actor, comment)

    # status is a moderation field; owners only edit text and rating
    fields = {"comment_text", "rating"} | ({"status"} if is_moderator else set())
    for key, value in changes.model_dump(exclude_unset=True, include=fields).items():
        if value is not None:
            setattr(comment, key, value)
    await session.commit()
    return await _get_comment(session, comment_id)


async def delete_comment(
    session: AsyncSession, actor: Actor, comment_id: str
) -> CommentRatings:
    comment = await _get_comment(session, comment_id)
    _ensure_can_modify(actor, comment)
    comment.status = CommentStatus.DELETED
    await session.commit()
    logger.info("Comment %s deleted by %s", comment_id, actor.id)
    return await _get_comment(session, comment_id)


async def list_event_comments(session: AsyncSession, event_id: str):
    await get_event(session, event_id)
    result = await session.execute(
        select(CommentRatings)
        .where(
            CommentRatings.event_id == event_id,
            CommentRatings.status == CommentStatus.ACTIVE,
        )
        .order_by(CommentRatings.created_at.desc(), CommentRatings.id)
    )
    return result.scalars().all()


async def list_user_comments(session: AsyncSession, user_id: str):
    result = await session.execute(
        select(CommentRatings)
        .where(
            CommentRatings.user_id == user_id,
            CommentRatings.status == CommentStatus.ACTIVE,
        )
        .order_by(CommentRatings.created_at.desc(), CommentRatings.id)
    )
    return result.scalars().all()


async def get_rating_stats(session: AsyncSession, event_id: str) -> dict:
    await get_event(session, event_id)
    active = (
        CommentRatings.event_id == event_id,
        CommentRatings.status == CommentStatus.ACTIVE,
    )
    average, total, highest, lowest = (
        await session.execute(
            select(
                func.avg(CommentRatings.rating),
                func.count(CommentRatings.rating),
                func.max(CommentRatings.rating),
                func.min(CommentRatings.rating),
            ).where(*active)
        )
    ).one()
    counts = dict(
        (
            await session.execute(
                select(CommentRatings.rating, func.count())
                .where(*active)
                .group_by(CommentRatings.rating)
            )
        ).all()
    )
    return {
        "average_rating": float(average or 0),
        "total_ratings": total or 0,
        "highest_rating": highest or 0,
        "lowest_rating": lowest or 0,
        "rating_distribution": [
            {"rating": rating, "count": counts.get(rating, 0)}
            for rating in RATING_SCALE
        ],
    }
