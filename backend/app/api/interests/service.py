import logging

from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.models import Events
from app.api.events.service import get_event
from app.api.interests.models import EventInterests
from app.api.users.models import Users
from app.core.auth.permissions import Actor
from app.core.response.pagination import paginate_skip_take
from app.core.validations.exceptions import NotFoundError, PermissionDeniedError
from app.core.validations.schema import validate_unique

logger = logging.getLogger(__name__)

MAX_TAKE = 100


async def add_interest(
    session: AsyncSession, actor: Actor, event_id: str
) -> EventInterests:
    await get_event(session, event_id)
    await validate_unique(
        session,
        "You are already interested in this event",
        unique_together=[
            {
                "user_id": (EventInterests, actor.id),
                "event_id": (EventInterests, event_id),
            }
        ],
    )
    interest = EventInterests(user_id=actor.id, event_id=event_id)
    session.add(interest)
    await session.commit()
    await session.refresh(interest)
    return interest


async def remove_interest(session: AsyncSession, actor: Actor, event_id: str) -> dict:
    interest = await session.get(EventInterests, (actor.id, event_id))
    if interest is None:
        raise NotFoundError("Interest", message="Interest record not found")
    await session.delete(interest)
    await session.commit()
    return {"message": "Interest removed successfully"}


async def check_interest(session: AsyncSession, actor: Actor, event_id: str) -> dict:
    interested = await session.scalar(
        select(
            exists().where(
                EventInterests.user_id == actor.id,
                EventInterests.event_id == event_id,
            )
        )
    )
    return {"interested": bool(interested)}


async def list_my_interests(
    session_factory: async_sessionmaker, actor: Actor, skip: int, take: int
):
    query = (
        select(EventInterests)
        .join(Events, Events.id == EventInterests.event_id)
        .where(EventInterests.user_id == actor.id, Events.deleted_at.is_(None))
        .order_by(EventInterests.interested_at.desc(), EventInterests.event_id)
    )
    return await paginate_skip_take(session_factory, query, skip, take, MAX_TAKE)


async def list_interested_users(
    session: AsyncSession,
    session_factory: async_sessionmaker,
    actor: Actor,
    event_id: str,
    search: str | None,
    skip: int,
    take: int,
):
    event = await get_event(session, event_id)
    if not actor.is_admin and event.organizer_id != actor.id:
        raise PermissionDeniedError(
            "Only the event organizer or administrators can view interested users"
        )

    query = (
        select(EventInterests)
        .join(Users, Users.id == EventInterests.user_id)
        .where(EventInterests.event_id == event_id)
    )
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Users.full_name.ilike(pattern),
                Users.email.ilike(pattern),
                Users.username.ilike(pattern),
            )
        )
    query = query.order_by(EventInterests.interested_at.desc(), EventInterests.user_id)
    return await paginate_skip_take(session_factory, query, skip, take, MAX_TAKE)
