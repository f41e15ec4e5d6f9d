import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.models import EventCategories, Events, EventStatus
from app.api.events.query import build_event_query
from app.api.events.schemas import EventCreate, EventFilters, EventUpdate
from app.api.users.models import Users
from app.core.auth.permissions import Actor, ensure_allowed
from app.core.response.pagination import paginate
from app.core.validations.exceptions import NotFoundError
from app.core.validations.schema import validate_relations

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = ("profile_image", "cover_image", "location_image")


async def get_event(session: AsyncSession, event_id: str) -> Events:
    result = await session.execute(
        select(Events)
        .where(Events.id == event_id, Events.deleted_at.is_(None))
        .execution_options(populate_existing=True)
    )
    event = result.scalars().first()
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


async def create_event(
    session: AsyncSession, actor: Actor, event: EventCreate
) -> Events:
    await validate_relations(session, {"Category": (EventCategories, event.category_id)})
    db_event = Events(
        name=event.name,
        description=event.description,
        date_time=event.date_time,
        location_desc=event.location_desc,
        profile_image=event.profile_image,
        cover_image=event.cover_image,
        location_image=event.location_image,
        status=event.status,
        accepting_volunteers=event.accepting_volunteers,
        category_id=event.category_id,
        organizer_id=actor.id,
    )
    session.add(db_event)
    await session.commit()
    logger.info("Event %s created by %s", db_event.id, actor.id)
    return await get_event(session, db_event.id)


async def list_events(
    session_factory: async_sessionmaker,
    filters: EventFilters,
    page: int,
    limit: int,
):
    return await paginate(session_factory, build_event_query(filters), page, limit)


async def list_events_by_organizer(
    session: AsyncSession,
    session_factory: async_sessionmaker,
    organizer_id: str,
    page: int,
    limit: int,
):
    await validate_relations(session, {"User": (Users, organizer_id)})
    return await list_events(
        session_factory, EventFilters(organizer_id=organizer_id), page, limit
    )


async def update_event(
    session: AsyncSession, actor: Actor, event_id: str, event: EventUpdate
) -> Events:
    db_event = await get_event(session, event_id)
    ensure_allowed(actor, db_event.organizer_id, "update")

    changes = event.model_dump(exclude_unset=True)
    if changes.get("category_id") is not None:
        await validate_relations(
            session, {"Category": (EventCategories, changes["category_id"])}
        )
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(db_event, field, value)
    await session.commit()
    return await get_event(session, event_id)


async def update_event_status(
    session: AsyncSession, actor: Actor, event_id: str, status: EventStatus
) -> Events:
    db_event = await get_event(session, event_id)
    ensure_allowed(actor, db_event.organizer_id, "update status for")
    db_event.status = status
    await session.commit()
    logger.info("Event %s status set to %s", event_id, status.value)
    return await get_event(session, event_id)


async def toggle_volunteer_acceptance(
    session: AsyncSession, actor: Actor, event_id: str, accepting: bool | None = None
) -> Events:
    db_event = await get_event(session, event_id)
    ensure_allowed(actor, db_event.organizer_id, "update")
    db_event.accepting_volunteers = (
        not db_event.accepting_volunteers if accepting is None else accepting
    )
    await session.commit()
    return await get_event(session, event_id)


async def delete_event(session: AsyncSession, actor: Actor, event_id: str) -> Events:
    """Soft-delete an event: stamp ``deleted_at`` and force CANCELLED."""
    db_event = await get_event(session, event_id)
    ensure_allowed(actor, db_event.organizer_id, "delete")
    db_event.soft_delete()
    db_event.status = EventStatus.CANCELLED
    await session.commit()
    logger.info("Event %s soft-deleted by %s", event_id, actor.id)
    return db_event
