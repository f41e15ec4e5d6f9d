import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.events.models import EventCategories, Events
from app.api.events.schemas import EventCategoryCreate, EventCategoryUpdate
from app.core.validations.exceptions import ConflictError, NotFoundError
from app.core.validations.schema import validate_unique

logger = logging.getLogger(__name__)

RECENT_EVENTS_LIMIT = 10


async def _get_category(session: AsyncSession, category_id: str) -> EventCategories:
    category = await session.get(EventCategories, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


async def create_category(
    session: AsyncSession, category: EventCategoryCreate
) -> EventCategories:
    await validate_unique(
        session,
        f"Category with name '{category.name}' already exists",
        unique={"name": (EventCategories, category.name)},
    )
    db_category = EventCategories(name=category.name, image=category.image)
    session.add(db_category)
    await session.commit()
    await session.refresh(db_category)
    return db_category


async def list_categories_with_counts(
    session: AsyncSession, organizer_id: str | None = None
) -> list[dict]:
    """Every category with the number of live events in it.

    With ``organizer_id`` only that organizer's events are counted.
    """
    join_on = (Events.category_id == EventCategories.id) & Events.deleted_at.is_(None)
    if organizer_id is not None:
        join_on = join_on & (Events.organizer_id == organizer_id)
    query = (
        select(EventCategories, func.count(Events.id))
        .outerjoin(Events, join_on)
        .group_by(EventCategories.id)
        .order_by(EventCategories.name)
    )
    result = await session.execute(query)
    return [
        {
            "id": category.id,
            "name": category.name,
            "image": category.image,
            "event_count": count,
        }
        for category, count in result.all()
    ]


async def get_category(session: AsyncSession, category_id: str) -> dict:
    category = await _get_category(session, category_id)
    events = await session.execute(
        select(Events)
        .where(Events.category_id == category_id, Events.deleted_at.is_(None))
        .order_by(Events.date_time.desc())
        .limit(RECENT_EVENTS_LIMIT)
    )
    return {
        "id": category.id,
        "name": category.name,
        "image": category.image,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
        "events": list(events.scalars()),
    }


async def update_category(
    session: AsyncSession, category_id: str, category: EventCategoryUpdate
) -> EventCategories:
    db_category = await _get_category(session, category_id)
    changes = category.model_dump(exclude_unset=True)
    if changes.get("name") and changes["name"] != db_category.name:
        await validate_unique(
            session,
            f"Category with name '{changes['name']}' already exists",
            exclude_id=category_id,
            unique={"name": (EventCategories, changes["name"])},
        )
    for field, value in changes.items():
        if field == "name" and not value:
            continue
        setattr(db_category, field, value)
    await session.commit()
    await session.refresh(db_category)
    return db_category


async def delete_category(session: AsyncSession, category_id: str) -> EventCategories:
    db_category = await _get_category(session, category_id)
    # soft-deleted events keep their category reference, so they count too
    in_use = await session.scalar(
        select(func.count(Events.id))
        .where(Events.category_id == category_id)
        .execution_options(include_deleted=True)
    )
    if in_use:
        raise ConflictError(
            f"Cannot delete category with {in_use} associated events"
        )
    await session.delete(db_category)
    await session.commit()
    logger.info("Category %s deleted", category_id)
    return db_category
