"""Role-scoped dashboard for organizers and administrators.

A SUPER_ADMIN sees system-wide figures; any other caller sees the same
structure restricted to the events they organize. All sub-queries are
issued concurrently, each in its own session, and any data-access
failure discards the whole response.
"""

import enum
import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.events.attendance.models import EventAttendances
from app.api.events.categories.service import list_categories_with_counts
from app.api.events.models import Events, EventStatus
from app.api.events.query import build_event_query, event_filter_criteria
from app.api.events.schemas import EventFilters
from app.api.events.volunteer.models import EventVolunteers, VolunteerStatus
from app.api.users.models import Users
from app.core.auth.permissions import Actor
from app.core.response.pagination import paginate
from app.core.validations.exceptions import RequestValidationError, UpstreamError
from app.core.validations.schema import validate_relations
from app.db.core import gather_in_sessions, gather_settled, run_in_session
from app.db.mixins import utcnow

logger = logging.getLogger(__name__)

BUCKET_PAGE = 1
BUCKET_LIMIT = 20
RECENT_LIMIT = 10
STATS_FAILURE = "Failed to retrieve statistics"


class DashboardBucket(enum.Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    DRAFTS = "drafts"
    CANCELLED = "cancelled"


def bucket_filters(
    bucket: DashboardBucket, organizer_id: str | None, now: datetime
) -> EventFilters:
    if bucket == DashboardBucket.UPCOMING:
        return EventFilters(
            status=EventStatus.PUBLISHED, date_from=now, organizer_id=organizer_id
        )
    status = {
        DashboardBucket.COMPLETED: EventStatus.COMPLETED,
        DashboardBucket.DRAFTS: EventStatus.DRAFT,
        DashboardBucket.CANCELLED: EventStatus.CANCELLED,
    }[bucket]
    return EventFilters(status=status, organizer_id=organizer_id)


def scope_for(actor: Actor) -> str | None:
    """Organizer id the caller's dashboard is restricted to, if any."""
    return None if actor.is_super_admin else actor.id


def _validate_organizer_id(organizer_id: str | None) -> None:
    if organizer_id is not None and not organizer_id.strip():
        raise RequestValidationError("Organizer ID is required")


async def get_bucket_page(
    session_factory: async_sessionmaker,
    bucket: DashboardBucket,
    organizer_id: str | None,
    page: int = BUCKET_PAGE,
    limit: int = BUCKET_LIMIT,
    now: datetime | None = None,
):
    filters = bucket_filters(bucket, organizer_id, now or utcnow())
    return await paginate(session_factory, build_event_query(filters), page, limit)


async def get_overview(
    session_factory: async_sessionmaker, organizer_id: str | None
) -> dict:
    criteria = event_filter_criteria(EventFilters(organizer_id=organizer_id))

    async def status_counts(session: AsyncSession):
        result = await session.execute(
            select(Events.status, func.count(Events.id))
            .where(*criteria)
            .group_by(Events.status)
        )
        return {status: count for status, count in result.all()}

    async def attendee_count(session: AsyncSession):
        return await session.scalar(
            select(func.count())
            .select_from(EventAttendances)
            .join(Events, Events.id == EventAttendances.event_id)
            .where(*criteria)
        )

    async def volunteer_count(session: AsyncSession):
        return await session.scalar(
            select(func.count())
            .select_from(EventVolunteers)
            .join(Events, Events.id == EventVolunteers.event_id)
            .where(EventVolunteers.status == VolunteerStatus.APPROVED, *criteria)
        )

    by_status, attendees, volunteers = await gather_in_sessions(
        session_factory, status_counts, attendee_count, volunteer_count
    )
    return {
        "total_events": sum(by_status.values()),
        "published_events": by_status.get(EventStatus.PUBLISHED, 0),
        "draft_events": by_status.get(EventStatus.DRAFT, 0),
        "completed_events": by_status.get(EventStatus.COMPLETED, 0),
        "cancelled_events": by_status.get(EventStatus.CANCELLED, 0),
        "total_attendees": attendees or 0,
        "total_volunteers": volunteers or 0,
    }


async def get_recent_events(
    session: AsyncSession, organizer_id: str | None, limit: int = RECENT_LIMIT
) -> list[Events]:
    result = await session.execute(
        select(Events)
        .where(*event_filter_criteria(EventFilters(organizer_id=organizer_id)))
        .order_by(Events.created_at.desc(), Events.id)
        .limit(limit)
    )
    return list(result.scalars())


async def build_dashboard(
    session_factory: async_sessionmaker, actor: Actor, organizer_id: str | None
) -> dict:
    _validate_organizer_id(organizer_id)
    now = utcnow()
    try:
        (
            upcoming,
            completed,
            drafts,
            cancelled,
            overview,
            categories,
            recent,
        ) = await gather_settled(
            *(
                get_bucket_page(session_factory, bucket, organizer_id, now=now)
                for bucket in DashboardBucket
            ),
            get_overview(session_factory, organizer_id),
            run_in_session(
                session_factory,
                lambda session: list_categories_with_counts(session, organizer_id),
            ),
            run_in_session(
                session_factory,
                lambda session: get_recent_events(session, organizer_id),
            ),
        )
    except SQLAlchemyError:
        logger.exception("Dashboard aggregation failed for %s", actor.id)
        raise UpstreamError(STATS_FAILURE)

    return {
        "role": actor.system_role,
        "organizer_id": organizer_id,
        "overview": overview,
        "buckets": {
            "upcoming": upcoming,
            "completed": completed,
            "drafts": drafts,
            "cancelled": cancelled,
        },
        "categories": categories,
        "recent_activity": recent,
    }


async def get_dashboard(session_factory: async_sessionmaker, actor: Actor) -> dict:
    return await build_dashboard(session_factory, actor, scope_for(actor))


async def get_organizer_events(
    session: AsyncSession, organizer_id: str
) -> list[Events]:
    """Every non-deleted event of one organizer, latest date first."""
    _validate_organizer_id(organizer_id)
    await validate_relations(session, {"User": (Users, organizer_id)})
    result = await session.execute(
        select(Events)
        .where(*event_filter_criteria(EventFilters(organizer_id=organizer_id)))
        .order_by(Events.date_time.desc(), Events.id)
    )
    return list(result.scalars())


async def get_stats(session_factory: async_sessionmaker, actor: Actor) -> dict:
    organizer_id = scope_for(actor)
    try:
        overview = await get_overview(session_factory, organizer_id)
    except SQLAlchemyError:
        logger.exception("Dashboard statistics failed for %s", actor.id)
        raise UpstreamError(STATS_FAILURE)
    return {"role": actor.system_role, "organizer_id": organizer_id, **overview}


async def get_bucket(
    session_factory: async_sessionmaker,
    actor: Actor,
    bucket: DashboardBucket,
    page: int,
    limit: int,
):
    try:
        return await get_bucket_page(
            session_factory, bucket, scope_for(actor), page, limit
        )
    except SQLAlchemyError:
        logger.exception("Dashboard bucket %s failed for %s", bucket.value, actor.id)
        raise UpstreamError(STATS_FAILURE)
