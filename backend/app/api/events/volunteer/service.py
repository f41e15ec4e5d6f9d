import logging

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.events.models import Events, EventStatus
from app.api.events.service import get_event
from app.api.events.volunteer.models import EventVolunteers, VolunteerStatus
from app.api.events.volunteer.schemas import VolunteerApplicationCreate
from app.api.notifications.models import NotificationType
from app.api.notifications.service import add_notification
from app.api.users.models import CurrentRole, Users
from app.core.auth.permissions import (
    Actor,
    can_manage_event,
    ensure_allowed,
    ensure_participant_access,
)
from app.core.utils.keys import CompositeKey
from app.core.validations.exceptions import NotFoundError, PermissionDeniedError
from app.core.validations.schema import validate_unique
from app.db.mixins import utcnow

logger = logging.getLogger(__name__)


async def is_approved_volunteer(
    session: AsyncSession, user_id: str, event_id: str
) -> bool:
    return bool(
        await session.scalar(
            select(
                exists().where(
                    EventVolunteers.user_id == user_id,
                    EventVolunteers.event_id == event_id,
                    EventVolunteers.status == VolunteerStatus.APPROVED,
                )
            )
        )
    )


async def ensure_event_access(
    session: AsyncSession,
    actor: Actor,
    event: Events,
    action: str,
    target_user_id: str | None = None,
):
    """Staff, the target user, or an approved volunteer of ``event``."""
    approved = False
    if not can_manage_event(actor, event.organizer_id) and actor.id != target_user_id:
        approved = await is_approved_volunteer(session, actor.id, event.id)
    ensure_participant_access(
        actor,
        event.organizer_id,
        action,
        target_user_id=target_user_id,
        is_approved_volunteer=approved,
    )


async def _get_application(session: AsyncSession, key: CompositeKey) -> EventVolunteers:
    result = await session.execute(
        select(EventVolunteers)
        .where(
            EventVolunteers.user_id == key.user_id,
            EventVolunteers.event_id == key.event_id,
        )
        .execution_options(populate_existing=True)
    )
    application = result.scalars().first()
    if application is None:
        raise NotFoundError("Volunteer application", str(key))
    return application


async def apply(
    session: AsyncSession, actor: Actor, application: VolunteerApplicationCreate
) -> EventVolunteers:
    user = await session.get(Users, actor.id)
    if user is None:
        raise NotFoundError("User", actor.id)
    if user.current_role != CurrentRole.ATTENDEE:
        raise PermissionDeniedError(
            "Only users with ATTENDEE role can apply for volunteer positions"
        )
    event = await get_event(session, application.event_id)
    if event.status != EventStatus.PUBLISHED or not event.accepting_volunteers:
        raise PermissionDeniedError(
            f"Cannot apply to event with ID {event.id}. "
            "Event is not published or is not accepting volunteers."
        )
    await validate_unique(
        session,
        "You have already applied to volunteer for this event",
        unique_together=[
            {
                "user_id": (EventVolunteers, actor.id),
                "event_id": (EventVolunteers, event.id),
            }
        ],
    )

    key = CompositeKey(actor.id, event.id)
    session.add(
        EventVolunteers(
            user_id=actor.id,
            event_id=event.id,
            motivation=application.motivation,
        )
    )
    add_notification(
        session,
        user_id=event.organizer_id,
        type=NotificationType.APPLICATION_UPDATE,
        message=f"New volunteer application from {user.full_name}",
        event_id=event.id,
        application_id=str(key),
    )
    await session.commit()
    logger.info("Volunteer application %s submitted", key)
    return await _get_application(session, key)


async def get_application(
    session: AsyncSession, actor: Actor, key: CompositeKey
) -> EventVolunteers:
    event = await get_event(session, key.event_id)
    application = await _get_application(session, key)
    ensure_participant_access(
        actor, event.organizer_id, "view volunteers for", target_user_id=key.user_id
    )
    return application


async def update_status(
    session: AsyncSession, actor: Actor, key: CompositeKey, status: VolunteerStatus
) -> EventVolunteers:
    event = await get_event(session, key.event_id)
    application = await _get_application(session, key)
    ensure_allowed(actor, event.organizer_id, "manage volunteers for")

    application.status = status
    application.approved_at = (
        utcnow() if status == VolunteerStatus.APPROVED else None
    )
    if status != VolunteerStatus.PENDING:
        add_notification(
            session,
            user_id=key.user_id,
            type=NotificationType.APPLICATION_UPDATE,
            message=(
                f"Your volunteer application for {event.name} "
                f"has been {status.value.lower()}"
            ),
            event_id=event.id,
            application_id=str(key),
        )
    await session.commit()
    logger.info("Volunteer application %s set to %s", key, status.value)
    return await _get_application(session, key)


async def list_event_volunteers(
    session: AsyncSession,
    actor: Actor,
    event_id: str,
    status: VolunteerStatus | None = VolunteerStatus.APPROVED,
) -> list[EventVolunteers]:
    event = await get_event(session, event_id)
    await ensure_event_access(session, actor, event, "view volunteers for")
    query = select(EventVolunteers).where(EventVolunteers.event_id == event_id)
    if status is not None:
        query = query.where(EventVolunteers.status == status)
    result = await session.execute(
        query.order_by(EventVolunteers.created_at.desc())
    )
    return list(result.scalars())


async def list_my_applications(
    session: AsyncSession, actor: Actor
) -> list[EventVolunteers]:
    result = await session.execute(
        select(EventVolunteers)
        .join(Events, Events.id == EventVolunteers.event_id)
        .where(EventVolunteers.user_id == actor.id, Events.deleted_at.is_(None))
        .order_by(EventVolunteers.created_at.desc())
    )
    return list(result.scalars())


async def remove(
    session: AsyncSession, actor: Actor, key: CompositeKey
) -> EventVolunteers:
    event = await get_event(session, key.event_id)
    application = await _get_application(session, key)
    ensure_participant_access(
        actor, event.organizer_id, "manage volunteers for", target_user_id=key.user_id
    )
    await session.delete(application)
    await session.commit()
    logger.info("Volunteer application %s removed by %s", key, actor.id)
    return application
