import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.notifications.models import Notifications, NotificationType
from app.core.response.pagination import paginate
from app.core.validations.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def add_notification(
    session: AsyncSession,
    user_id: str,
    type: NotificationType,
    message: str,
    event_id: str | None = None,
    application_id: str | None = None,
    announcement_id: str | None = None,
) -> Notifications:
    """Stage a notification on ``session``; the caller's commit persists it."""
    notification = Notifications(
        user_id=user_id,
        type=type,
        message=message,
        event_id=event_id,
        application_id=application_id,
        announcement_id=announcement_id,
    )
    session.add(notification)
    logger.debug("Queued %s notification for %s", type.value, user_id)
    return notification


async def list_notifications(
    session_factory: async_sessionmaker,
    user_id: str,
    page: int,
    limit: int,
    unread_only: bool = False,
):
    query = select(Notifications).where(Notifications.user_id == user_id)
    if unread_only:
        query = query.where(Notifications.read.is_(False))
    query = query.order_by(Notifications.sent_at.desc(), Notifications.id)
    return await paginate(session_factory, query, page, limit)


async def get_notification(
    session: AsyncSession, user_id: str, notification_id: str
) -> Notifications:
    result = await session.execute(
        select(Notifications).where(
            Notifications.id == notification_id, Notifications.user_id == user_id
        )
    )
    notification = result.scalars().first()
    if notification is None:
        raise NotFoundError("Notification", notification_id)
    return notification


async def unread_count(session: AsyncSession, user_id: str) -> dict:
    count = await session.scalar(
        select(func.count(Notifications.id)).where(
            Notifications.user_id == user_id, Notifications.read.is_(False)
        )
    )
    return {"count": count or 0}


async def mark_as_read(
    session: AsyncSession, user_id: str, notification_id: str
) -> Notifications:
    notification = await get_notification(session, user_id, notification_id)
    notification.read = True
    await session.commit()
    return notification


async def mark_all_as_read(session: AsyncSession, user_id: str) -> dict:
    result = await session.execute(
        update(Notifications)
        .where(Notifications.user_id == user_id, Notifications.read.is_(False))
        .values(read=True)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    return {"count": result.rowcount}
