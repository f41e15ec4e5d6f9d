import enum

from sqlalchemy import Boolean, Column, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.db.base import AbstractSQLModel, generate_uuid
from app.db.mixins import TimestampsMixin, utcnow


class NotificationType(enum.Enum):
    ANNOUNCEMENT = "ANNOUNCEMENT"
    APPLICATION_UPDATE = "APPLICATION_UPDATE"
    SYSTEM_ALERT = "SYSTEM_ALERT"
    EVENT_REMINDER = "EVENT_REMINDER"
    TASK_ASSIGNMENT = "TASK_ASSIGNMENT"


class Notifications(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(NotificationType), nullable=False)
    message = Column(Text, nullable=False)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=True, index=True)
    announcement_id = Column(String(36), nullable=True)
    # "userId:eventId" of the volunteer application the notification refers to
    application_id = Column(String(80), nullable=True)
    read = Column(Boolean, nullable=False, default=False, index=True)
    sent_at = Column(TZAwareDateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("Users", back_populates="notifications")
    event = relationship("Events", lazy="selectin")
