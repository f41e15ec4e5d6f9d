import enum

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.db.base import AbstractSQLModel, generate_uuid
from app.db.mixins import SoftDeleteMixin, TimestampsMixin


class EventStatus(enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class EventLifecycle(enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    DELETED = "DELETED"


class EventCategories(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "event_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False, unique=True)
    image = Column(String, nullable=True)

    events = relationship("Events", back_populates="category")


class Events(AbstractSQLModel, TimestampsMixin, SoftDeleteMixin):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date_time = Column(TZAwareDateTime(timezone=True), nullable=False, index=True)
    location_desc = Column(String, nullable=False)
    status = Column(
        Enum(EventStatus), nullable=False, default=EventStatus.DRAFT, index=True
    )
    accepting_volunteers = Column(Boolean, nullable=False, default=False)
    profile_image = Column(String, nullable=True)
    cover_image = Column(String, nullable=True)
    location_image = Column(String, nullable=True)

    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(
        String(36), ForeignKey("event_categories.id"), nullable=False, index=True
    )

    organizer = relationship("Users", lazy="selectin")
    category = relationship("EventCategories", back_populates="events", lazy="selectin")

    @property
    def lifecycle(self) -> EventLifecycle:
        """Stored status, or DELETED once the event has been soft-deleted."""
        if self.deleted_at is not None:
            return EventLifecycle.DELETED
        return EventLifecycle(self.status.value)
