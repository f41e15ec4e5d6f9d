import enum

from sqlalchemy import Column, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.db.base import AbstractSQLModel
from app.db.mixins import TimestampsMixin


class VolunteerStatus(enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class EventVolunteers(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "event_volunteers"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id"), primary_key=True)
    status = Column(
        Enum(VolunteerStatus), nullable=False, default=VolunteerStatus.PENDING
    )
    motivation = Column(Text, nullable=True)
    approved_at = Column(TZAwareDateTime(timezone=True), nullable=True)

    user = relationship("Users", lazy="selectin")
    event = relationship("Events", lazy="selectin")
