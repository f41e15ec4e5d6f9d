import enum

from sqlalchemy import Column, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.core.utils.keys import CompositeKey
from app.db.base import AbstractSQLModel
from app.db.mixins import TimestampsMixin


class AttendanceStatus(enum.Enum):
    REGISTERED = "REGISTERED"
    JOINED = "JOINED"
    LEFT_EARLY = "LEFT_EARLY"
    NO_SHOW = "NO_SHOW"


class EventAttendances(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "event_attendances"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id"), primary_key=True)
    status = Column(
        Enum(AttendanceStatus),
        nullable=False,
        default=AttendanceStatus.REGISTERED,
        index=True,
    )
    checked_in_at = Column(TZAwareDateTime(timezone=True), nullable=True)
    checked_out_at = Column(TZAwareDateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    updated_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    user = relationship("Users", foreign_keys=[user_id], lazy="selectin")
    event = relationship("Events", lazy="selectin")

    @property
    def attendance_id(self) -> str:
        return str(CompositeKey(self.user_id, self.event_id))
