from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.db.base import AbstractSQLModel
from app.db.mixins import utcnow


class EventInterests(AbstractSQLModel):
    __tablename__ = "event_interests"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id"), primary_key=True)
    interested_at = Column(
        TZAwareDateTime(timezone=True), nullable=False, default=utcnow
    )

    user = relationship("Users", lazy="selectin")
    event = relationship("Events", lazy="selectin")
