import enum

from sqlalchemy import CheckConstraint, Column, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import AbstractSQLModel, generate_uuid
from app.db.mixins import TimestampsMixin


class CommentStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class CommentRatings(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "comment_ratings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    comment_text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    status = Column(
        Enum(CommentStatus), nullable=False, default=CommentStatus.ACTIVE, index=True
    )

    user = relationship("Users", lazy="selectin")
    event = relationship("Events", lazy="selectin")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_comment_rating_range"),
    )
