from datetime import datetime, timezone
from sqlalchemy import Column
from app.core.utils.db_fields import TZAwareDateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SoftDeleteMixin:
    deleted_at = Column(TZAwareDateTime(timezone=True), nullable=True, index=True)

    def soft_delete(self):
        self.deleted_at = utcnow()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def not_deleted(cls):
        return cls.deleted_at.is_(None)


class TimestampsMixin:
    created_at = Column(
        TZAwareDateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at = Column(
        TZAwareDateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
