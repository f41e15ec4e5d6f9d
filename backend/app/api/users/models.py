import enum

from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from app.db.base import AbstractSQLModel, generate_uuid
from app.db.mixins import SoftDeleteMixin, TimestampsMixin


class SystemRole(enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class CurrentRole(enum.Enum):
    ATTENDEE = "ATTENDEE"
    VOLUNTEER = "VOLUNTEER"


class Users(AbstractSQLModel, TimestampsMixin, SoftDeleteMixin):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(100), nullable=False)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    system_role = Column(Enum(SystemRole), nullable=False, default=SystemRole.USER)
    current_role = Column(
        Enum(CurrentRole), nullable=False, default=CurrentRole.ATTENDEE
    )

    notifications = relationship(
        "Notifications", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return self.username
