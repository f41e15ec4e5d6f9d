import enum

from sqlalchemy import Column, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.utils.db_fields import TZAwareDateTime
from app.db.base import AbstractSQLModel, generate_uuid
from app.db.mixins import TimestampsMixin


class TaskStatus(enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Tasks(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(100), nullable=True)
    due_date = Column(TZAwareDateTime(timezone=True), nullable=True)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.PENDING)

    event = relationship("Events", lazy="selectin")
    assignments = relationship(
        "TaskAssignments",
        back_populates="task",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class TaskAssignments(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "task_assignments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    task_id = Column(String(36), ForeignKey("tasks.id"), nullable=False, index=True)
    volunteer_id = Column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    assigned_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.PENDING)

    task = relationship("Tasks", back_populates="assignments", lazy="selectin")
    volunteer = relationship("Users", foreign_keys=[volunteer_id], lazy="selectin")
    assigned_by = relationship("Users", foreign_keys=[assigned_by_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("task_id", "volunteer_id", name="uq_task_assignment"),
    )
