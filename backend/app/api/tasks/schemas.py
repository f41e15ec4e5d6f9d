from datetime import datetime
from typing import Optional

from pydantic import Field

from app.api.tasks.models import TaskStatus
from app.api.users.schemas import UserPublicMin
from app.core.response.base_model import CustomBaseModel


class TaskBase(CustomBaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None)
    type: str | None = Field(None, max_length=100)
    due_date: datetime | None = Field(None)


class TaskCreate(TaskBase):
    event_id: str = Field(..., min_length=1)
    status: TaskStatus = Field(TaskStatus.PENDING)


class TaskUpdate(CustomBaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None)
    type: Optional[str] = Field(None, max_length=100)
    due_date: Optional[datetime] = Field(None)
    status: Optional[TaskStatus] = Field(None)


class TaskEvent(CustomBaseModel):
    id: str = Field(...)
    name: str = Field(...)
    organizer_id: str = Field(...)


class TaskAssignmentPublic(CustomBaseModel):
    id: str = Field(...)
    volunteer_id: str = Field(...)
    assigned_by_id: str = Field(...)
    status: TaskStatus = Field(...)
    volunteer: UserPublicMin | None = Field(None)


class TaskResponse(TaskBase):
    id: str = Field(...)
    event_id: str = Field(...)
    status: TaskStatus = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    event: TaskEvent | None = Field(None)
    assignments: list[TaskAssignmentPublic] = Field(default_factory=list)
