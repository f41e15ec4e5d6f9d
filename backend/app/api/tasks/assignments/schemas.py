from datetime import datetime

from pydantic import Field

from app.api.tasks.models import TaskStatus
from app.api.users.schemas import UserPublicMin
from app.core.response.base_model import CustomBaseModel


class AssignmentCreate(CustomBaseModel):
    task_id: str = Field(..., min_length=1)
    volunteer_id: str = Field(..., min_length=1)
    status: TaskStatus = Field(TaskStatus.PENDING)


class AssignmentUpdate(CustomBaseModel):
    status: TaskStatus = Field(...)


class AssignmentTask(CustomBaseModel):
    id: str = Field(...)
    event_id: str = Field(...)
    name: str = Field(...)
    due_date: datetime | None = Field(None)
    status: TaskStatus = Field(...)


class AssignmentResponse(CustomBaseModel):
    id: str = Field(...)
    task_id: str = Field(...)
    volunteer_id: str = Field(...)
    assigned_by_id: str = Field(...)
    status: TaskStatus = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    task: AssignmentTask | None = Field(None)
    volunteer: UserPublicMin | None = Field(None)
    assigned_by: UserPublicMin | None = Field(None)
