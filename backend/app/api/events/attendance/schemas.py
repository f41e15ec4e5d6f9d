from datetime import datetime

from pydantic import Field

from app.api.events.attendance.models import AttendanceStatus
from app.api.users.schemas import UserPublic
from app.core.response.base_model import CustomBaseModel


class AttendanceCreate(CustomBaseModel):
    event_id: str = Field(...)
    user_id: str | None = Field(None)
    status: AttendanceStatus = Field(AttendanceStatus.REGISTERED)
    notes: str | None = Field(None, max_length=1000)


class AttendanceUpdate(CustomBaseModel):
    status: AttendanceStatus | None = Field(None)
    notes: str | None = Field(None, max_length=1000)


class AttendanceResponse(CustomBaseModel):
    attendance_id: str = Field(...)
    user_id: str = Field(...)
    event_id: str = Field(...)
    status: AttendanceStatus = Field(...)
    checked_in_at: datetime | None = Field(None)
    checked_out_at: datetime | None = Field(None)
    notes: str | None = Field(None)
    updated_by_id: str | None = Field(None)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    user: UserPublic | None = Field(None)


class AttendanceStats(CustomBaseModel):
    event_id: str = Field(...)
    total: int = Field(0)
    registered: int = Field(0)
    joined: int = Field(0)
    left_early: int = Field(0)
    no_show: int = Field(0)


class BulkCheckInRequest(CustomBaseModel):
    user_ids: list[str] = Field(...)


class BulkCheckInResult(CustomBaseModel):
    success: bool = Field(...)
    user_id: str = Field(...)
    attendance_id: str | None = Field(None)
    user_name: str | None = Field(None)
    error: str | None = Field(None)


class BulkCheckInResponse(CustomBaseModel):
    event_id: str = Field(...)
    checked_in_count: int = Field(...)
    failed_count: int = Field(...)
    results: list[BulkCheckInResult] = Field([])
