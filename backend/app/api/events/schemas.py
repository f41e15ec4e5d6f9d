from datetime import datetime
from typing import Optional

from pydantic import Field

from app.api.events.models import EventLifecycle, EventStatus
from app.api.users.schemas import UserPublicMin
from app.core.response.base_model import CustomBaseModel


class EventCategoryBase(CustomBaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    image: str | None = Field(None)


class EventCategoryCreate(EventCategoryBase):
    pass


class EventCategoryUpdate(CustomBaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    image: str | None = Field(None)


class EventCategoryPublic(EventCategoryBase):
    id: str = Field(...)


class EventCategoryResponse(EventCategoryPublic):
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)


class EventCategoryWithCount(EventCategoryPublic):
    event_count: int = Field(0)


class EventBase(CustomBaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    date_time: datetime = Field(...)
    location_desc: str = Field(..., min_length=1)
    profile_image: str | None = Field(None)
    cover_image: str | None = Field(None)
    location_image: str | None = Field(None)


class EventCreate(EventBase):
    category_id: str = Field(...)
    status: EventStatus = Field(EventStatus.DRAFT)
    accepting_volunteers: bool = Field(False)


class EventUpdate(CustomBaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    date_time: Optional[datetime] = Field(None)
    location_desc: Optional[str] = Field(None, min_length=1)
    profile_image: Optional[str] = Field(None)
    cover_image: Optional[str] = Field(None)
    location_image: Optional[str] = Field(None)
    category_id: Optional[str] = Field(None)
    status: Optional[EventStatus] = Field(None)
    accepting_volunteers: Optional[bool] = Field(None)


class EventStatusUpdate(CustomBaseModel):
    status: EventStatus = Field(...)


class VolunteerToggle(CustomBaseModel):
    accepting_volunteers: bool | None = Field(None)


class EventResponse(EventBase):
    id: str = Field(...)
    status: EventStatus = Field(...)
    lifecycle: EventLifecycle = Field(...)
    accepting_volunteers: bool = Field(...)
    organizer_id: str = Field(...)
    category_id: str = Field(...)
    organizer: UserPublicMin | None = Field(None)
    category: EventCategoryPublic | None = Field(None)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    deleted_at: datetime | None = Field(None)


class EventFilters(CustomBaseModel):
    status: EventStatus | None = None
    category_id: str | None = None
    search: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    organizer_id: str | None = None
