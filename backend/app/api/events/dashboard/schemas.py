from pydantic import Field

from app.api.events.schemas import EventCategoryWithCount, EventResponse
from app.api.users.models import SystemRole
from app.core.response.base_model import CustomBaseModel
from app.core.response.pagination import PaginatedResponse


class DashboardOverview(CustomBaseModel):
    total_events: int = Field(0)
    published_events: int = Field(0)
    draft_events: int = Field(0)
    completed_events: int = Field(0)
    cancelled_events: int = Field(0)
    total_attendees: int = Field(0)
    total_volunteers: int = Field(0)


class DashboardBuckets(CustomBaseModel):
    upcoming: PaginatedResponse[EventResponse]
    completed: PaginatedResponse[EventResponse]
    drafts: PaginatedResponse[EventResponse]
    cancelled: PaginatedResponse[EventResponse]


class DashboardResponse(CustomBaseModel):
    role: SystemRole
    organizer_id: str | None = Field(None)
    overview: DashboardOverview
    buckets: DashboardBuckets
    categories: list[EventCategoryWithCount]
    recent_activity: list[EventResponse]


class DashboardStatsResponse(DashboardOverview):
    role: SystemRole
    organizer_id: str | None = Field(None)
