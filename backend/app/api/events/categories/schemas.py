from pydantic import Field

from app.api.events.schemas import EventCategoryResponse, EventResponse


class EventCategoryDetail(EventCategoryResponse):
    events: list[EventResponse] = Field([])
