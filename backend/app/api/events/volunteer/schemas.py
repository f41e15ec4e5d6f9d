from datetime import datetime

from pydantic import Field

from app.api.events.schemas import EventResponse
from app.api.events.volunteer.models import VolunteerStatus
from app.api.users.schemas import UserPublic
from app.core.response.base_model import CustomBaseModel


class VolunteerApplicationCreate(CustomBaseModel):
    event_id: str = Field(...)
    motivation: str | None = Field(None, max_length=2000)


class VolunteerStatusUpdate(CustomBaseModel):
    status: VolunteerStatus = Field(...)


class VolunteerResponse(CustomBaseModel):
    user_id: str = Field(...)
    event_id: str = Field(...)
    status: VolunteerStatus = Field(...)
    motivation: str | None = Field(None)
    approved_at: datetime | None = Field(None)
    created_at: datetime = Field(...)
    user: UserPublic | None = Field(None)


class VolunteerWithEvent(VolunteerResponse):
    event: EventResponse | None = Field(None)
