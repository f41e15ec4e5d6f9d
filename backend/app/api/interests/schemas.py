from datetime import datetime

from pydantic import Field

from app.api.events.schemas import EventResponse
from app.api.users.schemas import UserPublic
from app.core.response.base_model import CustomBaseModel


class InterestCreate(CustomBaseModel):
    event_id: str = Field(...)


class InterestPublic(CustomBaseModel):
    user_id: str = Field(...)
    event_id: str = Field(...)
    interested_at: datetime = Field(...)


class InterestWithEvent(InterestPublic):
    event: EventResponse | None = Field(None)


class InterestWithUser(InterestPublic):
    user: UserPublic | None = Field(None)


class InterestCheck(CustomBaseModel):
    interested: bool = Field(...)


class MessageResponse(CustomBaseModel):
    message: str = Field(...)
