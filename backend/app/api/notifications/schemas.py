from datetime import datetime

from pydantic import Field

from app.api.notifications.models import NotificationType
from app.core.response.base_model import CustomBaseModel


class NotificationSchema(CustomBaseModel):
    id: str = Field(...)
    user_id: str = Field(...)
    type: NotificationType = Field(...)
    message: str = Field(...)
    event_id: str | None = Field(None)
    announcement_id: str | None = Field(None)
    application_id: str | None = Field(None)
    read: bool = Field(...)
    sent_at: datetime = Field(...)


class NotificationCount(CustomBaseModel):
    count: int = Field(...)
