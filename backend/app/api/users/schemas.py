from pydantic import Field

from app.api.users.models import CurrentRole, SystemRole
from app.core.response.base_model import CustomBaseModel


class UserPublicMin(CustomBaseModel):
    id: str = Field(...)
    full_name: str = Field(...)


class UserPublic(UserPublicMin):
    username: str = Field(...)
    email: str = Field(...)
    system_role: SystemRole = Field(...)
    current_role: CurrentRole = Field(...)
