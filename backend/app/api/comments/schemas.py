from datetime import datetime

from pydantic import Field

from app.api.comments.models import CommentStatus
from app.api.users.schemas import UserPublicMin
from app.core.response.base_model import CustomBaseModel


class CommentRatingCreate(CustomBaseModel):
    event_id: str = Field(..., min_length=1)
    comment_text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)


class CommentRatingUpdate(CustomBaseModel):
    comment_text: str | None = Field(None, min_length=1)
    rating: int | None = Field(None, ge=1, le=5)
    status: CommentStatus | None = Field(None)


class CommentEvent(CustomBaseModel):
    id: str = Field(...)
    name: str = Field(...)
    date_time: datetime = Field(...)


class CommentRatingResponse(CustomBaseModel):
    id: str = Field(...)
    event_id: str = Field(...)
    user_id: str = Field(...)
    comment_text: str = Field(...)
    rating: int = Field(...)
    status: CommentStatus = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    user: UserPublicMin | None = Field(None)
    event: CommentEvent | None = Field(None)


class RatingBucket(CustomBaseModel):
    rating: int = Field(...)
    count: int = Field(...)


class RatingStats(CustomBaseModel):
    average_rating: float = Field(0)
    total_ratings: int = Field(0)
    highest_rating: int = Field(0)
    lowest_rating: int = Field(0)
    rating_distribution: list[RatingBucket] = Field(default_factory=list)
