from fastapi import APIRouter, status

from app.api.comments import service
from app.api.comments.schemas import (
    CommentRatingCreate,
    CommentRatingResponse,
    CommentRatingUpdate,
    RatingStats,
)
from app.core.auth.dependencies import AdminActor, AuthActor
from app.db.core import SessionDep

router = APIRouter(prefix="/comments-ratings")


@router.post(
    "", summary="Comment on and rate an event", status_code=status.HTTP_201_CREATED
)
async def create_comment(
    comment: CommentRatingCreate, actor: AuthActor, session: SessionDep
) -> CommentRatingResponse:
    return await service.create_comment(session, actor, comment)


@router.get("/event/{event_id}", summary="List active comments for an event")
async def event_comments(
    event_id: str, actor: AuthActor, session: SessionDep
) -> list[CommentRatingResponse]:
    return await service.list_event_comments(session, event_id)


@router.get("/event/{event_id}/stats", summary="Rating statistics for an event")
async def event_rating_stats(
    event_id: str, actor: AuthActor, session: SessionDep
) -> RatingStats:
    return await service.get_rating_stats(session, event_id)


@router.get("/my-comments", summary="List my comments")
async def my_comments(
    actor: AuthActor, session: SessionDep
) -> list[CommentRatingResponse]:
    return await service.list_user_comments(session, actor.id)


@router.get("/user/{user_id}", summary="List comments written by a user")
async def user_comments(
    user_id: str, actor: AdminActor, session: SessionDep
) -> list[CommentRatingResponse]:
    return await service.list_user_comments(session, user_id)


@router.get("/{comment_id}", summary="Get a comment")
async def get_comment(
    comment_id: str, actor: AuthActor, session: SessionDep
) -> CommentRatingResponse:
    return await service.get_comment(session, comment_id)


@router.patch("/{comment_id}", summary="Edit a comment")
async def update_comment(
    comment_id: str,
    changes: CommentRatingUpdate,
    actor: AuthActor,
    session: SessionDep,
) -> CommentRatingResponse:
    return await service.update_comment(session, actor, comment_id, changes)


@router.delete("/{comment_id}", summary="Delete a comment")
async def delete_comment(
    comment_id: str, actor: AuthActor, session: SessionDep
) -> CommentRatingResponse:
    return await service.delete_comment(session, actor, comment_id)
