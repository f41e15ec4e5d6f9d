from fastapi import APIRouter

from app.api.comments.router import router as comments_router
from app.api.events.attendance.router import router as attendance_router
from app.api.events.categories.router import router as categories_router
from app.api.events.router import router as events_router
from app.api.events.volunteer.router import router as volunteers_router
from app.api.interests.router import router as interests_router
from app.api.notifications.router import router as notifications_router
from app.api.tasks.assignments.router import router as assignments_router
from app.api.tasks.router import router as tasks_router
from app.api.uploads.router import router as uploads_router

api_router = APIRouter(
    prefix="/api/v1",
    responses={404: {"description": "Not found"}},
)

api_router.include_router(router=events_router, tags=["events"])
api_router.include_router(router=categories_router, tags=["categories"])
api_router.include_router(router=volunteers_router, tags=["volunteers"])
api_router.include_router(router=attendance_router, tags=["attendance"])
api_router.include_router(router=interests_router, tags=["interests"])
api_router.include_router(router=notifications_router, tags=["notifications"])
api_router.include_router(router=comments_router, tags=["comments-ratings"])
api_router.include_router(router=tasks_router, tags=["tasks"])
api_router.include_router(router=assignments_router, tags=["assignments"])
api_router.include_router(router=uploads_router, tags=["file-upload"])
