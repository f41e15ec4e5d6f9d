from fastapi import APIRouter

from app.api.events.dashboard import service
from app.api.events.dashboard.schemas import DashboardResponse, DashboardStatsResponse
from app.api.events.dashboard.service import DashboardBucket
from app.api.events.schemas import EventResponse
from app.core.auth.dependencies import AdminActor
from app.core.response.pagination import DashboardPaginationParams, PaginatedResponse
from app.db.core import SessionDep, SessionFactoryDep

router = APIRouter(prefix="/dashboard")


@router.get("", summary="Role-scoped admin dashboard")
async def get_dashboard(
    actor: AdminActor, session_factory: SessionFactoryDep
) -> DashboardResponse:
    return await service.get_dashboard(session_factory, actor)


@router.get("/stats", summary="Dashboard overview counts")
async def get_dashboard_stats(
    actor: AdminActor, session_factory: SessionFactoryDep
) -> DashboardStatsResponse:
    return await service.get_stats(session_factory, actor)


@router.get("/organizer/{organizer_id}", summary="All events of a single organizer")
async def get_organizer_events(
    organizer_id: str, actor: AdminActor, session: SessionDep
) -> list[EventResponse]:
    return await service.get_organizer_events(session, organizer_id)


@router.get("/{bucket}", summary="Paginated dashboard bucket")
async def get_dashboard_bucket(
    bucket: DashboardBucket,
    pagination: DashboardPaginationParams,
    actor: AdminActor,
    session_factory: SessionFactoryDep,
) -> PaginatedResponse[EventResponse]:
    return await service.get_bucket(
        session_factory, actor, bucket, pagination.page, pagination.limit
    )
