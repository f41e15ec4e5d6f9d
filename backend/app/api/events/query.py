from datetime import datetime
from typing import Annotated, Optional

from fastapi import Query
from sqlalchemy import Select, or_, select

from app.api.events.models import Events, EventStatus
from app.api.events.schemas import EventFilters
from app.core.validations.exceptions import RequestValidationError


def parse_event_status(value: str | None) -> EventStatus | None:
    if value is None or value == "":
        return None
    try:
        return EventStatus(value.upper())
    except ValueError:
        raise RequestValidationError("Invalid event status")


def get_event_filters(
    status: Annotated[Optional[str], Query()] = None,
    category_id: Annotated[Optional[str], Query(alias="categoryId")] = None,
    search: Annotated[Optional[str], Query()] = None,
    date_from: Annotated[Optional[datetime], Query(alias="dateFrom")] = None,
    date_to: Annotated[Optional[datetime], Query(alias="dateTo")] = None,
) -> EventFilters:
    return EventFilters(
        status=parse_event_status(status),
        category_id=category_id or None,
        search=search.strip() if search and search.strip() else None,
        date_from=date_from,
        date_to=date_to,
    )


def event_filter_criteria(filters: EventFilters) -> list:
    """WHERE criteria for ``filters``; soft-deleted events are always excluded."""
    criteria = [Events.deleted_at.is_(None)]
    if filters.status is not None:
        criteria.append(Events.status == filters.status)
    if filters.category_id:
        criteria.append(Events.category_id == filters.category_id)
    if filters.organizer_id:
        criteria.append(Events.organizer_id == filters.organizer_id)
    if filters.search:
        pattern = f"%{filters.search}%"
        criteria.append(
            or_(Events.name.ilike(pattern), Events.description.ilike(pattern))
        )
    if filters.date_from is not None:
        criteria.append(Events.date_time >= filters.date_from)
    if filters.date_to is not None:
        criteria.append(Events.date_time <= filters.date_to)
    return criteria


def event_ordering(status: EventStatus | None) -> tuple:
    if status == EventStatus.PUBLISHED:
        return (Events.date_time.desc(), Events.id)
    return (Events.updated_at.desc(), Events.id)


def build_event_query(filters: EventFilters | None = None) -> Select:
    filters = filters or EventFilters()
    return (
        select(Events)
        .where(*event_filter_criteria(filters))
        .order_by(*event_ordering(filters.status))
    )
