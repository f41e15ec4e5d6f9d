from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validations.exceptions import ConflictError, NotFoundError
from app.db.mixins import SoftDeleteMixin


async def validate_relations(session: AsyncSession, validation: dict[str, tuple]):
    """Check that every referenced row exists.

    ``validation`` maps a display name to ``(Model, id)``; ``None`` ids are
    skipped. The first missing row raises ``NotFoundError``.
    """
    for kind, (schema, value) in validation.items():
        if value is None:
            continue
        query = exists().where(schema.id == value)
        if issubclass(schema, SoftDeleteMixin):
            query = query.where(schema.deleted_at.is_(None))
        if not await session.scalar(select(query)):
            raise NotFoundError(kind, value)
    return True


async def validate_unique(
    session: AsyncSession,
    message: str,
    exclude_id=None,
    **kwargs,
):
    unique = kwargs.get("unique", {})
    check_deleted = kwargs.get("check_deleted", True)
    errors = {}
    for key, (schema, value) in unique.items():
        if not value:
            continue
        query = exists().where(getattr(schema, key) == value)
        if exclude_id is not None:
            query = query.where(schema.id != exclude_id)
        if check_deleted and issubclass(schema, SoftDeleteMixin):
            query = query.where(schema.deleted_at.is_(None))
        if await session.scalar(select(query)):
            errors[key] = f"{key} already exists"

    unique_together = kwargs.get("unique_together", [])
    for entry in unique_together:
        query = exists()
        skip = False

        if not isinstance(entry, dict):
            continue
        for key, (schema, value) in entry.items():
            if value is None:
                skip = True
                continue

            query = query.where(getattr(schema, key) == value)
            if check_deleted and issubclass(schema, SoftDeleteMixin):
                query = query.where(schema.deleted_at.is_(None))
        if not skip and await session.scalar(select(query)):
            key = list(entry.keys())[0]
            errors[key] = f"{key} already exists"
    if errors:
        raise ConflictError(message, errors=errors)
    return True
