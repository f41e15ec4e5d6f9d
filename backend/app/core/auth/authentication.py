from fastapi.security import HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.users.models import Users

bearer_scheme = HTTPBearer(auto_error=False)


async def get_user(session: AsyncSession, user_id: str) -> Users | None:
    query = select(Users).where(Users.id == user_id, Users.deleted_at.is_(None))
    result = await session.execute(query)
    return result.scalars().first()
