import asyncio
import logging
import os
from typing import Annotated, Any, Awaitable, Callable
from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)

from app.db.listeners import add_loader_criteria
from app.config import settings
from app.db.registry import *

engine_options = {}
if not settings.is_sqlite:
    engine_options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )

engine = create_async_engine(settings.DATABASE_URL, **engine_options)

AsyncSessionLocal = async_sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


async def get_session():
    async with AsyncSessionLocal() as session:
        add_loader_criteria(session)
        yield session


def get_session_factory() -> async_sessionmaker:
    return AsyncSessionLocal


SessionDep = Annotated[AsyncSession, Depends(get_session)]
SessionFactoryDep = Annotated[async_sessionmaker, Depends(get_session_factory)]


async def run_in_session(
    session_factory: async_sessionmaker,
    operation: Callable[[AsyncSession], Awaitable[Any]],
):
    async with session_factory() as session:
        add_loader_criteria(session)
        return await operation(session)


async def gather_settled(*aws: Awaitable[Any]) -> list:
    """Await every awaitable, then re-raise the first failure, if any.

    Nothing is still running once this returns or raises.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


async def gather_in_sessions(
    session_factory: async_sessionmaker,
    *operations: Callable[[AsyncSession], Awaitable[Any]],
) -> list:
    """Run independent read operations concurrently.

    An AsyncSession cannot be shared between concurrent tasks, so each
    operation gets its own session from ``session_factory``. The first
    failure propagates and no partial result is returned.
    """
    return await gather_settled(
        *(run_in_session(session_factory, operation) for operation in operations)
    )


# setup logging for sqlalchemy

if settings.SQL_LOG_FILE:
    logger = logging.getLogger("sqlalchemy.engine")
    logger.setLevel(logging.INFO)

    os.makedirs(os.path.dirname(settings.SQL_LOG_FILE) or ".", exist_ok=True)

    file_handler = logging.FileHandler(settings.SQL_LOG_FILE)
    file_handler.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
