from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from studyai.core.config import settings
from studyai.core.logging import get_logger


Base = declarative_base()

logger = get_logger(__name__)


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Async engine for ``url``; extra kwargs go to ``create_async_engine``."""
    options: dict[str, Any] = {"echo": settings.app.is_testing is True}
    if url.startswith("postgresql"):
        options["pool_pre_ping"] = True
    options.update(kwargs)
    return create_async_engine(url, **options)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


connection_string = settings.database_url

engine = build_engine(connection_string)
async_session_maker = build_session_maker(engine)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Session rolled back: %s", e)
            raise
