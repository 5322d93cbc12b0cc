from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    echo=False,
)


def open_session() -> AsyncSession:
    return AsyncSession(engine)


async def get_session():
    async with open_session() as session:
        yield session


async def dispose_engine() -> None:
    await engine.dispose()
