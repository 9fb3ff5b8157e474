import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings

logger = logging.getLogger(__name__)

_raw_url = settings.database_url

if _raw_url.startswith("postgres://"):
    _raw_url = _raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
elif _raw_url.startswith("postgresql://"):
    _raw_url = _raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)

engine = create_async_engine(_raw_url, pool_pre_ping=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

PROFILES_DDL = (
    "CREATE TABLE IF NOT EXISTS coach_profiles ("
    "user_id TEXT PRIMARY KEY, "
    "state JSONB NOT NULL, "
    "updated_at TIMESTAMPTZ NOT NULL DEFAULT now())"
)


async def init_db() -> None:
    """Create the coach_profiles table if missing."""
    async with engine.begin() as conn:
        await conn.execute(text(PROFILES_DDL))
    logger.info("coach_profiles table ready")


async def get_session() -> AsyncSession:  # type: ignore[misc]
    async with async_session() as session:
        yield session
