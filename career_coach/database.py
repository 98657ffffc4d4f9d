from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from career_coach.config import get_settings
from career_coach.utils.logger import logger

settings = get_settings()

# Postgres (asyncpg) on Railway, aiosqlite locally
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Request-scoped session; anything left uncommitted on error is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the users and industry_insights tables if missing"""
    from career_coach.models import user, industry_insight  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database ready ({engine.url.get_backend_name()}): {', '.join(sorted(Base.metadata.tables))}")


async def close_db():
    await engine.dispose()
    logger.info("Database connections closed")
