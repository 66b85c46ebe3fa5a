from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker

from .config import Settings

# Base class for models
Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the process-wide async engine and its bounded connection pool."""
    url = settings.DATABASE_URL
    engine_kwargs = {"echo": settings.SQL_ECHO}

    # SQLite drivers use their own pool classes which reject sizing arguments
    if not url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.DB_POOL_MAX_IDLE,
            max_overflow=max(0, settings.DB_POOL_MAX_OPEN - settings.DB_POOL_MAX_IDLE),
            pool_recycle=settings.DB_POOL_MAX_LIFETIME,
        )

    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Dependency to get DB session
async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# Create all tables
async def create_tables(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(db: AsyncSession) -> None:
    await db.execute(text("SELECT 1"))
