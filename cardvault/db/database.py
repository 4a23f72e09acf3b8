"""
Engine and sessions for the card collection database.

The engine is built from settings.database_url (PostgreSQL via asyncpg in
production). Each API request or import run works in its own session:
    - routes receive one through the get_session dependency
    - jobs open one with async_session_factory()
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardvault.config import settings
from cardvault.db.operations import seed_languages
from cardvault.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Objects stay readable after commit, so routes can build responses from them
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session for one API request.

    Commits when the route returns, rolls back on a database error.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables and register the supported print languages."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        await seed_languages(session)
        await session.commit()
