"""SQLAlchemy async engine + session factory for the SQL skill store."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from skillbuilder.config import settings


class Base(DeclarativeBase):
    pass


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = create_async_engine(settings.database_url, echo=False)
async_session = make_session_factory(engine)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create all tables (dev convenience — use Alembic in production)."""
    # Register models on Base.metadata before create_all
    import skillbuilder.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
