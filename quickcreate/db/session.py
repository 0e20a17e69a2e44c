from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from quickcreate.core.config import settings

Base = declarative_base()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine. SQLite URLs skip the server pool options."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, future=True, **kwargs)
    # pool_pre_ping: check connection is alive before use.
    # pool_recycle: discard connections after this many seconds to avoid stale connections.
    options = {"pool_pre_ping": True, "pool_recycle": 300}
    options.update(kwargs)
    return create_async_engine(database_url, echo=False, future=True, **options)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
AsyncSessionLocal = build_sessionmaker(engine)


async def create_all(bind: AsyncEngine = engine) -> None:
    """Create missing tables. Intended for local setups and tests; production uses migrations."""
    # Register every model on Base.metadata before creating tables
    import quickcreate.core.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session
