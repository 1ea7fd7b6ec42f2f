import logging
import os

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from rental.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    # SQLite ignores REFERENCES clauses unless the pragma is set per connection
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs) -> AsyncEngine:
    if make_url(url).get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=settings.DB_ECHO, **kwargs)
        enable_sqlite_foreign_keys(engine)
        return engine

    kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
    kwargs.setdefault("max_overflow", settings.DB_MAX_OVERFLOW)
    return create_async_engine(url, echo=settings.DB_ECHO, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(bind: AsyncEngine = engine) -> None:
    from rental.models.base import Base
    import rental.models.vehicle  # noqa: F401
    import rental.models.booking  # noqa: F401

    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database schema ready on {url.render_as_string(hide_password=True)}")


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
