from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from online_library.core.config import settings


# Ids are 32-bit integers, as in the PostgreSQL schema
MAX_ID = 2**31 - 1


class Base(DeclarativeBase):
    pass


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys switched on."""
    engine = create_async_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_fk(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


async def init_models(bind: AsyncEngine) -> None:
    # models must be imported so their tables are registered on Base.metadata
    import online_library.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)
