from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from careerpath.config import get_settings

settings = get_settings()


SUPPORTED_BACKENDS = ("sqlite", "postgresql")


def async_database_url(url: str) -> str:
    """
    Pick the async driver for a plain sqlite:// or postgresql:// URL.

    Raises:
        ValueError: any other backend; the upserts need ON CONFLICT support
    """
    backend = make_url(url).get_backend_name()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported database backend '{backend}', expected one of {SUPPORTED_BACKENDS}")

    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


database_url = async_database_url(settings.database_url)

engine = create_async_engine(database_url, echo=False)
enable_sqlite_foreign_keys(engine)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Naive UTC with microseconds; SQLite's CURRENT_TIMESTAMP only keeps seconds
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def get_db():
    async with async_session() as session:
        yield session


async def init_db():
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    # Register every table on Base.metadata before create_all
    import careerpath.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
