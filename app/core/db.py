import logging
from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# Query params understood by psycopg2 (migrations) but rejected by asyncpg
_PSYCOPG_ONLY_PARAMS = ("sslmode", "channel_binding")


def to_async_url(url: str) -> str:
    """postgresql:// URL rewritten for asyncpg; SSL goes through connect_args instead."""
    parsed = make_url(url)
    if parsed.drivername in ("postgresql", "postgres"):
        parsed = parsed.set(drivername="postgresql+asyncpg")
    parsed = parsed.difference_update_query(_PSYCOPG_ONLY_PARAMS)
    return parsed.render_as_string(hide_password=False)


def to_sync_url(url: str) -> str:
    """URL for the synchronous psycopg2 engine Alembic runs on."""
    parsed = make_url(url)
    if parsed.drivername in ("postgresql+asyncpg", "postgres"):
        parsed = parsed.set(drivername="postgresql")
    return parsed.render_as_string(hide_password=False)


engine = create_async_engine(
    to_async_url(settings.database_url),
    echo=settings.env == "development",
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    connect_args={"ssl": True} if settings.database_ssl else {},
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; committed when the handler returns, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def run_statement(session: AsyncSession, stmt, what: str):
    """Execute `stmt`; driver and connection failures become a retryable StoreUnavailableError."""
    try:
        return await session.execute(stmt)
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Query for %s failed: %s", what, e)
        raise StoreUnavailableError(f"Could not access {what}, please retry") from e


async def flush_changes(session: AsyncSession, what: str) -> None:
    try:
        await session.flush()
    except IntegrityError:
        raise
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Writing %s failed: %s", what, e)
        raise StoreUnavailableError(f"Could not save {what}, please retry") from e
