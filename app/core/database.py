import logging
from typing import Any, Iterable, Mapping, Optional, Union

from psycopg import DatabaseError, OperationalError
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .config import settings

log = logging.getLogger(__name__)

pool: Optional[AsyncConnectionPool] = None

Params = Union[Iterable[Any], Mapping[str, Any], None]


def _connection_kwargs():
    """Build connection kwargs for psycopg"""
    kwargs = {}

    if settings.postgres_ssl is False:
        kwargs["sslmode"] = "disable"
    else:
        kwargs["sslmode"] = "require"

    kwargs["connect_timeout"] = 10
    kwargs["application_name"] = "portfolio_intake"

    return kwargs


def _mask_conninfo(conninfo: str) -> str:
    try:
        return conninfo.split("@")[0].rsplit(":", 1)[0] + ":****@" + conninfo.split("@")[1]
    except IndexError:
        return "postgresql://****"


async def get_pool() -> AsyncConnectionPool:
    """
    Get or create the database connection pool.

    Raises RuntimeError when neither DATABASE_URL nor POSTGRES_* is configured.
    """
    global pool

    if pool is not None:
        return pool

    conninfo = settings.build_db_url()

    if not conninfo:
        raise RuntimeError(
            "Database configuration is missing. "
            "Set DATABASE_URL or POSTGRES_* environment variables."
        )

    log.info("Initializing database pool (%s)", _mask_conninfo(conninfo))
    log.info("SSL Mode: %s", "disabled" if settings.postgres_ssl is False else "required")

    new_pool = AsyncConnectionPool(
        conninfo=conninfo,
        open=False,
        kwargs=_connection_kwargs(),
        min_size=1,
        max_size=5,
        timeout=30,
        max_idle=300,
        max_lifetime=3600,
    )

    try:
        await new_pool.open(wait=True, timeout=30)
        async with new_pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT version()")
                version = await cur.fetchone()
                log.info("Connected to: %s", version[0][:80])
    except OperationalError:
        log.exception(
            "Database connection failed (host=%s port=%s db=%s user=%s password=%s)",
            settings.postgres_host,
            settings.postgres_port,
            settings.postgres_db,
            settings.postgres_user,
            "set" if settings.postgres_password else "NOT SET",
        )
        await new_pool.close()
        raise
    except DatabaseError:
        log.exception("Database error while opening pool")
        await new_pool.close()
        raise

    pool = new_pool
    log.info("Database pool initialized")
    return pool


async def close_pool():
    """Close the database connection pool"""
    global pool

    if pool:
        log.info("Closing database pool")
        await pool.close()
        pool = None


async def fetchrow(query: str, params: Params = None) -> Optional[dict]:
    """Execute a query and return a single row as a dictionary.

    Works for ``INSERT ... RETURNING`` as well; the transaction is committed
    before the row is handed back.
    """
    pool_instance = await get_pool()
    async with pool_instance.connection() as conn:
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(query, params)
            row = await cur.fetchone()
        await conn.commit()
        return dict(row) if row else None


async def execute(query: str, params: Params = None) -> int:
    """Execute an INSERT/UPDATE/DELETE/DDL query and return affected row count"""
    pool_instance = await get_pool()
    async with pool_instance.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(query, params)
            await conn.commit()
            return cur.rowcount
