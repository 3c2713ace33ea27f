"""asyncpg pool construction and schema bootstrap.

The pool is created once by the application lifespan and handed to the
repository explicitly. Nothing in this module keeps a reference to it.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

import asyncio
import logging

import asyncpg

from user_service.config import Settings

logger = logging.getLogger(__name__)

USERS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(50) NOT NULL,
    email VARCHAR(50) NOT NULL UNIQUE
)
"""

# Failures of connecting to or bootstrapping an unreachable database
_STARTUP_ERRORS = (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError)


async def create_pool(settings: Settings, min_size: int | None = None) -> asyncpg.Pool:
    """Create the shared connection pool from settings.

    With ``min_size=0`` no connection is opened until the first query.
    """
    logger.info(
        "Connecting to PostgreSQL at %s:%s/%s",
        settings.db_host,
        settings.db_port,
        settings.db_name,
    )
    return await asyncpg.create_pool(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_name,
        min_size=settings.db_pool_min_size if min_size is None else min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_query_timeout,
        timeout=settings.db_query_timeout,
    )


async def ensure_schema(pool: asyncpg.Pool) -> None:
    """Create the users table if it does not exist yet."""
    await pool.execute(USERS_TABLE_DDL)
    logger.info("Users table ready")


async def open_pool(settings: Settings) -> asyncpg.Pool:
    """Create the pool and the users table without requiring a live database.

    If the database cannot be reached the pool is created lazily and the
    service still starts; /health then reports it as disconnected. The table
    is only bootstrapped when the database answers at startup.
    """
    try:
        pool = await create_pool(settings)
    except _STARTUP_ERRORS as e:
        logger.error("Database unreachable at startup, connecting lazily: %s", e)
        return await create_pool(settings, min_size=0)

    try:
        await ensure_schema(pool)
    except _STARTUP_ERRORS as e:
        logger.error("Could not create users table: %s", e)
    return pool
