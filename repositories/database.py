# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: Provide connection pooling for psycopg3 async
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages async PostgreSQL connections using psycopg3 and psycopg_pool.
Singleton pattern ensures one pool per application.

Connection settings come from core.config (DATABASE_URL or POSTGRES_*).

Usage:
    from repositories.database import get_pool

    pool = await get_pool()
    async with pool.connection() as conn:
        result = await conn.execute("SELECT 1")
"""

import logging
from typing import Optional

from psycopg import sql as psycopg_sql
from psycopg_pool import AsyncConnectionPool

from core.config import get_defaults
from core.contracts import SCHEMA

logger = logging.getLogger(__name__)

# Global pool instance
_pool: Optional[AsyncConnectionPool] = None


def get_connection_string() -> str:
    """
    Get database connection string from configuration.

    Priority:
    1. DATABASE_URL environment variable
    2. Individual POSTGRES_* components
    """
    return get_defaults().database.connection_string


def _mask(conninfo: str) -> str:
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


async def init_pool(
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    connection_string: Optional[str] = None,
) -> AsyncConnectionPool:
    """
    Initialize the global connection pool.

    Args:
        min_size: Minimum connections to maintain (defaults to DB_POOL_MIN_SIZE)
        max_size: Maximum connections allowed (defaults to DB_POOL_MAX_SIZE)
        connection_string: Override connection string (defaults to env)

    Returns:
        AsyncConnectionPool instance
    """
    global _pool

    if _pool is not None:
        logger.warning("Pool already initialized, returning existing pool")
        return _pool

    db = get_defaults().database
    min_size = min_size if min_size is not None else db.pool_min_size
    max_size = max_size if max_size is not None else db.pool_max_size
    conninfo = connection_string or get_connection_string()

    logger.info(f"Initializing connection pool: {_mask(conninfo)}")

    _pool = AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,  # Opened explicitly below
    )

    await _pool.open()
    logger.info(f"Connection pool opened (min={min_size}, max={max_size})")

    return _pool


async def get_pool() -> AsyncConnectionPool:
    """
    Get the global connection pool, initializing if needed.
    """
    global _pool

    if _pool is None:
        await init_pool()

    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Connection pool closed")


# ============================================================================
# SCHEMA CONSTANTS
# ============================================================================

# Table identifiers - use with psycopg sql.SQL().format() for injection-safe queries
TABLE_WALLS = psycopg_sql.Identifier(SCHEMA, "walls")
TABLE_BLOCKS = psycopg_sql.Identifier(SCHEMA, "blocks")
TABLE_PROGRAMS = psycopg_sql.Identifier(SCHEMA, "programs")
TABLE_EPISODES = psycopg_sql.Identifier(SCHEMA, "episodes")
TABLE_MEDIAS = psycopg_sql.Identifier(SCHEMA, "medias")
TABLE_TAGS = psycopg_sql.Identifier(SCHEMA, "tags")
TABLE_CATEGORIES = psycopg_sql.Identifier(SCHEMA, "categories")

# Link tables
TABLE_WALL_BLOCKS = psycopg_sql.Identifier(SCHEMA, "wall_blocks")
TABLE_BLOCK_PROGRAMS = psycopg_sql.Identifier(SCHEMA, "block_programs")
TABLE_PROGRAM_TAGS = psycopg_sql.Identifier(SCHEMA, "program_tags")
TABLE_PROGRAM_CATEGORIES = psycopg_sql.Identifier(SCHEMA, "program_categories")
