# ============================================================================
# PER-PARENT LOCKING SERVICE
# ============================================================================
# STATUS: Infrastructure - Concurrency control
# PURPOSE: PostgreSQL advisory locks serializing overwrites per parent
# CREATED: 19 OCT 2026
# ============================================================================
"""
Per-Parent Locking Service

Uses PostgreSQL transaction-level advisory locks to serialize every
overwrite of the same (relation, parent). Two overwrites of wall W1 run
one after the other; overwrites of W1 and W2 run in parallel.

Advisory locks are:
- Fast (in-memory, no disk I/O)
- Released automatically at COMMIT / ROLLBACK
- Released automatically on disconnect (crash-safe)
- 64-bit key space

Usage:
    from infrastructure.locking import LockService

    lock_service = LockService(pool)

    async with lock_service.parent_lock("wall_block", wall_id) as conn:
        # conn is inside a transaction holding the lock
        await conn.execute(...)
"""

import hashlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import psycopg
from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from core.errors import LockNotAcquired

logger = logging.getLogger(__name__)


class LockService:
    """
    PostgreSQL-based per-parent locking.

    Each lock lives exactly as long as the transaction opened by
    parent_lock(); there is no explicit release.
    """

    # Lock namespace prefix (hashed to int8 for pg_advisory_xact_lock)
    PARENT_LOCK_PREFIX = "backoffice:overwrite:"

    def __init__(self, pool: AsyncConnectionPool):
        """
        Initialize lock service.

        Args:
            pool: Database connection pool
        """
        self.pool = pool

    @staticmethod
    def _hash_to_lock_id(key: str) -> int:
        """
        Convert string key to int64 for PostgreSQL advisory lock.

        Args:
            key: String key to hash

        Returns:
            Signed int64 suitable for pg_advisory_xact_lock
        """
        # First 8 bytes of SHA256, interpreted as signed int64
        h = hashlib.sha256(key.encode()).digest()[:8]
        return int.from_bytes(h, byteorder='big', signed=True)

    @classmethod
    def parent_key(cls, relation: str, parent_id: str) -> str:
        return f"{cls.PARENT_LOCK_PREFIX}{relation}:{parent_id}"

    async def acquire_xact_lock(
        self,
        conn: AsyncConnection,
        key: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Block until the transaction-level lock for `key` is held.

        Must be called inside an open transaction on `conn`.

        Raises:
            LockNotAcquired: lock not granted within timeout_ms
        """
        lock_id = self._hash_to_lock_id(key)

        if timeout_ms:
            # Local to the current transaction
            await conn.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                (f"{timeout_ms}ms",),
            )

        try:
            await conn.execute("SELECT pg_advisory_xact_lock(%s)", (lock_id,))
        except psycopg.errors.LockNotAvailable as e:
            logger.warning(f"Timed out after {timeout_ms}ms waiting for lock {key}")
            raise LockNotAcquired("overwrite", key) from e

        logger.debug(f"Acquired lock {key} (lock_id={lock_id})")

    @asynccontextmanager
    async def parent_lock(
        self,
        relation: str,
        parent_id: str,
        timeout_ms: Optional[int] = None,
    ) -> AsyncIterator[AsyncConnection]:
        """
        Open a transaction holding the lock for (relation, parent_id).

        Leaving the block normally commits and releases the lock. Leaving
        it with an exception rolls back and releases the lock.

        Yields:
            AsyncConnection inside the locked transaction
        """
        key = self.parent_key(relation, parent_id)

        async with self.pool.connection() as conn:
            async with conn.transaction():
                await self.acquire_xact_lock(conn, key, timeout_ms)
                yield conn

        logger.debug(f"Released lock {key}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['LockService', 'LockNotAcquired']
