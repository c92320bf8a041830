# ============================================================================
# ASSOCIATION REPOSITORY
# ============================================================================
# STATUS: Domain - Link table persistence for the four relations
# PURPOSE: Create/delete/find association rows, per-parent locked views
# CREATED: 19 OCT 2026
# ============================================================================
"""
Association Repository

One generic repository drives all four link tables. Rows are read and
written through the model's parent/child columns, so the SQL is the same
shape for every relation:

    wall_blocks          wall_id    / block_id     (+ position)
    block_programs       block_id   / program_id   (+ position)
    program_tags         program_id / tag_id
    program_categories   program_id / category_id

Contract:
    create()   the caller supplies a fresh id; the store never generates one
    delete()   idempotent; deleting a missing id returns False, never raises
    find_*()   unspecified order; position is data, not a sort key

locked(parent_id) opens a transaction holding the per-parent advisory
lock and yields a copy of the repository bound to that transaction's
connection. Every call on the bound copy runs inside the transaction.

Usage:
    repo = WallBlockRepository(pool)
    async with repo.locked(wall_id) as tx:
        for row in await tx.find_by_parent_id(wall_id):
            await tx.delete(row.id)
        await tx.create(WallBlock.build(str(uuid4()), wall_id, block_id, 0))
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

import psycopg
from psycopg import AsyncConnection, sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from core.contracts import Relation
from core.errors import PersistenceError
from core.models.associations import (
    Association,
    BlockProgram,
    ProgramCategory,
    ProgramTag,
    WallBlock,
)
from infrastructure.base_repository import BaseRepository
from infrastructure.locking import LockService
from .database import (
    TABLE_BLOCK_PROGRAMS,
    TABLE_PROGRAM_CATEGORIES,
    TABLE_PROGRAM_TAGS,
    TABLE_WALL_BLOCKS,
)


class AssociationRepository(BaseRepository):
    """Repository for one link table."""

    model: Type[Association]
    table: sql.Identifier

    def __init__(
        self,
        pool: AsyncConnectionPool,
        lock_service: Optional[LockService] = None,
        conn: Optional[AsyncConnection] = None,
    ):
        super().__init__()
        self.pool = pool
        self.lock_service = lock_service or LockService(pool)
        self._conn = conn

    @property
    def relation(self) -> Relation:
        return self.model.__relation__

    @property
    def entity_name(self) -> str:
        return self.relation.value

    @property
    def parent_column(self) -> str:
        return self.model.__parent_field__

    @property
    def child_column(self) -> str:
        return self.model.__child_field__

    @property
    def is_bound(self) -> bool:
        """True for a view bound to a locked transaction."""
        return self._conn is not None

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncConnection]:
        """The bound transaction's connection, or a pooled one."""
        if self._conn is not None:
            yield self._conn
        else:
            async with self.pool.connection() as conn:
                yield conn

    # =========================================================================
    # WRITES
    # =========================================================================

    async def create(self, assoc: Association) -> Association:
        """Insert one row. The caller guarantees assoc.id is fresh."""
        cols = list(self.model.model_fields)
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            self.table,
            sql.SQL(", ").join(sql.Identifier(c) for c in cols),
            sql.SQL(", ").join(sql.Placeholder(c) for c in cols),
        )
        with self._error_context("creating", assoc.id):
            async with self._connection() as conn:
                await conn.execute(query, assoc.model_dump())
        self.logger.debug(
            f"Created {self.entity_name} {assoc.id}: {assoc.parent_id} -> {assoc.child_id}"
        )
        return assoc

    async def delete(self, assoc_id: str) -> bool:
        """Delete one row by its own id. Missing ids are not an error."""
        with self._error_context("deleting", assoc_id):
            async with self._connection() as conn:
                result = await conn.execute(
                    sql.SQL("DELETE FROM {} WHERE id = %s").format(self.table),
                    (assoc_id,),
                )
                return result.rowcount > 0

    # =========================================================================
    # READS
    # =========================================================================

    async def _select(self, where: sql.Composable, params: tuple, context: str) -> List[Association]:
        with self._error_context("finding", context):
            async with self._connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        sql.SQL("SELECT * FROM {} WHERE {}").format(self.table, where),
                        params,
                    )
                    rows = await cur.fetchall()
        return [self._row_to_model(row) for row in rows]

    async def get(self, assoc_id: str) -> Optional[Association]:
        rows = await self._select(sql.SQL("id = %s"), (assoc_id,), assoc_id)
        return rows[0] if rows else None

    async def find_by_parent_id(self, parent_id: str) -> List[Association]:
        """All rows owned by parent_id, in unspecified order."""
        where = sql.SQL("{} = %s").format(sql.Identifier(self.parent_column))
        return await self._select(where, (parent_id,), parent_id)

    async def find_by_child_id(self, child_id: str) -> List[Association]:
        """All rows pointing at child_id (reverse navigation)."""
        where = sql.SQL("{} = %s").format(sql.Identifier(self.child_column))
        return await self._select(where, (child_id,), child_id)

    async def find_by_parent_and_child_id(
        self, parent_id: str, child_id: str
    ) -> Optional[Association]:
        where = sql.SQL("{} = %s AND {} = %s").format(
            sql.Identifier(self.parent_column), sql.Identifier(self.child_column),
        )
        rows = await self._select(where, (parent_id, child_id), f"{parent_id}/{child_id}")
        return rows[0] if rows else None

    # =========================================================================
    # LOCKED VIEW
    # =========================================================================

    def bind(self, conn: AsyncConnection) -> "AssociationRepository":
        """Copy of this repository whose calls all run on `conn`."""
        return type(self)(self.pool, lock_service=self.lock_service, conn=conn)

    @asynccontextmanager
    async def locked(
        self, parent_id: str, timeout_ms: Optional[int] = None
    ) -> AsyncIterator["AssociationRepository"]:
        """
        Transaction holding the per-parent lock, yielding a bound view.

        Raises:
            LockNotAcquired: lock not granted within timeout_ms
            PersistenceError: the transaction could not be opened or committed
        """
        if self.is_bound:
            raise RuntimeError(f"{self.entity_name} view is already bound to a transaction")

        try:
            async with self.lock_service.parent_lock(
                self.entity_name, parent_id, timeout_ms
            ) as conn:
                yield self.bind(conn)
        except psycopg.Error as e:
            error = PersistenceError("committing", self.entity_name, parent_id, detail=str(e))
            self.logger.error(str(error))
            raise error from e

    def _row_to_model(self, row: Dict[str, Any]) -> Association:
        return self.model.model_validate(row)


class WallBlockRepository(AssociationRepository):
    model = WallBlock
    table = TABLE_WALL_BLOCKS


class BlockProgramRepository(AssociationRepository):
    model = BlockProgram
    table = TABLE_BLOCK_PROGRAMS


class ProgramTagRepository(AssociationRepository):
    model = ProgramTag
    table = TABLE_PROGRAM_TAGS


class ProgramCategoryRepository(AssociationRepository):
    model = ProgramCategory
    table = TABLE_PROGRAM_CATEGORIES


__all__ = [
    "AssociationRepository",
    "WallBlockRepository",
    "BlockProgramRepository",
    "ProgramTagRepository",
    "ProgramCategoryRepository",
]
