# ============================================================================
# ENTITY REPOSITORY BASE
# ============================================================================
# STATUS: Domain - Shared CRUD for single-table entities
# PURPOSE: Column-driven INSERT/UPDATE/SELECT/DELETE built from model fields
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Repository Base

Every back office entity is one row in one table keyed by `id`. The
column list is read from the pydantic model, so subclasses only name
the model, the table and any extra lookups.

All SQL uses psycopg sql.SQL composition for injection safety.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from pydantic import BaseModel

from infrastructure.base_repository import BaseRepository

M = TypeVar("M", bound=BaseModel)

# Never written by update(); id is the key and created_at is immutable
_IMMUTABLE_COLUMNS = frozenset({"id", "created_at"})


class EntityRepository(BaseRepository, Generic[M]):
    """Repository for one entity table."""

    model: Type[M]
    table: sql.Identifier

    def __init__(self, pool: AsyncConnectionPool):
        super().__init__()
        self.pool = pool

    @property
    def columns(self) -> List[str]:
        return list(self.model.model_fields)

    async def create(self, entity: M) -> M:
        """Insert a new row. The caller supplies the id."""
        cols = self.columns
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            self.table,
            sql.SQL(", ").join(sql.Identifier(c) for c in cols),
            sql.SQL(", ").join(sql.Placeholder(c) for c in cols),
        )
        with self._error_context("creating", entity.id):
            async with self.pool.connection() as conn:
                await conn.execute(query, entity.model_dump())
        self._log_operation("Created", entity.id)
        return entity

    async def update(self, entity_id: str, changes: Dict[str, Any]) -> bool:
        """
        Apply a partial update.

        Args:
            entity_id: Row to update
            changes: column -> new value; columns not present are untouched

        Returns:
            True if the row exists (and was updated), False otherwise
        """
        rejected = (set(changes) - set(self.columns)) | (set(changes) & _IMMUTABLE_COLUMNS)
        if rejected:
            raise ValueError(f"Cannot update {self.entity_name} columns {sorted(rejected)}")

        if not changes:
            return await self.exists(entity_id)

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(sql.Identifier(c), sql.Placeholder(c))
            for c in changes
        )
        query = sql.SQL("UPDATE {} SET {} WHERE id = {}").format(
            self.table, assignments, sql.Placeholder("_id"),
        )
        with self._error_context("updating", entity_id):
            async with self.pool.connection() as conn:
                result = await conn.execute(query, {**changes, "_id": entity_id})
                updated = result.rowcount > 0
        if updated:
            self._log_operation("Updated", entity_id, {"columns": sorted(changes)})
        return updated

    async def exists(self, entity_id: str) -> bool:
        with self._error_context("checking", entity_id):
            async with self.pool.connection() as conn:
                result = await conn.execute(
                    sql.SQL("SELECT 1 FROM {} WHERE id = %s").format(self.table),
                    (entity_id,),
                )
                row = await result.fetchone()
        return row is not None

    async def _fetch(self, query: sql.Composable, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        """
        Run a SELECT and return dict rows.

        The row factory is scoped to the cursor; pooled connections go back
        to the pool with their default tuple rows.
        """
        async with self.pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    async def get(self, entity_id: str) -> Optional[M]:
        """Get an entity by ID."""
        with self._error_context("finding", entity_id):
            rows = await self._fetch(
                sql.SQL("SELECT * FROM {} WHERE id = %s").format(self.table),
                (entity_id,),
            )
        return self._row_to_model(rows[0]) if rows else None

    async def list_all(self) -> List[M]:
        """List every entity, oldest first."""
        with self._error_context("listing"):
            rows = await self._fetch(
                sql.SQL("SELECT * FROM {} ORDER BY created_at, id").format(self.table),
            )
        return [self._row_to_model(row) for row in rows]

    async def delete(self, entity_id: str) -> bool:
        """Delete by ID. Returns False when no row matched."""
        with self._error_context("deleting", entity_id):
            async with self.pool.connection() as conn:
                result = await conn.execute(
                    sql.SQL("DELETE FROM {} WHERE id = %s").format(self.table),
                    (entity_id,),
                )
                deleted = result.rowcount > 0
        if deleted:
            self._log_operation("Deleted", entity_id)
        return deleted

    async def _list_where(self, column: str, value: Any, order_by: str = "created_at") -> List[M]:
        """List rows where `column` equals `value`."""
        with self._error_context(f"listing by {column}", value):
            rows = await self._fetch(
                sql.SQL("SELECT * FROM {} WHERE {} = %s ORDER BY {}, id").format(
                    self.table, sql.Identifier(column), sql.Identifier(order_by),
                ),
                (value,),
            )
        return [self._row_to_model(row) for row in rows]

    def _row_to_model(self, row: Dict[str, Any]) -> M:
        """Convert a database row to a model instance."""
        return self.model.model_validate(row)


__all__ = ["EntityRepository"]
