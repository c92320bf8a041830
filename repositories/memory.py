# ============================================================================
# IN-MEMORY STORES
# ============================================================================
# STATUS: Domain - Reference implementation of the store ports
# PURPOSE: Dict-backed entity and association stores for tests and local dev
# CREATED: 19 OCT 2026
# ============================================================================
"""
In-Memory Stores

Dict-backed implementations of core.ports.EntityStore and
core.ports.AssociationStore with the same observable contract as the
PostgreSQL repositories:

- ids are supplied by the caller; a duplicate id is a PersistenceError
- a duplicate (parent, child) association is a PersistenceError, like the
  unique index on the link tables
- association delete is idempotent
- models are copied in and out, so callers never share state with the store

locked(parent_id) serializes on one asyncio.Lock per parent and yields a
journaling view: every create/delete made through the view is undone if
the block exits with an exception, which mirrors a transaction rollback.
Writes made through the view are visible to other readers immediately
(there is no isolation, only atomicity on failure).

Usage:
    walls = MemoryEntityStore(Wall, "wall")
    wall_blocks = MemoryAssociationStore(WallBlock)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.contracts import Relation
from core.errors import LockNotAcquired, PersistenceError
from core.models.associations import Association
from core.models.category import Category
from core.models.episode import Episode
from core.models.media import Media

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_IMMUTABLE_COLUMNS = frozenset({"id", "created_at"})


class MemoryEntityStore(Generic[M]):
    """Dict-backed entity store keyed by id."""

    def __init__(self, model: Type[M], entity_name: str):
        self.model = model
        self.entity_name = entity_name
        self._rows: Dict[str, M] = {}

    async def create(self, entity: M) -> M:
        if entity.id in self._rows:
            raise PersistenceError("creating", self.entity_name, entity.id, detail="duplicate id")
        self._rows[entity.id] = entity.model_copy(deep=True)
        return entity

    async def update(self, entity_id: str, changes: Dict[str, Any]) -> bool:
        rejected = (set(changes) - set(self.model.model_fields)) | (set(changes) & _IMMUTABLE_COLUMNS)
        if rejected:
            raise ValueError(f"Cannot update {self.entity_name} columns {sorted(rejected)}")

        current = self._rows.get(entity_id)
        if current is None:
            return False
        if changes:
            stamp = {"updated_at": datetime.now(timezone.utc)} if "updated_at" in self.model.model_fields else {}
            self._rows[entity_id] = current.model_copy(update={**changes, **stamp})
        return True

    async def get(self, entity_id: str) -> Optional[M]:
        row = self._rows.get(entity_id)
        return row.model_copy(deep=True) if row is not None else None

    async def list_all(self) -> List[M]:
        rows = sorted(self._rows.values(), key=lambda r: (r.created_at, r.id))
        return [r.model_copy(deep=True) for r in rows]

    async def delete(self, entity_id: str) -> bool:
        return self._rows.pop(entity_id, None) is not None

    async def _list_where(self, column: str, value: Any, order_by: str = "created_at") -> List[M]:
        rows = [r for r in self._rows.values() if getattr(r, column) == value]
        rows.sort(key=lambda r: (getattr(r, order_by), r.id))
        return [r.model_copy(deep=True) for r in rows]


class MemoryEpisodeStore(MemoryEntityStore[Episode]):
    def __init__(self):
        super().__init__(Episode, "episode")

    async def list_by_program_id(self, program_id: str) -> List[Episode]:
        return await self._list_where("program_id", program_id, order_by="position")


class MemoryMediaStore(MemoryEntityStore[Media]):
    def __init__(self):
        super().__init__(Media, "media")

    async def list_by_episode_id(self, episode_id: str) -> List[Media]:
        return await self._list_where("episode_id", episode_id)


class MemoryCategoryStore(MemoryEntityStore[Category]):
    def __init__(self):
        super().__init__(Category, "category")

    async def list_by_parent_id(self, parent_id: str) -> List[Category]:
        return await self._list_where("parent_id", parent_id)


# ============================================================================
# ASSOCIATIONS
# ============================================================================

class MemoryAssociationStore:
    """Dict-backed association store for one relation."""

    def __init__(self, model: Type[Association]):
        self.model = model
        self._rows: Dict[str, Association] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @property
    def relation(self) -> Relation:
        return self.model.__relation__

    @property
    def entity_name(self) -> str:
        return self.relation.value

    async def create(self, assoc: Association) -> Association:
        if assoc.id in self._rows:
            raise PersistenceError("creating", self.entity_name, assoc.id, detail="duplicate id")
        if self._find_pair(assoc.parent_id, assoc.child_id) is not None:
            raise PersistenceError(
                "creating", self.entity_name, assoc.id,
                detail=f"{assoc.child_id} is already linked to {assoc.parent_id}",
            )
        self._rows[assoc.id] = assoc.model_copy(deep=True)
        return assoc

    async def delete(self, assoc_id: str) -> bool:
        return self._rows.pop(assoc_id, None) is not None

    async def get(self, assoc_id: str) -> Optional[Association]:
        row = self._rows.get(assoc_id)
        return row.model_copy(deep=True) if row is not None else None

    async def find_by_parent_id(self, parent_id: str) -> List[Association]:
        return [r.model_copy(deep=True) for r in self._rows.values() if r.parent_id == parent_id]

    async def find_by_child_id(self, child_id: str) -> List[Association]:
        return [r.model_copy(deep=True) for r in self._rows.values() if r.child_id == child_id]

    async def find_by_parent_and_child_id(
        self, parent_id: str, child_id: str
    ) -> Optional[Association]:
        row = self._find_pair(parent_id, child_id)
        return row.model_copy(deep=True) if row is not None else None

    def _find_pair(self, parent_id: str, child_id: str) -> Optional[Association]:
        for row in self._rows.values():
            if row.parent_id == parent_id and row.child_id == child_id:
                return row
        return None

    @asynccontextmanager
    async def locked(
        self, parent_id: str, timeout_ms: Optional[int] = None
    ) -> AsyncIterator["_JournalingView"]:
        """
        Hold the per-parent lock and yield a view that rolls back on error.

        Raises:
            LockNotAcquired: lock not granted within timeout_ms
        """
        lock = self._locks.setdefault(parent_id, asyncio.Lock())
        try:
            if timeout_ms:
                await asyncio.wait_for(lock.acquire(), timeout_ms / 1000)
            else:
                await lock.acquire()
        except asyncio.TimeoutError as e:
            raise LockNotAcquired("overwrite", f"{self.entity_name}:{parent_id}") from e

        view = _JournalingView(self)
        try:
            yield view
        except BaseException:
            view.rollback()
            raise
        finally:
            lock.release()


class _JournalingView:
    """Store view that records its writes so they can be undone."""

    def __init__(self, store: MemoryAssociationStore):
        self._store = store
        self._journal: List[Tuple[str, Association]] = []
        self.relation = store.relation
        self.model = store.model

    async def create(self, assoc: Association) -> Association:
        created = await self._store.create(assoc)
        self._journal.append(("created", assoc))
        return created

    async def delete(self, assoc_id: str) -> bool:
        row = self._store._rows.get(assoc_id)
        deleted = await self._store.delete(assoc_id)
        if deleted:
            self._journal.append(("deleted", row))
        return deleted

    async def get(self, assoc_id: str) -> Optional[Association]:
        return await self._store.get(assoc_id)

    async def find_by_parent_id(self, parent_id: str) -> List[Association]:
        return await self._store.find_by_parent_id(parent_id)

    async def find_by_child_id(self, child_id: str) -> List[Association]:
        return await self._store.find_by_child_id(child_id)

    async def find_by_parent_and_child_id(
        self, parent_id: str, child_id: str
    ) -> Optional[Association]:
        return await self._store.find_by_parent_and_child_id(parent_id, child_id)

    def rollback(self) -> None:
        """Undo journaled writes, newest first."""
        for action, row in reversed(self._journal):
            if action == "created":
                self._store._rows.pop(row.id, None)
            else:
                self._store._rows[row.id] = row
        if self._journal:
            logger.debug(f"Rolled back {len(self._journal)} {self._store.entity_name} writes")
        self._journal.clear()


__all__ = [
    "MemoryEntityStore",
    "MemoryEpisodeStore",
    "MemoryMediaStore",
    "MemoryCategoryStore",
    "MemoryAssociationStore",
]
