# ============================================================================
# STORE PORTS
# ============================================================================
# STATUS: Foundation - Persistence interfaces consumed by services
# PURPOSE: Contract shared by PostgreSQL and in-memory stores
# CREATED: 19 OCT 2026
# ============================================================================
"""
Store Ports

Services depend on these protocols, never on a concrete store. Two
implementations exist for each:

    repositories.*_repo      PostgreSQL (psycopg async)
    repositories.memory      in-memory reference stores (tests, local dev)

EntityStore
    create(entity)            insert; caller supplies the id
    update(id, changes)       apply a column -> value dict; False if missing
    get(id)                   entity or None
    list_all()                every entity
    delete(id)                False if nothing was deleted

AssociationStore
    create(assoc)             insert; caller supplies a fresh id
    delete(id)                idempotent, deleting a missing id is not an error
    get(id)                   association or None
    find_by_parent_id(p)      rows owned by p, unspecified order
    find_by_child_id(c)       reverse navigation
    find_by_parent_and_child_id(p, c)
    locked(p)                 async context manager yielding a view of the
                              store bound to one transaction that holds the
                              per-parent lock for p; leaving it normally
                              commits, leaving it with an exception rolls back
"""

from typing import Any, AsyncContextManager, Dict, Generic, List, Optional, Protocol, TypeVar

from core.contracts import Relation
from core.models.associations import Association

E = TypeVar("E")
A = TypeVar("A", bound=Association)


class EntityStore(Protocol, Generic[E]):
    entity_name: str

    async def create(self, entity: E) -> E: ...

    async def update(self, entity_id: str, changes: Dict[str, Any]) -> bool: ...

    async def get(self, entity_id: str) -> Optional[E]: ...

    async def list_all(self) -> List[E]: ...

    async def delete(self, entity_id: str) -> bool: ...


class AssociationReader(Protocol, Generic[A]):
    relation: Relation

    async def get(self, assoc_id: str) -> Optional[A]: ...

    async def find_by_parent_id(self, parent_id: str) -> List[A]: ...

    async def find_by_child_id(self, child_id: str) -> List[A]: ...

    async def find_by_parent_and_child_id(
        self, parent_id: str, child_id: str
    ) -> Optional[A]: ...


class AssociationWriter(AssociationReader[A], Protocol):
    async def create(self, assoc: A) -> A: ...

    async def delete(self, assoc_id: str) -> bool: ...


class AssociationStore(AssociationWriter[A], Protocol):
    model: type

    def locked(
        self, parent_id: str, timeout_ms: Optional[int] = None
    ) -> AsyncContextManager[AssociationWriter[A]]: ...


__all__ = [
    "EntityStore",
    "AssociationReader",
    "AssociationWriter",
    "AssociationStore",
]
