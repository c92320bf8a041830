# ============================================================================
# RELATIONSHIPS
# ============================================================================
# STATUS: Domain service - Navigation across one many-to-many relation
# PURPOSE: Join association rows to their child / parent entities
# CREATED: 19 OCT 2026
# ============================================================================
"""
Relationships

A Relationship ties together the association store of one relation, the
entity stores on both sides, and the overwrite engine for it. Entity
services share Relationship instances: the wall_block relationship serves
both WallService.find_blocks and BlockService.find_walls.

Resolution is all-or-nothing. If any association points at an id that
the entity store cannot find, the whole call fails with
InconsistentError; dangling rows are never silently dropped.

Ordering of resolved results:
    positioned relations   (position, id)
    unordered relations    (name, id)
"""

from typing import Any, Generic, List, Optional, Tuple, TypeVar

from core.errors import InconsistentError
from core.logging import ComponentType, get_logger
from core.models.associations import Association
from core.ports import AssociationStore, EntityStore
from core.validation import Validator
from services.overwrite import DesiredSet, OverwriteEngine, OverwriteResult

logger = get_logger(__name__, ComponentType.SERVICE)

P = TypeVar("P")
C = TypeVar("C")


class Relationship(Generic[P, C]):
    """One relation: parents -> association rows -> children."""

    def __init__(
        self,
        associations: AssociationStore,
        parents: EntityStore[P],
        children: EntityStore[C],
        atomic: bool = True,
        lock_timeout_ms: Optional[int] = None,
    ):
        self.associations = associations
        self.parents = parents
        self.children = children
        self.relation = associations.model.__relation__
        self.engine = OverwriteEngine(associations, atomic=atomic, lock_timeout_ms=lock_timeout_ms)

    def _sort_key(self, pair: Tuple[Association, Any]) -> tuple:
        assoc, entity = pair
        if self.relation.is_positioned():
            return (assoc.get_position(), entity.id)
        return (getattr(entity, "name", ""), entity.id)

    async def find_children(self, parent_id: str) -> List[Tuple[Association, C]]:
        """
        Resolve every child of parent_id.

        Raises:
            ValidationFailed: empty parent id
            InconsistentError: an association references a missing child
        """
        Validator(f"find {self.relation.child_entity}s").not_empty(
            f"{self.relation.parent_entity}_id", parent_id
        ).raise_if_failed()

        resolved = []
        for assoc in await self.associations.find_by_parent_id(parent_id):
            child = await self.children.get(assoc.child_id)
            if child is None:
                logger.error(
                    f"Dangling {self.relation.value} association {assoc.id}",
                    extra={"parent_id": parent_id, "child_id": assoc.child_id},
                )
                raise InconsistentError(self.relation.value, parent_id, assoc.child_id)
            resolved.append((assoc, child))

        resolved.sort(key=self._sort_key)
        return resolved

    async def find_parents(self, child_id: str) -> List[P]:
        """
        Resolve every parent linking to child_id (reverse navigation).

        Raises:
            ValidationFailed: empty child id
            InconsistentError: an association references a missing parent
        """
        Validator(f"find {self.relation.parent_entity}s").not_empty(
            f"{self.relation.child_entity}_id", child_id
        ).raise_if_failed()

        resolved = []
        for assoc in await self.associations.find_by_child_id(child_id):
            parent = await self.parents.get(assoc.parent_id)
            if parent is None:
                raise InconsistentError(
                    self.relation.value, assoc.parent_id, child_id,
                    f"{self.relation.value} association {assoc.id} references "
                    f"missing {self.relation.parent_entity} {assoc.parent_id}",
                )
            resolved.append(parent)

        resolved.sort(key=lambda p: (getattr(p, "name", ""), p.id))
        return resolved

    async def overwrite(self, parent_id: str, desired: DesiredSet) -> OverwriteResult:
        return await self.engine.overwrite(parent_id, desired)


__all__ = ["Relationship"]
