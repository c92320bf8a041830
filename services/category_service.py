# ============================================================================
# CATEGORY SERVICE
# ============================================================================
# STATUS: Domain service - Self-referential category hierarchy
# PURPOSE: Category CRUD, parent set/clear, ancestor and subcategory walks
# CREATED: 19 OCT 2026
# ============================================================================
"""
CategoryService - the category hierarchy.

Each category stores at most one parent id (a weak self-reference). The
store resolves one level; this service walks further when asked:

    get(id)                category with its parent_id (one level)
    find_ancestors(id)     parent, grandparent, ... nearest first
    find_subcategories(id) direct children

Parent handling:
    create   parent_id None or "" creates a root
    update   parent_id=<id>       moves the category under <id>
             clear_parent=True    makes it a root
             neither              parent untouched
             both                 ValidationFailed
The nil UUID is always rejected as a parent.

Parents are not checked for existence on write. Cycles are not checked
unless HierarchyDefaults.reject_cycles is set; find_ancestors reports a
stored loop as InconsistentError instead of walking forever.
"""

from typing import Any, Dict, List, Optional

from core.config import HierarchyDefaults
from core.errors import InconsistentError
from core.logging import ComponentType, get_logger
from core.models.category import Category
from core.models.program import Program
from core.models.requests import CategoryRequest
from core.models.views import CategoryLineage
from core.ports import EntityStore
from core.validation import Validator, is_blank
from services.base import EntityService
from services.relations import Relationship

logger = get_logger(__name__, ComponentType.SERVICE)

PARENT_RELATION = "category_parent"


class CategoryService(EntityService[Category]):
    """Business rules for the category tree."""

    entity_name = "category"

    def __init__(
        self,
        store: EntityStore[Category],
        program_categories: Relationship[Program, Category],
        hierarchy: Optional[HierarchyDefaults] = None,
    ):
        super().__init__(store)
        self.program_categories = program_categories
        self.hierarchy = hierarchy or HierarchyDefaults()

    # =========================================================================
    # CREATE / UPDATE HOOKS
    # =========================================================================

    def _validate_create(self, request: Any, v: Validator) -> None:
        super()._validate_create(request, v)
        v.reference("parent_id", getattr(request, "parent_id", None))

    def _build(self, entity_id: str, request: CategoryRequest) -> Category:
        parent_id = getattr(request, "parent_id", None)
        return Category(
            id=entity_id,
            name=request.name,
            description=request.description,
            parent_id=None if is_blank(parent_id) else parent_id,
        )

    def _collect_updates(self, request: Any, v: Validator) -> Dict[str, Any]:
        changes = super()._collect_updates(request, v)

        parent_id = getattr(request, "parent_id", None)
        clear_parent = bool(getattr(request, "clear_parent", False))

        if clear_parent and not is_blank(parent_id):
            v.add("parent_id", "cannot be set while clearing the parent")
        elif clear_parent:
            changes["parent_id"] = None
        elif not is_blank(parent_id):
            v.reference("parent_id", parent_id)
            changes["parent_id"] = parent_id
        return changes

    async def _before_update(self, entity_id: str, changes: Dict[str, Any]) -> None:
        new_parent = changes.get("parent_id")
        if new_parent is None or not self.hierarchy.reject_cycles:
            return
        if await self._reaches(new_parent, entity_id):
            Validator("update category").add(
                "parent_id", f"would make {entity_id} its own ancestor"
            ).raise_if_failed()

    async def _reaches(self, start_id: str, target_id: str) -> bool:
        """True when target_id is start_id or one of its ancestors."""
        current: Optional[str] = start_id
        seen = set()
        while current is not None and len(seen) <= self.hierarchy.max_depth:
            if current == target_id:
                return True
            if current in seen:
                # An existing loop that does not include target_id
                return False
            seen.add(current)
            category = await self.store.get(current)
            current = category.parent_id if category is not None else None
        return False

    # =========================================================================
    # HIERARCHY
    # =========================================================================

    async def find_ancestors(self, category_id: str) -> CategoryLineage:
        """
        Walk parent links from category_id towards its root.

        The walk stops at a root, at a dangling parent id, or after
        max_depth ancestors. The last two set truncated=True.

        Raises:
            NotFoundError: category_id does not exist
            InconsistentError: the stored parent links form a loop
        """
        with self._operation("find ancestors", category_id):
            category = await self.get(category_id)
            ancestors: List[Category] = []
            seen = {category.id}
            truncated = False

            current = category
            while current.parent_id is not None:
                if len(ancestors) >= self.hierarchy.max_depth:
                    truncated = True
                    break
                if current.parent_id in seen:
                    raise InconsistentError(
                        PARENT_RELATION, current.id, current.parent_id,
                        f"category {category_id} has a parent loop through {current.parent_id}",
                    )
                parent = await self.store.get(current.parent_id)
                if parent is None:
                    logger.warning(
                        f"Category {current.id} has a dangling parent {current.parent_id}"
                    )
                    truncated = True
                    break
                ancestors.append(parent)
                seen.add(parent.id)
                current = parent

            return CategoryLineage(category=category, ancestors=ancestors, truncated=truncated)

    async def find_subcategories(self, category_id: str) -> List[Category]:
        """Direct children of a category."""
        with self._operation("find subcategories", category_id):
            self._require_id("find subcategories of", category_id)
            return await self.store.list_by_parent_id(category_id)

    async def find_programs(self, category_id: str) -> List[Program]:
        """Programs filed under this category."""
        with self._operation("find programs", category_id):
            return await self.program_categories.find_parents(category_id)


__all__ = ["CategoryService"]
