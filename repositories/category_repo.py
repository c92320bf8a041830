# ============================================================================
# CATEGORY REPOSITORY
# ============================================================================
# STATUS: Domain - Category CRUD operations
# PURPOSE: Database access for the self-referential categories table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Category Repository

parent_id is stored as NULL for root categories. An update whose
changes contain parent_id=None clears the parent; an update without
a parent_id key leaves it untouched. The repository never checks that
a parent exists.
"""

from typing import List

from core.models.category import Category
from .base import EntityRepository
from .database import TABLE_CATEGORIES


class CategoryRepository(EntityRepository[Category]):
    """Repository for Category entities."""

    model = Category
    table = TABLE_CATEGORIES
    entity_name = "category"

    async def list_by_parent_id(self, parent_id: str) -> List[Category]:
        """Direct children of a category."""
        return await self._list_where("parent_id", parent_id)


__all__ = ["CategoryRepository"]
