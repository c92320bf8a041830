# ============================================================================
# CATEGORY MODEL
# ============================================================================
# STATUS: Domain model - Self-referential category tree
# PURPOSE: Hierarchical program classification
# CREATED: 19 OCT 2026
# ============================================================================
"""
Category Model

Categories form a forest: every category has zero or one parent, stored
as a weak self-reference. parent_id is None for roots. The nil UUID is
never stored as a parent.

The store resolves one level only. Ancestor chains are walked by the
service layer (see services.category_service).
"""

from datetime import datetime, timezone
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Category(BaseModel):
    """
    Program category, optionally nested under a parent category.

    Maps to: backoffice.categories
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "categories"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        ("idx_categories_parent", ["parent_id"], "parent_id IS NOT NULL"),
    ]

    id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    description: str = Field(default="")

    # Weak self-reference to categories.id, None for a root category
    parent_id: Optional[str] = Field(default=None, max_length=36)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


__all__ = ["Category"]
