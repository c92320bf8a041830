# ============================================================================
# TAG REPOSITORY
# ============================================================================
# STATUS: Domain - Tag CRUD operations
# PURPOSE: Database access for the tags table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Tag Repository

Flat program labels. Plain CRUD; see repositories.base.
"""

from core.models.tag import Tag
from .base import EntityRepository
from .database import TABLE_TAGS


class TagRepository(EntityRepository[Tag]):
    """Repository for Tag entities."""

    model = Tag
    table = TABLE_TAGS
    entity_name = "tag"


__all__ = ["TagRepository"]
