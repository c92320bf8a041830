# ============================================================================
# WALL REPOSITORY
# ============================================================================
# STATUS: Domain - Wall CRUD operations
# PURPOSE: Database access for the walls table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Wall Repository

Top-level presentation containers. Plain CRUD; see repositories.base.
"""

from core.models.wall import Wall
from .base import EntityRepository
from .database import TABLE_WALLS


class WallRepository(EntityRepository[Wall]):
    """Repository for Wall entities."""

    model = Wall
    table = TABLE_WALLS
    entity_name = "wall"


__all__ = ["WallRepository"]
