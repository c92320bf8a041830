# ============================================================================
# BLOCK REPOSITORY
# ============================================================================
# STATUS: Domain - Block CRUD operations
# PURPOSE: Database access for the blocks table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Block Repository

Blocks placed on walls. Plain CRUD; see repositories.base.
"""

from core.models.block import Block
from .base import EntityRepository
from .database import TABLE_BLOCKS


class BlockRepository(EntityRepository[Block]):
    """Repository for Block entities."""

    model = Block
    table = TABLE_BLOCKS
    entity_name = "block"


__all__ = ["BlockRepository"]
