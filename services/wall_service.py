# ============================================================================
# WALL SERVICE
# ============================================================================
# STATUS: Domain service - Walls and their ordered blocks
# PURPOSE: Wall CRUD, find/overwrite the blocks placed on a wall
# CREATED: 19 OCT 2026
# ============================================================================
"""
WallService

Wall CRUD plus the wall -> block relation. Blocks come back joined with
the position stored on their wall_blocks row, ordered by position.
"""

from typing import List, Mapping

from core.models.block import Block
from core.models.requests import NamedRequest
from core.models.views import PositionedBlock
from core.models.wall import Wall
from core.ports import EntityStore
from services.base import EntityService
from services.overwrite import OverwriteResult
from services.relations import Relationship


class WallService(EntityService[Wall]):
    """Business rules for walls."""

    entity_name = "wall"

    def __init__(self, store: EntityStore[Wall], wall_blocks: Relationship[Wall, Block]):
        super().__init__(store)
        self.wall_blocks = wall_blocks

    def _build(self, entity_id: str, request: NamedRequest) -> Wall:
        return Wall(id=entity_id, name=request.name, description=request.description)

    async def find_blocks(self, wall_id: str) -> List[PositionedBlock]:
        """Blocks on a wall ordered by position."""
        with self._operation("find blocks", wall_id):
            pairs = await self.wall_blocks.find_children(wall_id)
            return [
                PositionedBlock(**block.model_dump(), position=assoc.get_position())
                for assoc, block in pairs
            ]

    async def overwrite_blocks(self, wall_id: str, ordered_blocks: Mapping[str, int]) -> OverwriteResult:
        """Replace every block on the wall with `ordered_blocks` (block id -> position)."""
        with self._operation("overwrite blocks", wall_id):
            return await self.wall_blocks.overwrite(wall_id, ordered_blocks)


__all__ = ["WallService"]
