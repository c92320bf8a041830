# ============================================================================
# BLOCK SERVICE
# ============================================================================
# STATUS: Domain service - Blocks, their programs, and the walls using them
# PURPOSE: Block CRUD, find/overwrite programs, reverse lookup of walls
# CREATED: 19 OCT 2026
# ============================================================================
"""
BlockService

Block CRUD plus both relations a block takes part in:

    block -> program   (block_programs, positioned; block is the parent)
    wall  -> block     (wall_blocks; reverse lookup of walls)
"""

from typing import Any, Dict, List, Mapping

from core.models.block import Block
from core.models.program import Program
from core.models.requests import BlockRequest
from core.models.views import PositionedProgram
from core.models.wall import Wall
from core.ports import EntityStore
from core.validation import Validator
from services.base import EntityService
from services.overwrite import OverwriteResult
from services.relations import Relationship


class BlockService(EntityService[Block]):
    """Business rules for blocks."""

    entity_name = "block"

    def __init__(
        self,
        store: EntityStore[Block],
        block_programs: Relationship[Block, Program],
        wall_blocks: Relationship[Wall, Block],
    ):
        super().__init__(store)
        self.block_programs = block_programs
        self.wall_blocks = wall_blocks

    def _build(self, entity_id: str, request: BlockRequest) -> Block:
        return Block(
            id=entity_id,
            name=request.name,
            description=request.description,
            kind=getattr(request, "kind", None) or "",
        )

    def _collect_updates(self, request: Any, v: Validator) -> Dict[str, Any]:
        changes = super()._collect_updates(request, v)
        self._set_if_present(changes, "kind", getattr(request, "kind", None))
        return changes

    async def find_programs(self, block_id: str) -> List[PositionedProgram]:
        """Programs in a block ordered by position."""
        with self._operation("find programs", block_id):
            pairs = await self.block_programs.find_children(block_id)
            return [
                PositionedProgram(**program.model_dump(), position=assoc.get_position())
                for assoc, program in pairs
            ]

    async def overwrite_programs(
        self, block_id: str, ordered_programs: Mapping[str, int]
    ) -> OverwriteResult:
        """Replace every program in the block with `ordered_programs`."""
        with self._operation("overwrite programs", block_id):
            return await self.block_programs.overwrite(block_id, ordered_programs)

    async def find_walls(self, block_id: str) -> List[Wall]:
        """Walls this block is placed on."""
        with self._operation("find walls", block_id):
            return await self.wall_blocks.find_parents(block_id)


__all__ = ["BlockService"]
