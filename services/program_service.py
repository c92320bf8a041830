# ============================================================================
# PROGRAM SERVICE
# ============================================================================
# STATUS: Domain service - Programs, episodes, tags and categories
# PURPOSE: Program CRUD plus every relation a program takes part in
# CREATED: 19 OCT 2026
# ============================================================================
"""
ProgramService

Relations navigated from a program:

    program -> episode   episodes.program_id (weak reference, by position)
    program -> tag       program_tags (unordered, overwritable)
    program -> category  program_categories (unordered, overwritable)
    block   -> program   block_programs (reverse lookup of blocks)
"""

from typing import Iterable, List

from core.models.block import Block
from core.models.category import Category
from core.models.episode import Episode
from core.models.program import Program
from core.models.requests import NamedRequest
from core.models.tag import Tag
from core.ports import EntityStore
from core.validation import Validator
from services.base import EntityService
from services.overwrite import OverwriteResult
from services.relations import Relationship


class ProgramService(EntityService[Program]):
    """Business rules for programs."""

    entity_name = "program"

    def __init__(
        self,
        store: EntityStore[Program],
        episodes,
        program_tags: Relationship[Program, Tag],
        program_categories: Relationship[Program, Category],
        block_programs: Relationship[Block, Program],
    ):
        super().__init__(store)
        self.episodes = episodes
        self.program_tags = program_tags
        self.program_categories = program_categories
        self.block_programs = block_programs

    def _build(self, entity_id: str, request: NamedRequest) -> Program:
        return Program(id=entity_id, name=request.name, description=request.description)

    async def find_episodes(self, program_id: str) -> List[Episode]:
        """Episodes of a program ordered by position."""
        with self._operation("find episodes", program_id):
            Validator("find episodes").not_empty("program_id", program_id).raise_if_failed()
            return await self.episodes.list_by_program_id(program_id)

    async def find_tags(self, program_id: str) -> List[Tag]:
        with self._operation("find tags", program_id):
            return [tag for _, tag in await self.program_tags.find_children(program_id)]

    async def find_categories(self, program_id: str) -> List[Category]:
        with self._operation("find categories", program_id):
            return [c for _, c in await self.program_categories.find_children(program_id)]

    async def overwrite_tags(self, program_id: str, tags: Iterable[str]) -> OverwriteResult:
        """Replace the program's tag set."""
        with self._operation("overwrite tags", program_id):
            return await self.program_tags.overwrite(program_id, tags)

    async def overwrite_categories(self, program_id: str, categories: Iterable[str]) -> OverwriteResult:
        """Replace the program's category set."""
        with self._operation("overwrite categories", program_id):
            return await self.program_categories.overwrite(program_id, categories)

    async def find_blocks(self, program_id: str) -> List[Block]:
        """Blocks containing this program."""
        with self._operation("find blocks", program_id):
            return await self.block_programs.find_parents(program_id)


__all__ = ["ProgramService"]
