# ============================================================================
# TAG SERVICE
# ============================================================================
# STATUS: Domain service - Tags
# PURPOSE: Tag CRUD, reverse lookup of tagged programs
# CREATED: 19 OCT 2026
# ============================================================================
"""TagService"""

from typing import List

from core.models.program import Program
from core.models.requests import NamedRequest
from core.models.tag import Tag
from core.ports import EntityStore
from services.base import EntityService
from services.relations import Relationship


class TagService(EntityService[Tag]):
    entity_name = "tag"

    def __init__(self, store: EntityStore[Tag], program_tags: Relationship[Program, Tag]):
        super().__init__(store)
        self.program_tags = program_tags

    def _build(self, entity_id: str, request: NamedRequest) -> Tag:
        return Tag(id=entity_id, name=request.name, description=request.description)

    async def find_programs(self, tag_id: str) -> List[Program]:
        """Programs carrying this tag."""
        with self._operation("find programs", tag_id):
            return await self.program_tags.find_parents(tag_id)


__all__ = ["TagService"]
