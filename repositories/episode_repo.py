# ============================================================================
# EPISODE REPOSITORY
# ============================================================================
# STATUS: Domain - Episode CRUD operations
# PURPOSE: Database access for the episodes table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Episode Repository

CRUD plus the program -> episodes lookup. program_id is a weak
reference; listing episodes of a missing program returns an empty list.
"""

from typing import List

from core.models.episode import Episode
from .base import EntityRepository
from .database import TABLE_EPISODES


class EpisodeRepository(EntityRepository[Episode]):
    """Repository for Episode entities."""

    model = Episode
    table = TABLE_EPISODES
    entity_name = "episode"

    async def list_by_program_id(self, program_id: str) -> List[Episode]:
        """Episodes of a program ordered by position."""
        return await self._list_where("program_id", program_id, order_by="position")


__all__ = ["EpisodeRepository"]
