# ============================================================================
# MEDIA REPOSITORY
# ============================================================================
# STATUS: Domain - Media CRUD operations
# PURPOSE: Database access for the medias table
# CREATED: 19 OCT 2026
# ============================================================================

from typing import List

from core.models.media import Media
from .base import EntityRepository
from .database import TABLE_MEDIAS


class MediaRepository(EntityRepository[Media]):
    """Repository for Media entities."""

    model = Media
    table = TABLE_MEDIAS
    entity_name = "media"

    async def list_by_episode_id(self, episode_id: str) -> List[Media]:
        return await self._list_where("episode_id", episode_id)


__all__ = ["MediaRepository"]
