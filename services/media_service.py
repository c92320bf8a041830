# ============================================================================
# MEDIA SERVICE
# ============================================================================
# STATUS: Domain service - Media files of an episode
# PURPOSE: Media CRUD
# CREATED: 19 OCT 2026
# ============================================================================
"""MediaService: media carry no name, so create validates its own fields."""

from typing import Any, Dict, List

from core.models.media import Media
from core.models.requests import MediaRequest
from core.validation import Validator
from services.base import EntityService


class MediaService(EntityService[Media]):
    """Business rules for media."""

    entity_name = "media"

    def _validate_create(self, request: Any, v: Validator) -> None:
        v.require("direct_link", getattr(request, "direct_link", None))
        v.require("kind", getattr(request, "kind", None))
        episode_id = getattr(request, "episode_id", None)
        v.require("episode_id", episode_id)
        v.identifier("episode_id", episode_id)

    def _build(self, entity_id: str, request: MediaRequest) -> Media:
        return Media(
            id=entity_id,
            direct_link=request.direct_link,
            kind=request.kind,
            episode_id=request.episode_id,
        )

    def _collect_updates(self, request: Any, v: Validator) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for column in ("direct_link", "kind", "episode_id"):
            self._set_if_present(changes, column, getattr(request, column, None))
        v.identifier("episode_id", changes.get("episode_id"))
        return changes

    async def find_by_episode(self, episode_id: str) -> List[Media]:
        with self._operation("find by episode", episode_id):
            Validator("find medias").not_empty("episode_id", episode_id).raise_if_failed()
            return await self.store.list_by_episode_id(episode_id)


__all__ = ["MediaService"]
