# ============================================================================
# MEDIA MODEL
# ============================================================================
# STATUS: Domain model - Playable media for an episode
# PURPOSE: Direct link to an audio/video file attached to an episode
# CREATED: 19 OCT 2026
# ============================================================================
"""
Media Model

A media row is a direct link plus a kind ("audio/mpeg", "video", ...)
attached to an episode via a weak episode_id reference.
"""

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Media(BaseModel):
    """
    Playable media attached to an episode.

    Maps to: backoffice.medias
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "medias"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        ("idx_medias_episode", ["episode_id"]),
    ]

    id: str = Field(..., max_length=36)
    direct_link: str = Field(..., max_length=2048)
    kind: str = Field(..., max_length=50)

    # Weak reference to episodes.id
    episode_id: str = Field(..., max_length=36)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Media"]
