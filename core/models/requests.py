# ============================================================================
# REQUEST PROTOCOLS
# ============================================================================
# STATUS: Service contracts - Structural request interfaces
# PURPOSE: Decouple the service layer from the wire format
# CREATED: 19 OCT 2026
# ============================================================================
"""
Request Protocols

Services accept any object exposing the attributes below. The HTTP
layer passes pydantic models (api.schemas); tests pass SimpleNamespace
or dataclasses. Nothing here knows about JSON.

On update requests an empty string means "leave unchanged".
"""

from typing import Optional, Protocol


class NamedRequest(Protocol):
    """Wall, Program and Tag create/update payloads."""
    name: str
    description: str


class BlockRequest(Protocol):
    name: str
    description: str
    kind: str


class EpisodeRequest(Protocol):
    """
    Episode payload.

    position is 1-based; on update 0 means "leave unchanged".
    """
    name: str
    description: str
    program_id: str
    position: int


class MediaRequest(Protocol):
    direct_link: str
    kind: str
    episode_id: str


class CategoryRequest(Protocol):
    """Category create payload. parent_id None or "" creates a root."""
    name: str
    description: str
    parent_id: Optional[str]


class CategoryUpdateRequest(Protocol):
    """
    Category update payload.

    parent_id set to an id moves the category under that parent.
    clear_parent=True turns it into a root. Supplying both is rejected;
    supplying neither leaves the parent untouched.
    """
    name: str
    description: str
    parent_id: Optional[str]
    clear_parent: bool


__all__ = [
    "NamedRequest",
    "BlockRequest",
    "EpisodeRequest",
    "MediaRequest",
    "CategoryRequest",
    "CategoryUpdateRequest",
]
