# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Transport - Request/Response schemas
# PURPOSE: Pydantic models for the /private HTTP surface
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Schemas

Request bodies use the camelCase wire names (programID, directLink, ...)
and expose snake_case attributes, so each one satisfies the matching
protocol in core.models.requests and is handed to the service as is.

Fields default to "" instead of being required: the service layer owns
validation and reports every missing field in one 400 response.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.overwrite import OverwriteResult


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# ENTITY REQUESTS
# ============================================================================

class NamedBody(_Request):
    """Wall, Program and Tag create/update body."""
    name: str = Field(default="", max_length=255)
    description: str = ""


class BlockBody(NamedBody):
    kind: str = Field(default="", max_length=50)


class EpisodeBody(NamedBody):
    """Episode body. position 0 on update means unchanged."""
    program_id: str = Field(default="", alias="programID")
    position: Optional[int] = None


class MediaBody(_Request):
    direct_link: str = Field(default="", alias="directLink", max_length=2048)
    kind: str = Field(default="", max_length=50)
    episode_id: str = Field(default="", alias="episodeID")


class CategoryBody(NamedBody):
    """
    Category body.

    On create parentID makes the category a child; omitted it is a root.
    On update clearParent=true turns it into a root.
    """
    parent_id: Optional[str] = Field(default=None, alias="parentID")
    clear_parent: bool = Field(default=False, alias="clearParent")


# ============================================================================
# OVERWRITE REQUESTS
# ============================================================================

class OrderedBlocksBody(_Request):
    """Complete set of blocks for a wall: block id -> position."""
    ordered_blocks: Dict[str, Any] = Field(default_factory=dict, alias="orderedBlocks")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"orderedBlocks": {"B2": 0, "B3": 1}}]},
    )


class OrderedProgramsBody(_Request):
    """Complete set of programs for a block: program id -> position."""
    ordered_programs: Dict[str, Any] = Field(default_factory=dict, alias="orderedPrograms")


class TagsBody(_Request):
    tags: List[str] = Field(default_factory=list)


class CategoriesBody(_Request):
    categories: List[str] = Field(default_factory=list)


# ============================================================================
# RESPONSES
# ============================================================================

class OverwriteResponse(BaseModel):
    """Outcome of an overwrite."""
    relation: str
    parent_id: str
    deleted: int
    children: Dict[str, Optional[int]]

    @classmethod
    def from_result(cls, result: OverwriteResult) -> "OverwriteResponse":
        return cls(
            relation=result.relation.value,
            parent_id=result.parent_id,
            deleted=len(result.deleted),
            children=result.children,
        )


class ErrorResponse(BaseModel):
    error: str
    fields: List[Dict[str, str]] = Field(default_factory=list)


__all__ = [
    "NamedBody",
    "BlockBody",
    "EpisodeBody",
    "MediaBody",
    "CategoryBody",
    "OrderedBlocksBody",
    "OrderedProgramsBody",
    "TagsBody",
    "CategoriesBody",
    "OverwriteResponse",
    "ErrorResponse",
]
