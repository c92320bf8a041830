# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# CREATED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the back office.
Models define SQL metadata via __sql_* ClassVar attributes for DDL generation.

Single Source of Truth Pattern:
    - Pydantic models define structure
    - PydanticToSQL reads __sql_* metadata
    - PostgreSQL schema generated from models
"""

from core.models.wall import Wall
from core.models.block import Block
from core.models.program import Program
from core.models.episode import Episode
from core.models.media import Media
from core.models.tag import Tag
from core.models.category import Category
from core.models.associations import (
    Association,
    WallBlock,
    BlockProgram,
    ProgramTag,
    ProgramCategory,
    ASSOCIATION_MODELS,
)
from core.models.views import PositionedBlock, PositionedProgram, CategoryLineage

# Tables in creation order
ENTITY_MODELS = [Wall, Block, Program, Episode, Media, Tag, Category]
TABLE_MODELS = ENTITY_MODELS + [WallBlock, BlockProgram, ProgramTag, ProgramCategory]

__all__ = [
    # Entities
    "Wall",
    "Block",
    "Program",
    "Episode",
    "Media",
    "Tag",
    "Category",
    # Associations
    "Association",
    "WallBlock",
    "BlockProgram",
    "ProgramTag",
    "ProgramCategory",
    "ASSOCIATION_MODELS",
    # Views
    "PositionedBlock",
    "PositionedProgram",
    "CategoryLineage",
    # Registries
    "ENTITY_MODELS",
    "TABLE_MODELS",
]
