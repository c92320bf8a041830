# ============================================================================
# ASSOCIATION MODELS
# ============================================================================
# STATUS: Domain model - Many-to-many link rows
# PURPOSE: One row per edge of a wall/block/program/tag/category relation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Association Models

Each association row binds one parent to one child and has its own id,
generated by the caller (never by the store). Positioned relations also
carry an integer display position; the store treats it as data, not as
a sort key, and does not require it to be unique or contiguous.

    WallBlock        wall_id    -> block_id     + position
    BlockProgram     block_id   -> program_id   + position
    ProgramTag       program_id -> tag_id
    ProgramCategory  program_id -> category_id

Invariant: for a fixed parent each child appears at most once. The
PostgreSQL tables enforce it with a unique (parent, child) index.

Generic code (association stores, overwrite engine) reads rows through
the parent_id / child_id / get_position() accessors and builds them with
`Association.build()`, so it never needs the concrete column names.
"""

from datetime import datetime, timezone
from typing import ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, Field

from core.contracts import SCHEMA, Relation


class Association(BaseModel):
    """Base for link rows. Subclasses name their parent and child columns."""

    __relation__: ClassVar[Relation]
    __parent_field__: ClassVar[str]
    __child_field__: ClassVar[str]

    id: str = Field(..., max_length=36, description="Association id, generated by caller")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def parent_id(self) -> str:
        return getattr(self, self.__parent_field__)

    @property
    def child_id(self) -> str:
        return getattr(self, self.__child_field__)

    def get_position(self) -> Optional[int]:
        """Display position; None for unordered relations."""
        return getattr(self, "position", None)

    @classmethod
    def build(
        cls,
        id: str,
        parent_id: str,
        child_id: str,
        position: Optional[int] = None,
    ) -> "Association":
        values = {
            "id": id,
            cls.__parent_field__: parent_id,
            cls.__child_field__: child_id,
        }
        if cls.__relation__.is_positioned():
            values["position"] = position if position is not None else 0
        return cls(**values)


class WallBlock(Association):
    """
    Block placed on a wall at a position.

    Maps to: backoffice.wall_blocks
    """

    __relation__: ClassVar[Relation] = Relation.WALL_BLOCK
    __parent_field__: ClassVar[str] = "wall_id"
    __child_field__: ClassVar[str] = "block_id"

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "wall_blocks"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        {"name": "idx_wall_blocks_parent_child", "columns": ["wall_id", "block_id"], "unique": True},
        ("idx_wall_blocks_block", ["block_id"]),
    ]

    wall_id: str = Field(..., max_length=36)
    block_id: str = Field(..., max_length=36)
    position: int = Field(default=0)


class BlockProgram(Association):
    """
    Program placed in a block at a position.

    Maps to: backoffice.block_programs
    """

    __relation__: ClassVar[Relation] = Relation.BLOCK_PROGRAM
    __parent_field__: ClassVar[str] = "block_id"
    __child_field__: ClassVar[str] = "program_id"

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "block_programs"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        {"name": "idx_block_programs_parent_child", "columns": ["block_id", "program_id"], "unique": True},
        ("idx_block_programs_program", ["program_id"]),
    ]

    block_id: str = Field(..., max_length=36)
    program_id: str = Field(..., max_length=36)
    position: int = Field(default=0)


class ProgramTag(Association):
    """
    Tag attached to a program.

    Maps to: backoffice.program_tags
    """

    __relation__: ClassVar[Relation] = Relation.PROGRAM_TAG
    __parent_field__: ClassVar[str] = "program_id"
    __child_field__: ClassVar[str] = "tag_id"

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "program_tags"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        {"name": "idx_program_tags_parent_child", "columns": ["program_id", "tag_id"], "unique": True},
        ("idx_program_tags_tag", ["tag_id"]),
    ]

    program_id: str = Field(..., max_length=36)
    tag_id: str = Field(..., max_length=36)


class ProgramCategory(Association):
    """
    Category attached to a program.

    Maps to: backoffice.program_categories
    """

    __relation__: ClassVar[Relation] = Relation.PROGRAM_CATEGORY
    __parent_field__: ClassVar[str] = "program_id"
    __child_field__: ClassVar[str] = "category_id"

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "program_categories"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        {"name": "idx_program_categories_parent_child", "columns": ["program_id", "category_id"], "unique": True},
        ("idx_program_categories_category", ["category_id"]),
    ]

    program_id: str = Field(..., max_length=36)
    category_id: str = Field(..., max_length=36)


ASSOCIATION_MODELS: Dict[Relation, Type[Association]] = {
    Relation.WALL_BLOCK: WallBlock,
    Relation.BLOCK_PROGRAM: BlockProgram,
    Relation.PROGRAM_TAG: ProgramTag,
    Relation.PROGRAM_CATEGORY: ProgramCategory,
}


__all__ = [
    "Association",
    "WallBlock",
    "BlockProgram",
    "ProgramTag",
    "ProgramCategory",
    "ASSOCIATION_MODELS",
]
