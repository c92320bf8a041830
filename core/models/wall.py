# ============================================================================
# WALL MODEL
# ============================================================================
# STATUS: Domain model - Top-level presentation container
# PURPOSE: A wall is an ordered arrangement of blocks shown to listeners
# CREATED: 19 OCT 2026
# ============================================================================
"""
Wall Model

Top of the presentation hierarchy: Wall -> Block -> Program.
A wall owns nothing directly; its blocks are linked through the
wall_blocks association table (see core.models.associations).
"""

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Wall(BaseModel):
    """
    Top-level presentation container.

    Maps to: backoffice.walls
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "walls"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = []

    id: str = Field(..., max_length=36, description="UUID assigned on create")
    name: str = Field(..., max_length=255)
    description: str = Field(default="")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Wall"]
