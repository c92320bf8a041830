# ============================================================================
# PROGRAM MODEL
# ============================================================================
# STATUS: Domain model - Leaf content unit
# PURPOSE: A podcast program; owns episodes, is tagged and categorized
# CREATED: 19 OCT 2026
# ============================================================================
"""
Program Model

Programs are placed in blocks (block_programs), tagged (program_tags)
and categorized (program_categories). Episodes point back at their
program through a weak program_id reference.
"""

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Program(BaseModel):
    """
    Podcast program.

    Maps to: backoffice.programs
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "programs"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = []

    id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    description: str = Field(default="")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Program"]
