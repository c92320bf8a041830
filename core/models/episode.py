# ============================================================================
# EPISODE MODEL
# ============================================================================
# STATUS: Domain model - Program episode
# PURPOSE: One episode of a program, ordered by position
# CREATED: 19 OCT 2026
# ============================================================================
"""
Episode Model

An episode belongs to exactly one program. The link is a weak reference:
program_id is stored as given and is not checked against the programs
table on write.
"""

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Episode(BaseModel):
    """
    Episode of a program.

    Maps to: backoffice.episodes
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "episodes"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        ("idx_episodes_program", ["program_id", "position"]),
    ]

    id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    description: str = Field(default="")

    # Weak reference to programs.id
    program_id: str = Field(..., max_length=36)
    position: int = Field(default=1, description="1-based order within the program")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Episode"]
