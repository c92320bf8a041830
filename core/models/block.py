# ============================================================================
# BLOCK MODEL
# ============================================================================
# STATUS: Domain model - Middle-level presentation container
# PURPOSE: A block groups programs and is placed on walls
# CREATED: 19 OCT 2026
# ============================================================================
"""
Block Model

Blocks sit between walls and programs. `kind` is a free-form rendering
hint for clients (e.g. "carousel", "grid"); the back office stores it
as given.
"""

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Block(BaseModel):
    """
    Middle-level presentation container.

    Maps to: backoffice.blocks
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "blocks"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = [
        ("idx_blocks_kind", ["kind"]),
    ]

    id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    description: str = Field(default="")
    kind: str = Field(default="", max_length=50, description="Rendering hint, e.g. 'carousel'")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Block"]
