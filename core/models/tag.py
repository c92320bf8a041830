# ============================================================================
# TAG MODEL
# ============================================================================
# STATUS: Domain model - Free-form program label
# PURPOSE: Flat labels attached to programs through program_tags
# CREATED: 19 OCT 2026
# ============================================================================

from datetime import datetime, timezone
from typing import ClassVar, List

from pydantic import BaseModel, Field

from core.contracts import SCHEMA


class Tag(BaseModel):
    """
    Flat program label.

    Maps to: backoffice.tags
    """

    # SQL DDL METADATA
    __sql_table__: ClassVar[str] = "tags"
    __sql_schema__: ClassVar[str] = SCHEMA
    __sql_primary_key__: ClassVar[List[str]] = ["id"]
    __sql_indexes__: ClassVar[List] = []

    id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    description: str = Field(default="")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["Tag"]
