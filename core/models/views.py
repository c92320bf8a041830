# ============================================================================
# RESOLVED VIEWS
# ============================================================================
# STATUS: Read models - Children joined with their association position
# PURPOSE: Response shapes for FindChildren on positioned relations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Resolved Views

Read-only shapes returned when an association is joined to its child
entity. Unordered relations return the plain child model; positioned
relations add the position carried by the association row.
"""

from typing import List

from pydantic import BaseModel, Field

from core.models.block import Block
from core.models.category import Category
from core.models.program import Program


class PositionedBlock(Block):
    """A block as placed on a wall."""
    position: int = Field(..., description="Position on the wall")


class PositionedProgram(Program):
    """A program as placed in a block."""
    position: int = Field(..., description="Position in the block")


class CategoryLineage(BaseModel):
    """
    A category with its resolved ancestor chain.

    ancestors runs nearest first: ancestors[0] is the direct parent.
    truncated is True when the walk stopped early (dangling parent or
    depth limit) rather than at a root.
    """
    category: Category
    ancestors: List[Category] = Field(default_factory=list)
    truncated: bool = False


__all__ = ["PositionedBlock", "PositionedProgram", "CategoryLineage"]
