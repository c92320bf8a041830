# ============================================================================
# PROGRAM REPOSITORY
# ============================================================================
# STATUS: Domain - Program CRUD operations
# PURPOSE: Database access for the programs table
# CREATED: 19 OCT 2026
# ============================================================================
"""
Program Repository

Podcast programs. Plain CRUD; see repositories.base.
"""

from core.models.program import Program
from .base import EntityRepository
from .database import TABLE_PROGRAMS


class ProgramRepository(EntityRepository[Program]):
    """Repository for Program entities."""

    model = Program
    table = TABLE_PROGRAMS
    entity_name = "program"


__all__ = ["ProgramRepository"]
