# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and relation contracts
# PURPOSE: Define the association relations and overwrite steps
# CREATED: 19 OCT 2026
# EXPORTS: Relation, OverwriteStep, NIL_UUID, SCHEMA
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the podcast back office.

These define the identity of each many-to-many relation that crosses
boundaries:
- SQL (PostgreSQL link tables)
- Python (association stores, overwrite engine)
- HTTP (overwrite endpoints)
"""

from enum import Enum


# The zero-value UUID. Never a valid parent or child reference.
NIL_UUID = "00000000-0000-0000-0000-000000000000"

# PostgreSQL schema holding every back office table.
SCHEMA = "backoffice"

# Width of every id column (VARCHAR(36), a hyphenated UUID).
ID_MAX_LENGTH = 36

# PostgreSQL INTEGER bounds for position columns.
POSITION_MIN = -2**31
POSITION_MAX = 2**31 - 1


# ============================================================================
# RELATIONS
# ============================================================================

class Relation(str, Enum):
    """
    Many-to-many relations managed through link tables.

    Positioned relations carry a display position per association row:
        WALL_BLOCK     wall  -> block
        BLOCK_PROGRAM  block -> program

    Unordered relations are plain set membership:
        PROGRAM_TAG       program -> tag
        PROGRAM_CATEGORY  program -> category
    """
    WALL_BLOCK = "wall_block"
    BLOCK_PROGRAM = "block_program"
    PROGRAM_TAG = "program_tag"
    PROGRAM_CATEGORY = "program_category"

    def is_positioned(self) -> bool:
        """Check if association rows of this relation carry a position."""
        return self in (Relation.WALL_BLOCK, Relation.BLOCK_PROGRAM)

    @property
    def parent_entity(self) -> str:
        return _RELATION_ENTITIES[self][0]

    @property
    def child_entity(self) -> str:
        return _RELATION_ENTITIES[self][1]


_RELATION_ENTITIES = {
    Relation.WALL_BLOCK: ("wall", "block"),
    Relation.BLOCK_PROGRAM: ("block", "program"),
    Relation.PROGRAM_TAG: ("program", "tag"),
    Relation.PROGRAM_CATEGORY: ("program", "category"),
}


class OverwriteStep(str, Enum):
    """
    Steps of an overwrite, in execution order.

    Reported by OverwriteError so callers know how far a failed
    overwrite got before it stopped.
    """
    VALIDATE = "validate"
    LOCK = "lock"
    FETCH = "fetch"
    DELETE = "delete"
    CREATE = "create"
    COMMIT = "commit"


__all__ = [
    "Relation",
    "OverwriteStep",
    "NIL_UUID",
    "SCHEMA",
    "ID_MAX_LENGTH",
    "POSITION_MIN",
    "POSITION_MAX",
]
