# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors, models, and schema utilities
# CREATED: 19 OCT 2026
# ============================================================================

from core.contracts import NIL_UUID, SCHEMA, OverwriteStep, Relation
from core.errors import (
    BackofficeError,
    FieldError,
    InconsistentError,
    LockNotAcquired,
    NotFoundError,
    OverwriteError,
    PersistenceError,
    ValidationFailed,
)
from core.models import (
    Wall,
    Block,
    Program,
    Episode,
    Media,
    Tag,
    Category,
    WallBlock,
    BlockProgram,
    ProgramTag,
    ProgramCategory,
)
from core.schema import PydanticToSQL

__all__ = [
    # Contracts
    "NIL_UUID",
    "SCHEMA",
    "OverwriteStep",
    "Relation",
    # Errors
    "BackofficeError",
    "FieldError",
    "ValidationFailed",
    "NotFoundError",
    "InconsistentError",
    "LockNotAcquired",
    "PersistenceError",
    "OverwriteError",
    # Models
    "Wall",
    "Block",
    "Program",
    "Episode",
    "Media",
    "Tag",
    "Category",
    "WallBlock",
    "BlockProgram",
    "ProgramTag",
    "ProgramCategory",
    # Schema
    "PydanticToSQL",
]
