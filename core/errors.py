# ============================================================================
# ERROR TAXONOMY
# ============================================================================
# STATUS: Foundation - Exceptions raised across layers
# PURPOSE: Distinguish validation, not-found, dangling-reference and
#          persistence failures so the transport layer can map them
# CREATED: 19 OCT 2026
# ============================================================================
"""
Error taxonomy.

    BackofficeError
    ├── FieldError           one (field, message) pair
    ├── ValidationFailed     aggregate of FieldErrors (client error)
    ├── NotFoundError        referenced entity does not exist
    ├── InconsistentError    association points at a missing child
    ├── LockNotAcquired      per-parent lock could not be taken in time
    └── PersistenceError     backing store call failed
        └── OverwriteError   overwrite stopped at a given step

Lower layers never retry. Every error carries enough context (operation,
entity, id) to diagnose without re-running with tracing.
"""

from typing import Any, Dict, List, Optional, Sequence

from core.contracts import OverwriteStep


class BackofficeError(Exception):
    """Base exception for the back office domain."""


class FieldError(BackofficeError):
    """A single failing field."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field} : {message}")

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationFailed(BackofficeError):
    """
    One or more fields failed validation.

    Reports every failing field in its message, not just the first one.
    Always recoverable by the caller: fix the input and retry.
    """

    def __init__(self, errors: Sequence[FieldError], operation: Optional[str] = None):
        if not errors:
            raise ValueError("ValidationFailed requires at least one FieldError")
        self.errors: List[FieldError] = list(errors)
        self.operation = operation
        joined = "\n".join(str(e) for e in self.errors)
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}request was not validated: {joined}")

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": str(self),
            "fields": [e.to_dict() for e in self.errors],
        }


class NotFoundError(BackofficeError):
    """Raised when a referenced entity or association does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InconsistentError(BackofficeError):
    """
    An association references a child that cannot be resolved.

    Surfaced lazily, when something tries to join the association to its
    child entity. Never filtered silently from result lists.
    """

    def __init__(
        self,
        relation: str,
        parent_id: str,
        child_id: str,
        message: Optional[str] = None,
    ):
        self.relation = relation
        self.parent_id = parent_id
        self.child_id = child_id
        super().__init__(
            message
            or f"{relation} association of {parent_id} references missing child {child_id}"
        )


class LockNotAcquired(BackofficeError):
    """
    Raised when a required lock cannot be acquired.

    Used when the per-parent overwrite lock is not granted within the
    configured timeout.
    """

    def __init__(self, lock_type: str, key: str):
        self.lock_type = lock_type
        self.key = key
        super().__init__(f"Failed to acquire {lock_type} lock for {key}")


class PersistenceError(BackofficeError):
    """The backing store call itself failed (connectivity, constraint, ...)."""

    def __init__(
        self,
        operation: str,
        entity: str,
        entity_id: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.operation = operation
        self.entity = entity
        self.entity_id = entity_id
        msg = f"error occurred while {operation} {entity}"
        if entity_id:
            msg += f" {entity_id}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class OverwriteError(PersistenceError):
    """
    An overwrite stopped before completing.

    Attributes:
        step: the OverwriteStep that failed
        deleted: association ids already deleted when the failure happened
        created: association ids already created when the failure happened
        rolled_back: True when the surrounding transaction undid the work;
            False means the parent may hold a partial association set
    """

    def __init__(
        self,
        relation: str,
        parent_id: str,
        step: OverwriteStep,
        deleted: Sequence[str] = (),
        created: Sequence[str] = (),
        rolled_back: bool = False,
        detail: Optional[str] = None,
    ):
        self.relation = relation
        self.parent_id = parent_id
        self.step = step
        self.deleted = list(deleted)
        self.created = list(created)
        self.rolled_back = rolled_back
        state = "rolled back" if rolled_back else (
            f"partial: {len(self.deleted)} deleted, {len(self.created)} created"
        )
        super().__init__(
            operation=f"overwriting ({step.value}, {state})",
            entity=relation,
            entity_id=parent_id,
            detail=detail,
        )


__all__ = [
    "BackofficeError",
    "FieldError",
    "ValidationFailed",
    "NotFoundError",
    "InconsistentError",
    "LockNotAcquired",
    "PersistenceError",
    "OverwriteError",
]
