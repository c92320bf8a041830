# ============================================================================
# VALIDATION AGGREGATOR
# ============================================================================
# STATUS: Foundation - Field validation shared by every mutation path
# PURPOSE: Collect field failures into one reportable error
# CREATED: 19 OCT 2026
# ============================================================================
"""
Validation Aggregator

Validation functions inspect a request object through its accessors and
record zero or more (field, message) pairs. The pairs are combined into a
single ValidationFailed that:

- exists only when at least one field failed
- reports every failing field in its message
- is distinguishable by type from NotFoundError / PersistenceError

Create and update paths compose differently: an update validates fewer
fields, because an empty string there means "do not change".

Usage:
    v = Validator("create wall")
    v.require("name", request.name)
    v.require("description", request.description)
    v.raise_if_failed()
"""

from typing import Any, Iterable, List, Optional

from core.contracts import ID_MAX_LENGTH, NIL_UUID, POSITION_MAX, POSITION_MIN
from pydantic import ValidationError

from core.errors import FieldError, ValidationFailed

REQUIRED = "is required"
NOT_EMPTY = "cannot be empty"
TOO_LONG = f"must be at most {ID_MAX_LENGTH} characters"


def is_blank(value: Any) -> bool:
    """True for None and the empty string (the "not supplied" values)."""
    return value is None or value == ""


def aggregate(
    errors: Iterable[FieldError], operation: Optional[str] = None
) -> Optional[ValidationFailed]:
    """Combine field errors into one ValidationFailed, or None when empty."""
    errors = list(errors)
    if not errors:
        return None
    return ValidationFailed(errors, operation=operation)


def field_errors(error: ValidationError, prefix: str = "") -> List[FieldError]:
    """Translate a pydantic ValidationError into FieldErrors."""
    result = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "body"
        result.append(FieldError(f"{prefix}{location}", item["msg"]))
    return result


class Validator:
    """Accumulates FieldErrors for one operation."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        self._errors: List[FieldError] = []

    @property
    def errors(self) -> List[FieldError]:
        return list(self._errors)

    @property
    def failed(self) -> bool:
        return bool(self._errors)

    def add(self, field: str, message: str) -> "Validator":
        self._errors.append(FieldError(field, message))
        return self

    def extend(self, errors: Iterable[FieldError]) -> "Validator":
        self._errors.extend(errors)
        return self

    def check(self, condition: bool, field: str, message: str) -> "Validator":
        """Record a failure for `field` when `condition` is false."""
        if not condition:
            self.add(field, message)
        return self

    def require(self, field: str, value: Any, message: str = REQUIRED) -> "Validator":
        return self.check(not is_blank(value), field, message)

    def not_empty(self, field: str, value: Any) -> "Validator":
        return self.check(not is_blank(value), field, NOT_EMPTY)

    def reference(self, field: str, value: Optional[str]) -> "Validator":
        """
        Check an optional weak reference.

        Blank means "no reference" and passes. The nil UUID is rejected so a
        zero value is never written as if it were a real id.
        """
        if is_blank(value):
            return self
        if value == NIL_UUID:
            return self.add(field, "cannot be the nil UUID")
        return self.identifier(field, value)

    def identifier(self, field: str, value: Any) -> "Validator":
        """Check that a supplied id fits the id columns. Blank passes."""
        if is_blank(value):
            return self
        if not isinstance(value, str):
            return self.add(field, "must be a string")
        return self.check(len(value) <= ID_MAX_LENGTH, field, TOO_LONG)

    def integer(self, field: str, value: Any) -> "Validator":
        # bool is an int subclass; a JSON true is not a position
        if isinstance(value, bool) or not isinstance(value, int):
            return self.add(field, "must be an integer")
        return self.check(
            POSITION_MIN <= value <= POSITION_MAX, field, "is out of range"
        )

    def result(self) -> Optional[ValidationFailed]:
        return aggregate(self._errors, operation=self.operation)

    def raise_if_failed(self) -> None:
        error = self.result()
        if error is not None:
            raise error


__all__ = [
    "REQUIRED",
    "NOT_EMPTY",
    "TOO_LONG",
    "Validator",
    "aggregate",
    "field_errors",
    "is_blank",
]
