# ============================================================================
# VALIDATION AGGREGATOR TESTS
# ============================================================================
# STATUS: Tests - Field validation and error taxonomy
# PURPOSE: Verify Validator aggregation and the error classes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Validation Aggregator Tests

Run with:
    pytest tests/test_validation.py -v
"""

import pytest
from pydantic import ValidationError

from core.contracts import ID_MAX_LENGTH, NIL_UUID, POSITION_MAX, OverwriteStep
from core.errors import (
    BackofficeError,
    FieldError,
    InconsistentError,
    NotFoundError,
    OverwriteError,
    PersistenceError,
    ValidationFailed,
)
from core.models.wall import Wall
from core.validation import NOT_EMPTY, REQUIRED, TOO_LONG, Validator, aggregate, field_errors, is_blank


class TestValidator:

    def test_no_errors_no_result(self):
        v = Validator("create wall").require("name", "Morning").require("description", "d")
        assert v.result() is None
        assert not v.failed
        v.raise_if_failed()

    def test_reports_every_failing_field(self):
        v = Validator("create wall")
        v.require("name", "")
        v.require("description", None)

        with pytest.raises(ValidationFailed) as exc_info:
            v.raise_if_failed()

        err = exc_info.value
        assert err.fields == ["name", "description"]
        assert "name : is required" in str(err)
        assert "description : is required" in str(err)
        assert str(err).startswith("create wall: ")

    def test_not_empty_message(self):
        v = Validator().not_empty("uuid", "")
        assert v.errors[0].message == NOT_EMPTY

    def test_reference_accepts_blank_and_ids(self):
        v = Validator().reference("parent_id", None).reference("parent_id", "").reference("parent_id", "abc")
        assert not v.failed

    def test_reference_rejects_nil_uuid(self):
        v = Validator().reference("parent_id", NIL_UUID)
        assert [e.field for e in v.errors] == ["parent_id"]

    def test_reference_rejects_over_long_ids(self):
        v = Validator().reference("parent_id", "p" * (ID_MAX_LENGTH + 1))
        assert [(e.field, e.message) for e in v.errors] == [("parent_id", TOO_LONG)]

    def test_identifier_length(self):
        assert not Validator().identifier("program_id", "p" * ID_MAX_LENGTH).failed
        assert not Validator().identifier("program_id", "").failed
        assert Validator().identifier("program_id", "p" * (ID_MAX_LENGTH + 1)).failed

    def test_identifier_rejects_non_strings(self):
        v = Validator().identifier("blocks[]", 42)
        assert v.errors[0].message == "must be a string"

    @pytest.mark.parametrize("value", [1, 0, -3])
    def test_integer_accepts_ints(self, value):
        assert not Validator().integer("position", value).failed

    @pytest.mark.parametrize("value", [True, "1", 1.5, None])
    def test_integer_rejects_non_ints(self, value):
        assert Validator().integer("position", value).failed

    def test_integer_rejects_out_of_range(self):
        assert not Validator().integer("position", POSITION_MAX).failed
        assert Validator().integer("position", POSITION_MAX + 1).failed

    def test_check_and_extend(self):
        v = Validator()
        v.check(False, "kind", "unknown kind")
        v.extend([FieldError("a", "x"), FieldError("b", "y")])
        assert [e.field for e in v.errors] == ["kind", "a", "b"]

    def test_errors_is_a_copy(self):
        v = Validator().require("name", "")
        v.errors.clear()
        assert v.failed


class TestAggregate:

    def test_empty_is_none(self):
        assert aggregate([]) is None

    def test_combines(self):
        err = aggregate([FieldError("name", REQUIRED)], operation="create tag")
        assert isinstance(err, ValidationFailed)
        assert err.operation == "create tag"

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert not is_blank(" ")
        assert not is_blank(0)

    def test_field_errors_from_model(self):
        with pytest.raises(ValidationError) as exc_info:
            Wall(id="w" * (ID_MAX_LENGTH + 1), name="Home", description="d")

        errors = field_errors(exc_info.value, prefix="walls[0].")
        assert [e.field for e in errors] == ["walls[0].id"]


class TestErrorTaxonomy:

    def test_validation_failed_requires_errors(self):
        with pytest.raises(ValueError):
            ValidationFailed([])

    def test_validation_failed_to_dict(self):
        err = ValidationFailed([FieldError("name", REQUIRED)])
        body = err.to_dict()
        assert body["fields"] == [{"field": "name", "message": REQUIRED}]
        assert "name" in body["error"]

    def test_types_are_distinguishable(self):
        validation = ValidationFailed([FieldError("name", REQUIRED)])
        missing = NotFoundError("wall", "W1")
        dangling = InconsistentError("wall_block", "W1", "B9")
        persistence = PersistenceError("creating", "wall", "W1")

        for err in (validation, missing, dangling, persistence):
            assert isinstance(err, BackofficeError)
        assert not isinstance(validation, (NotFoundError, PersistenceError))
        assert not isinstance(dangling, NotFoundError)

    def test_not_found_message(self):
        assert str(NotFoundError("wall", "W1")) == "wall not found: W1"

    def test_persistence_error_context(self):
        err = PersistenceError("updating", "program", "P1", detail="connection refused")
        assert str(err) == "error occurred while updating program P1: connection refused"

    def test_overwrite_error_partial(self):
        err = OverwriteError(
            "wall_block", "W1", OverwriteStep.CREATE,
            deleted=["a1", "a2"], created=["n1"], rolled_back=False,
        )
        assert isinstance(err, PersistenceError)
        assert err.step is OverwriteStep.CREATE
        assert "partial: 2 deleted, 1 created" in str(err)
        assert err.entity_id == "W1"

    def test_overwrite_error_rolled_back(self):
        err = OverwriteError("program_tag", "P1", OverwriteStep.DELETE, rolled_back=True)
        assert "rolled back" in str(err)
