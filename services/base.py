# ============================================================================
# ENTITY SERVICE BASE
# ============================================================================
# STATUS: Domain service - Validated CRUD shared by every entity
# PURPOSE: create/update/get/list_all/delete with aggregated validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Service Base

Every entity service follows the same flow:

    create   validate all required fields -> build with a new uuid4 -> store
    update   id must be non-empty -> collect non-empty fields -> store
    get      id must be non-empty -> NotFoundError when missing
    delete   id must be non-empty -> NotFoundError when missing

Update requests are partial: an empty string means "leave unchanged",
so update(id, name="", description="new") keeps the current name.

Subclasses provide _validate_create, _build and _collect_updates. Requests
are read only through attributes (see core.models.requests), never as
concrete types.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import uuid4

from pydantic import ValidationError

from core.errors import BackofficeError, NotFoundError, ValidationFailed
from core.logging import ComponentType, get_logger, log_context
from core.ports import EntityStore
from core.validation import Validator, field_errors, is_blank

logger = get_logger(__name__, ComponentType.SERVICE)

M = TypeVar("M")


def request_payload(request: Any) -> Dict[str, Any]:
    """Best-effort dict of a request object, for error logs."""
    if hasattr(request, "model_dump"):
        return request.model_dump()
    if hasattr(request, "__dict__"):
        return dict(vars(request))
    return {"request": repr(request)}


class EntityService(Generic[M]):
    """Validated CRUD over one EntityStore."""

    entity_name: str = "entity"

    def __init__(self, store: EntityStore[M]):
        self.store = store

    # =========================================================================
    # HOOKS
    # =========================================================================

    def _validate_create(self, request: Any, v: Validator) -> None:
        v.require("name", getattr(request, "name", None))
        v.require("description", getattr(request, "description", None))

    def _build(self, entity_id: str, request: Any) -> M:
        raise NotImplementedError

    def _collect_updates(self, request: Any, v: Validator) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        self._set_if_present(changes, "name", getattr(request, "name", None))
        self._set_if_present(changes, "description", getattr(request, "description", None))
        return changes

    @staticmethod
    def _set_if_present(changes: Dict[str, Any], column: str, value: Any) -> None:
        if not is_blank(value):
            changes[column] = value

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    @contextmanager
    def _operation(self, operation: str, entity_id: Optional[str] = None, request: Any = None):
        """Run inside a log context; log domain failures with the payload."""
        with log_context(entity=self.entity_name, entity_id=entity_id, operation=operation):
            try:
                yield
            except BackofficeError as e:
                extra = {"error": type(e).__name__}
                if request is not None:
                    extra["request"] = request_payload(request)
                logger.error(f"{operation} {self.entity_name} failed: {e}", extra=extra)
                raise

    def _require_id(self, operation: str, entity_id: str) -> None:
        Validator(f"{operation} {self.entity_name}").not_empty("uuid", entity_id).raise_if_failed()

    async def create(self, request: Any) -> M:
        """Validate, assign a new uuid4 and store. Returns the created entity."""
        with self._operation("create", request=request):
            v = Validator(f"create {self.entity_name}")
            self._validate_create(request, v)
            v.raise_if_failed()

            try:
                entity = self._build(str(uuid4()), request)
            except ValidationError as e:
                raise ValidationFailed(field_errors(e), operation=f"create {self.entity_name}") from e
            await self.store.create(entity)
            logger.info(f"Created {self.entity_name} {entity.id}")
            return entity

    async def update(self, entity_id: str, request: Any) -> M:
        """Apply the non-empty fields of `request`. Returns the updated entity."""
        with self._operation("update", entity_id, request):
            v = Validator(f"update {self.entity_name}")
            v.not_empty("uuid", entity_id)
            changes = self._collect_updates(request, v)
            v.raise_if_failed()

            await self._before_update(entity_id, changes)
            if not await self.store.update(entity_id, changes):
                raise NotFoundError(self.entity_name, entity_id)
            logger.info(f"Updated {self.entity_name} {entity_id}", extra={"columns": sorted(changes)})
            return await self.get(entity_id)

    async def _before_update(self, entity_id: str, changes: Dict[str, Any]) -> None:
        """Hook for checks that need the store (e.g. category cycles)."""

    async def get(self, entity_id: str) -> M:
        with self._operation("find", entity_id):
            self._require_id("find", entity_id)
            entity = await self.store.get(entity_id)
            if entity is None:
                raise NotFoundError(self.entity_name, entity_id)
            return entity

    async def list_all(self) -> List[M]:
        with self._operation("list"):
            return await self.store.list_all()

    async def delete(self, entity_id: str) -> None:
        with self._operation("delete", entity_id):
            self._require_id("delete", entity_id)
            if not await self.store.delete(entity_id):
                raise NotFoundError(self.entity_name, entity_id)
            logger.info(f"Deleted {self.entity_name} {entity_id}")


__all__ = ["EntityService", "request_payload"]
