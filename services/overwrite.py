# ============================================================================
# OVERWRITE ENGINE
# ============================================================================
# STATUS: Domain service - Replace every association of one parent
# PURPOSE: Make a parent's persisted associations equal a desired set
# CREATED: 19 OCT 2026
# ============================================================================
"""
Overwrite Engine

Given a parent id and the complete desired set of children, make the
persisted association rows for that parent match it exactly:

    1. fetch    every current association of the parent
    2. delete   each of them by its own association id
    3. create   one new row (fresh uuid4 id) per desired child

Rows present in both the old and new sets are still deleted and
recreated, so association ids change on every overwrite. The observable
postcondition is what matters: afterwards find_by_parent_id returns
exactly the desired (child, position) pairs. Calling overwrite twice
with the same input yields the same pairs.

Desired sets:
    positioned relations   Mapping[child_id, position]
    unordered relations    Iterable[child_id], duplicates collapse
                           (first occurrence wins)

Child ids are not checked against the child table. A dangling child is
reported later, when something joins the association to its child.

Modes (OverwriteDefaults.atomic):

    atomic=True   steps 1-3 run inside store.locked(parent_id): one
                  transaction holding a per-parent lock. Concurrent
                  overwrites of the same parent run one after the other.
                  Any failure rolls back; OverwriteError.rolled_back=True.

    atomic=False  steps run as independent store calls with no lock.
                  A failure leaves a partial association set behind;
                  OverwriteError names the failing step and lists the
                  association ids already deleted / created.

Usage:
    engine = OverwriteEngine(wall_block_store)
    result = await engine.overwrite("W1", {"B2": 0, "B3": 1})
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from uuid import uuid4

from pydantic import ValidationError

from core.contracts import OverwriteStep, Relation
from core.errors import OverwriteError, PersistenceError
from core.logging import ComponentType, get_logger, log_context
from core.models.associations import Association
from core.ports import AssociationStore, AssociationWriter
from core.validation import Validator, field_errors

logger = get_logger(__name__, ComponentType.ENGINE)

DesiredSet = Union[Mapping[str, int], Iterable[str]]


@dataclass(frozen=True)
class OverwriteResult:
    """Outcome of a completed overwrite."""
    relation: Relation
    parent_id: str
    deleted: List[str] = field(default_factory=list)
    created: List[Association] = field(default_factory=list)

    @property
    def children(self) -> Dict[str, Optional[int]]:
        """child_id -> position (None for unordered relations)."""
        return {a.child_id: a.get_position() for a in self.created}


@dataclass
class _Progress:
    step: OverwriteStep = OverwriteStep.VALIDATE
    deleted: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)


class OverwriteEngine:
    """Replaces the full association set of one parent."""

    def __init__(
        self,
        store: AssociationStore,
        atomic: bool = True,
        lock_timeout_ms: Optional[int] = None,
    ):
        self.store = store
        self.relation: Relation = store.model.__relation__
        self.model = store.model
        self.atomic = atomic
        self.lock_timeout_ms = lock_timeout_ms

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def normalize(self, parent_id: str, desired: Any) -> List[Tuple[str, Optional[int]]]:
        """
        Validate the request and flatten it to (child_id, position) pairs.

        Every problem is reported at once in a single ValidationFailed.
        """
        parent_field = f"{self.relation.parent_entity}_id"
        children_field = f"{self.relation.child_entity}s"

        v = Validator(f"overwrite {self.relation.value}")
        v.not_empty(parent_field, parent_id)
        v.identifier(parent_field, parent_id)

        entries: List[Tuple[str, Optional[int]]] = []

        if self.relation.is_positioned():
            if not isinstance(desired, Mapping):
                v.add(children_field, "must map each id to a position")
            else:
                for child_id, position in desired.items():
                    v.not_empty(f"{children_field}[]", child_id)
                    v.identifier(f"{children_field}[]", child_id)
                    v.integer(f"{children_field}[{child_id}]", position)
                    entries.append((child_id, position))
        else:
            if desired is None or isinstance(desired, (str, bytes, Mapping)):
                v.add(children_field, "must be a list of ids")
            else:
                seen = set()
                for child_id in desired:
                    v.not_empty(f"{children_field}[]", child_id)
                    v.identifier(f"{children_field}[]", child_id)
                    if not isinstance(child_id, str) or child_id in seen:
                        continue
                    seen.add(child_id)
                    entries.append((child_id, None))

        v.raise_if_failed()
        return entries

    def plan(self, parent_id: str, entries: List[Tuple[str, Optional[int]]]) -> List[Association]:
        """
        Build every new association row before the store is touched, so the
        create step never meets a row the model would reject.
        """
        planned = []
        errors = []
        for child_id, position in entries:
            try:
                planned.append(self.model.build(str(uuid4()), parent_id, child_id, position))
            except ValidationError as e:
                errors.extend(field_errors(e, prefix=f"{self.relation.child_entity}s[{child_id}]."))
        Validator(f"overwrite {self.relation.value}").extend(errors).raise_if_failed()
        return planned

    # =========================================================================
    # OVERWRITE
    # =========================================================================

    async def overwrite(self, parent_id: str, desired: DesiredSet) -> OverwriteResult:
        """
        Replace every association of parent_id with `desired`.

        Raises:
            ValidationFailed: empty or over-long id, non-integer position;
                raised before any store call
            LockNotAcquired: atomic mode, per-parent lock not granted in time
            OverwriteError: a store call failed; see .step and .rolled_back
        """
        with log_context(relation=self.relation.value, parent_id=parent_id, operation="overwrite"):
            planned = self.plan(parent_id, self.normalize(parent_id, desired))

            if self.atomic:
                result = await self._overwrite_atomic(parent_id, planned)
            else:
                result = await self._overwrite_sequential(parent_id, planned)

            logger.info(
                f"Overwrote {self.relation.value} of {parent_id}",
                extra={"deleted": len(result.deleted), "created": len(result.created)},
            )
            return result

    async def _overwrite_atomic(
        self, parent_id: str, planned: List[Association]
    ) -> OverwriteResult:
        progress = _Progress(step=OverwriteStep.LOCK)
        created: List[Association] = []
        try:
            async with self.store.locked(parent_id, self.lock_timeout_ms) as tx:
                await self._apply(tx, parent_id, planned, progress, created)
                progress.step = OverwriteStep.COMMIT
        except PersistenceError as e:
            raise self._failure(parent_id, progress, e, rolled_back=True) from e

        return OverwriteResult(self.relation, parent_id, progress.deleted, created)

    async def _overwrite_sequential(
        self, parent_id: str, planned: List[Association]
    ) -> OverwriteResult:
        progress = _Progress()
        created: List[Association] = []
        try:
            await self._apply(self.store, parent_id, planned, progress, created)
        except PersistenceError as e:
            raise self._failure(parent_id, progress, e, rolled_back=False) from e
        except asyncio.CancelledError:
            # Already-applied deletes/creates stay in place
            logger.warning(
                f"Overwrite of {parent_id} cancelled during {progress.step.value}",
                extra={"deleted": progress.deleted, "created": progress.created},
            )
            raise

        return OverwriteResult(self.relation, parent_id, progress.deleted, created)

    async def _apply(
        self,
        store: AssociationWriter,
        parent_id: str,
        planned: List[Association],
        progress: _Progress,
        created: List[Association],
    ) -> None:
        progress.step = OverwriteStep.FETCH
        current = await store.find_by_parent_id(parent_id)

        progress.step = OverwriteStep.DELETE
        for row in current:
            await store.delete(row.id)
            progress.deleted.append(row.id)

        progress.step = OverwriteStep.CREATE
        for assoc in planned:
            await store.create(assoc)
            progress.created.append(assoc.id)
            created.append(assoc)

    def _failure(
        self,
        parent_id: str,
        progress: _Progress,
        cause: PersistenceError,
        rolled_back: bool,
    ) -> OverwriteError:
        error = OverwriteError(
            relation=self.relation.value,
            parent_id=parent_id,
            step=progress.step,
            deleted=progress.deleted,
            created=progress.created,
            rolled_back=rolled_back,
            detail=str(cause),
        )
        logger.error(
            str(error),
            extra={
                "step": progress.step.value,
                "deleted": progress.deleted,
                "created": progress.created,
                "rolled_back": rolled_back,
            },
        )
        return error


__all__ = ["OverwriteEngine", "OverwriteResult", "DesiredSet"]
