# ============================================================================
# OVERWRITE ENGINE TESTS
# ============================================================================
# STATUS: Tests - Replace-all semantics of association overwrites
# PURPOSE: Verify idempotence, completeness, rollback and serialization
# CREATED: 19 OCT 2026
# ============================================================================
"""
Overwrite Engine Tests

Drives OverwriteEngine against the in-memory association store. Failure
injection wraps the store so a chosen call raises PersistenceError.

Run with:
    pytest tests/test_overwrite_engine.py -v
"""

import asyncio
from contextlib import asynccontextmanager

import pytest

from core.contracts import OverwriteStep
from core.errors import LockNotAcquired, OverwriteError, PersistenceError, ValidationFailed
from core.models.associations import ProgramTag, WallBlock
from repositories.memory import MemoryAssociationStore
from services.overwrite import OverwriteEngine


# ============================================================================
# FIXTURES
# ============================================================================

def _pairs(rows):
    return sorted((r.child_id, r.get_position()) for r in rows)


class _FailingWriter:
    """Delegates to a writer, raising on the Nth create or delete."""

    def __init__(self, inner, fail_on, after=0):
        self.inner = inner
        self.fail_on = fail_on
        self.after = after
        self.calls = 0
        self.model = inner.model

    async def find_by_parent_id(self, parent_id):
        return await self.inner.find_by_parent_id(parent_id)

    async def _maybe_fail(self, op, key):
        if op == self.fail_on:
            self.calls += 1
            if self.calls > self.after:
                raise PersistenceError(f"{op}ing", "wall_block", key, detail="injected")

    async def create(self, assoc):
        await self._maybe_fail("create", assoc.id)
        return await self.inner.create(assoc)

    async def delete(self, assoc_id):
        await self._maybe_fail("delete", assoc_id)
        return await self.inner.delete(assoc_id)


class _FailingStore(_FailingWriter):
    """Memory store whose locked() view fails the same way."""

    @asynccontextmanager
    async def locked(self, parent_id, timeout_ms=None):
        async with self.inner.locked(parent_id, timeout_ms) as view:
            yield _FailingWriter(view, self.fail_on, self.after)


def _seed(store, parent_id, pairs):
    engine = OverwriteEngine(store)
    asyncio.run(engine.overwrite(parent_id, pairs))


# ============================================================================
# POSITIONED RELATIONS
# ============================================================================

class TestPositionedOverwrite:

    def test_replaces_previous_set(self):
        store = MemoryAssociationStore(WallBlock)
        engine = OverwriteEngine(store)

        asyncio.run(engine.overwrite("W1", {"B1": 0, "B2": 1}))
        asyncio.run(engine.overwrite("W1", {"B2": 0, "B3": 1}))

        rows = asyncio.run(store.find_by_parent_id("W1"))
        assert _pairs(rows) == [("B2", 0), ("B3", 1)]

    def test_completeness(self):
        store = MemoryAssociationStore(WallBlock)
        desired = {"B1": 3, "B2": 1, "B3": 2}

        result = asyncio.run(OverwriteEngine(store).overwrite("W1", desired))

        rows = asyncio.run(store.find_by_parent_id("W1"))
        assert len(rows) == len(desired)
        assert dict(_pairs(rows)) == desired
        assert result.children == desired

    def test_idempotent_pairs_new_ids(self):
        store = MemoryAssociationStore(WallBlock)
        engine = OverwriteEngine(store)
        desired = {"B1": 0, "B2": 1}

        first = asyncio.run(engine.overwrite("W1", desired))
        second = asyncio.run(engine.overwrite("W1", desired))

        rows = asyncio.run(store.find_by_parent_id("W1"))
        assert dict(_pairs(rows)) == desired
        assert {a.id for a in first.created}.isdisjoint({a.id for a in second.created})
        assert sorted(second.deleted) == sorted(a.id for a in first.created)

    def test_empty_set_clears(self):
        store = MemoryAssociationStore(WallBlock)
        _seed(store, "W1", {"B1": 0})

        result = asyncio.run(OverwriteEngine(store).overwrite("W1", {}))

        assert asyncio.run(store.find_by_parent_id("W1")) == []
        assert len(result.deleted) == 1
        assert result.created == []

    def test_other_parents_untouched(self):
        store = MemoryAssociationStore(WallBlock)
        _seed(store, "W2", {"B1": 0})

        asyncio.run(OverwriteEngine(store).overwrite("W1", {"B9": 0}))

        assert _pairs(asyncio.run(store.find_by_parent_id("W2"))) == [("B1", 0)]

    def test_duplicate_positions_allowed(self):
        store = MemoryAssociationStore(WallBlock)
        asyncio.run(OverwriteEngine(store).overwrite("W1", {"B1": 0, "B2": 0}))
        assert _pairs(asyncio.run(store.find_by_parent_id("W1"))) == [("B1", 0), ("B2", 0)]


# ============================================================================
# UNORDERED RELATIONS
# ============================================================================

class TestUnorderedOverwrite:

    def test_set_membership(self):
        store = MemoryAssociationStore(ProgramTag)
        asyncio.run(OverwriteEngine(store).overwrite("P1", ["T1", "T2"]))

        rows = asyncio.run(store.find_by_parent_id("P1"))
        assert _pairs(rows) == [("T1", None), ("T2", None)]

    def test_duplicates_collapse(self):
        store = MemoryAssociationStore(ProgramTag)
        result = asyncio.run(OverwriteEngine(store).overwrite("P1", ["T1", "T2", "T1"]))

        assert [a.child_id for a in result.created] == ["T1", "T2"]
        assert len(asyncio.run(store.find_by_parent_id("P1"))) == 2


# ============================================================================
# VALIDATION
# ============================================================================

class TestOverwriteValidation:

    def test_empty_parent_rejected(self):
        engine = OverwriteEngine(MemoryAssociationStore(WallBlock))
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(engine.overwrite("", {"B1": 0}))
        assert exc_info.value.fields == ["wall_id"]

    def test_all_problems_reported_together(self):
        engine = OverwriteEngine(MemoryAssociationStore(WallBlock))
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(engine.overwrite("", {"": 0, "B2": "first", "B3": True}))
        assert exc_info.value.fields == ["wall_id", "blocks[]", "blocks[B2]", "blocks[B3]"]

    def test_positioned_requires_mapping(self):
        engine = OverwriteEngine(MemoryAssociationStore(WallBlock))
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(engine.overwrite("W1", ["B1"]))
        assert exc_info.value.fields == ["blocks"]

    def test_unordered_rejects_string(self):
        engine = OverwriteEngine(MemoryAssociationStore(ProgramTag))
        with pytest.raises(ValidationFailed):
            asyncio.run(engine.overwrite("P1", "T1"))

    def test_validation_failure_writes_nothing(self):
        store = MemoryAssociationStore(WallBlock)
        _seed(store, "W1", {"B1": 0})

        with pytest.raises(ValidationFailed):
            asyncio.run(OverwriteEngine(store).overwrite("W1", {"B2": "x"}))

        assert _pairs(asyncio.run(store.find_by_parent_id("W1"))) == [("B1", 0)]

    @pytest.mark.parametrize("atomic", [True, False])
    def test_over_long_child_rejected_before_any_write(self, atomic):
        store = MemoryAssociationStore(WallBlock)
        _seed(store, "W1", {"B1": 0})
        long_id = "B" * 40

        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(OverwriteEngine(store, atomic=atomic).overwrite("W1", {"B2": 1, long_id: 0}))

        assert exc_info.value.fields == ["blocks[]"]
        assert _pairs(asyncio.run(store.find_by_parent_id("W1"))) == [("B1", 0)]

    def test_over_long_parent_rejected(self):
        engine = OverwriteEngine(MemoryAssociationStore(ProgramTag), atomic=False)
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(engine.overwrite("P" * 37, ["T1"]))
        assert exc_info.value.fields == ["program_id"]

    def test_unordered_over_long_child_rejected(self):
        store = MemoryAssociationStore(ProgramTag)
        _seed(store, "P1", ["T1"])

        with pytest.raises(ValidationFailed):
            asyncio.run(OverwriteEngine(store, atomic=False).overwrite("P1", ["T2", "T" * 40]))

        assert _pairs(asyncio.run(store.find_by_parent_id("P1"))) == [("T1", None)]

    def test_position_out_of_integer_range(self):
        engine = OverwriteEngine(MemoryAssociationStore(WallBlock))
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(engine.overwrite("W1", {"B1": 2**31}))
        assert exc_info.value.fields == ["blocks[B1]"]

    def test_plan_builds_rows_with_fresh_ids(self):
        engine = OverwriteEngine(MemoryAssociationStore(WallBlock))
        planned = engine.plan("W1", [("B1", 0), ("B2", 1)])
        assert [(a.parent_id, a.child_id, a.get_position()) for a in planned] == [
            ("W1", "B1", 0), ("W1", "B2", 1),
        ]
        assert len({a.id for a in planned}) == 2


# ============================================================================
# FAILURES
# ============================================================================

class TestAtomicFailure:

    def test_create_failure_rolls_back(self):
        inner = MemoryAssociationStore(WallBlock)
        _seed(inner, "W1", {"B1": 0, "B2": 1})
        store = _FailingStore(inner, fail_on="create", after=1)

        with pytest.raises(OverwriteError) as exc_info:
            asyncio.run(OverwriteEngine(store).overwrite("W1", {"B3": 0, "B4": 1}))

        err = exc_info.value
        assert err.rolled_back is True
        assert err.step is OverwriteStep.CREATE
        assert len(err.deleted) == 2
        assert len(err.created) == 1
        assert _pairs(asyncio.run(inner.find_by_parent_id("W1"))) == [("B1", 0), ("B2", 1)]

    def test_delete_failure_rolls_back(self):
        inner = MemoryAssociationStore(WallBlock)
        _seed(inner, "W1", {"B1": 0, "B2": 1})
        store = _FailingStore(inner, fail_on="delete", after=1)

        with pytest.raises(OverwriteError) as exc_info:
            asyncio.run(OverwriteEngine(store).overwrite("W1", {}))

        assert exc_info.value.step is OverwriteStep.DELETE
        assert len(asyncio.run(inner.find_by_parent_id("W1"))) == 2


class TestSequentialFailure:

    def test_partial_state_reported(self):
        inner = MemoryAssociationStore(WallBlock)
        _seed(inner, "W1", {"B1": 0, "B2": 1})
        store = _FailingStore(inner, fail_on="create", after=1)

        with pytest.raises(OverwriteError) as exc_info:
            asyncio.run(OverwriteEngine(store, atomic=False).overwrite("W1", {"B3": 0, "B4": 1}))

        err = exc_info.value
        assert err.rolled_back is False
        assert err.step is OverwriteStep.CREATE
        assert len(err.deleted) == 2
        assert len(err.created) == 1
        # Old rows are gone and only the first new one exists
        assert _pairs(asyncio.run(inner.find_by_parent_id("W1"))) == [("B3", 0)]

    def test_sequential_success(self):
        store = MemoryAssociationStore(WallBlock)
        engine = OverwriteEngine(store, atomic=False)
        asyncio.run(engine.overwrite("W1", {"B1": 0}))
        asyncio.run(engine.overwrite("W1", {"B2": 5}))
        assert _pairs(asyncio.run(store.find_by_parent_id("W1"))) == [("B2", 5)]


# ============================================================================
# CONCURRENCY
# ============================================================================

class _SlowStore(MemoryAssociationStore):
    """Yields to the event loop on every create so overwrites interleave."""

    async def create(self, assoc):
        await asyncio.sleep(0)
        return await super().create(assoc)

    async def delete(self, assoc_id):
        await asyncio.sleep(0)
        return await super().delete(assoc_id)


class TestConcurrency:

    def test_same_parent_overwrites_serialize(self):
        store = _SlowStore(WallBlock)
        engine = OverwriteEngine(store)
        a = {"B1": 0, "B2": 1, "B3": 2}
        b = {"B4": 0, "B5": 1}

        async def run():
            await asyncio.gather(engine.overwrite("W1", a), engine.overwrite("W1", b))
            return await store.find_by_parent_id("W1")

        final = dict(_pairs(asyncio.run(run())))
        assert final in (a, b)

    def test_lock_timeout(self):
        store = MemoryAssociationStore(WallBlock)
        engine = OverwriteEngine(store, lock_timeout_ms=10)

        async def run():
            async with store.locked("W1"):
                await engine.overwrite("W1", {"B1": 0})

        with pytest.raises(LockNotAcquired):
            asyncio.run(run())

    def test_cancellation_rolls_back(self):
        store = _SlowStore(WallBlock)
        _seed(store, "W1", {"B1": 0, "B2": 1})
        engine = OverwriteEngine(store)

        async def run():
            task = asyncio.ensure_future(engine.overwrite("W1", {"B3": 0, "B4": 1, "B5": 2}))
            for _ in range(3):
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return await store.find_by_parent_id("W1")

        assert _pairs(asyncio.run(run())) == [("B1", 0), ("B2", 1)]
