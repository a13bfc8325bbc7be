"""
Unit tests for WalkManager.

Covers the EMPTY/IN_PROGRESS transitions, snapshot/restore and best-effort
persistence.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from schema_walker.walk.exceptions import WalkDecodeError
from schema_walker.walk.manager import WalkManager, decode_walk
from schema_walker.walk.models import Step, Walk, WalkStatus
from schema_walker.walk.store import InMemoryWalkStore

# =============================================================================
# Transitions
# =============================================================================


class TestTransitions:
    """Tests for append/truncate/reset."""

    def test_starts_empty(self) -> None:
        manager = WalkManager()

        assert manager.status is WalkStatus.EMPTY
        assert manager.walk == Walk()

    def test_append_moves_to_in_progress(self, knows_step: Step) -> None:
        manager = WalkManager()

        manager.append(knows_step)

        assert manager.status is WalkStatus.IN_PROGRESS
        assert manager.walk.steps == (knows_step,)

    def test_truncate_keeps_earlier_steps(
        self, knows_step: Step, works_at_step: Step
    ) -> None:
        manager = WalkManager()
        manager.append(knows_step)
        manager.append(works_at_step)

        manager.truncate(1)

        assert manager.walk.steps == (knows_step,)

    def test_truncate_then_append(self, knows_step: Step, works_at_step: Step) -> None:
        manager = WalkManager()
        manager.append(knows_step)
        manager.append(knows_step)

        manager.truncate(1)
        manager.append(works_at_step)

        assert manager.walk.steps == (knows_step, works_at_step)

    def test_truncate_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            WalkManager().truncate(-2)

    def test_reset_empties_walk(self, knows_step: Step) -> None:
        manager = WalkManager()
        manager.append(knows_step)

        manager.reset()

        assert manager.status is WalkStatus.EMPTY


# =============================================================================
# Snapshot and restore
# =============================================================================


class TestSnapshotRestore:
    """Tests for serialization and restore."""

    def test_restore_snapshot_yields_equal_walk(self, two_step_walk: Walk) -> None:
        source = WalkManager()
        for step in two_step_walk.steps:
            source.append(step)

        target = WalkManager()
        assert target.restore(source.snapshot()) is True

        assert target.walk == source.walk

    def test_snapshot_has_no_side_effects(self, knows_step: Step) -> None:
        store = InMemoryWalkStore()
        manager = WalkManager(store=store)
        manager.append(knows_step)
        stored = store.get("walk")

        manager.snapshot()

        assert store.get("walk") == stored

    def test_invalid_snapshot_keeps_current_walk(self, knows_step: Step) -> None:
        manager = WalkManager()
        manager.append(knows_step)

        assert manager.restore("{not json") is False

        assert manager.walk.steps == (knows_step,)
        assert manager.last_warning is not None

    def test_wrong_shape_snapshot_keeps_current_walk(self) -> None:
        manager = WalkManager()

        assert manager.restore(json.dumps({"steps": [{"direction": "sideways"}]})) is False

        assert manager.status is WalkStatus.EMPTY
        assert manager.last_warning is not None

    def test_restore_reads_store_when_no_text_given(self, knows_step: Step) -> None:
        store = InMemoryWalkStore()
        first = WalkManager(store=store)
        first.append(knows_step)

        second = WalkManager(store=store)

        assert second.restore() is True
        assert second.walk.steps == (knows_step,)

    def test_restore_from_empty_store_is_noop(self) -> None:
        manager = WalkManager()

        assert manager.restore() is False
        assert manager.last_warning is None

    def test_restore_survives_store_read_failure(self) -> None:
        store = MagicMock()
        store.get.side_effect = OSError("disk gone")
        manager = WalkManager(store=store)

        assert manager.restore() is False
        assert "disk gone" in (manager.last_warning or "")

    def test_successful_restore_clears_warning(self, knows_step: Step) -> None:
        manager = WalkManager()
        manager.restore("garbage")

        manager.restore(Walk(steps=(knows_step,)).model_dump_json())

        assert manager.last_warning is None


class TestPersistence:
    def test_every_mutation_is_persisted(self, knows_step: Step) -> None:
        store = InMemoryWalkStore()
        manager = WalkManager(store=store, key="my-walk")

        manager.append(knows_step)
        assert decode_walk(store.get("my-walk") or "") == manager.walk

        manager.truncate(0)
        assert decode_walk(store.get("my-walk") or "") == Walk()

    def test_store_write_failure_is_ignored(self, knows_step: Step) -> None:
        store = MagicMock()
        store.set.side_effect = OSError("read-only")
        manager = WalkManager(store=store)

        manager.append(knows_step)

        assert manager.walk.steps == (knows_step,)


class TestDecodeWalk:
    def test_invalid_text_raises_walk_decode_error(self) -> None:
        with pytest.raises(WalkDecodeError):
            decode_walk("[]")
