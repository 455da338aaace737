"""Tests for ProgressStore, the in-memory owner of progression state.

Tests cover:
- Idempotent recipe completion and badge unlocks
- Incremental distinct cuisine counting
- Guards against lowering points or level
- Snapshot immutability
- Reset and restore
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from custom_components.gourmet_muse.models import UnlockedBadge
from custom_components.gourmet_muse.progress_store import ProgressStore
from tests.helpers import make_badge, make_recipe

T0 = datetime(2025, 10, 1, 12, 0, tzinfo=UTC)
T1 = datetime(2025, 10, 2, 12, 0, tzinfo=UTC)


@pytest.fixture
def store() -> ProgressStore:
    """Return a store reset with a seed badge."""
    progress = ProgressStore()
    progress.reset(make_badge("seed", points=5), T0)
    return progress


class TestRecipes:
    """Tests for completing recipes."""

    def test_mark_recipe_completed_once(self, store: ProgressStore) -> None:
        """A recipe is recorded once; repeats report no change."""
        recipe = make_recipe("r1")

        assert store.mark_recipe_completed(recipe) is True
        assert store.mark_recipe_completed(recipe) is False
        assert store.snapshot().completed_recipe_ids == frozenset({"r1"})
        assert store.is_completed("r1")

    def test_distinct_cuisines_counted_incrementally(
        self, store: ProgressStore
    ) -> None:
        """Repeated cuisines add no distinct cuisine."""
        store.mark_recipe_completed(make_recipe("r1", "Thai"))
        store.mark_recipe_completed(make_recipe("r2", "Thai"))
        store.mark_recipe_completed(make_recipe("r3", "Italian"))

        assert store.snapshot().distinct_cuisine_count == 2


class TestBadges:
    """Tests for unlocking badges."""

    def test_add_unlocked_badge_keeps_first_timestamp(
        self, store: ProgressStore
    ) -> None:
        """A second unlock of one badge keeps the original entry."""
        badge = make_badge("b")

        assert store.add_unlocked_badge(badge, T0) is True
        assert store.add_unlocked_badge(badge, T1) is False
        assert store.snapshot().unlocked_badges["b"].unlocked_at == T0
        assert store.is_unlocked("b")


class TestPointsAndLevel:
    """Tests for point and level guards."""

    def test_add_points(self, store: ProgressStore) -> None:
        """Points accumulate."""
        store.add_points(10)
        store.add_points(0)
        store.add_points(15)

        assert store.snapshot().points == 25

    def test_negative_points_rejected(self, store: ProgressStore) -> None:
        """Points can never be taken away."""
        store.add_points(10)

        with pytest.raises(ValueError):
            store.add_points(-1)
        assert store.snapshot().points == 10

    def test_set_level_never_lowers(self, store: ProgressStore) -> None:
        """Lower levels are ignored."""
        store.set_level(4)
        store.set_level(2)

        assert store.snapshot().level == 4

    def test_set_level_below_minimum_rejected(self, store: ProgressStore) -> None:
        """Levels start at 1."""
        with pytest.raises(ValueError):
            store.set_level(0)


class TestSnapshots:
    """Tests for snapshot behavior."""

    def test_snapshot_is_stable(self, store: ProgressStore) -> None:
        """Later mutations do not leak into an earlier snapshot."""
        before = store.snapshot()

        store.mark_recipe_completed(make_recipe("r1"))
        store.add_unlocked_badge(make_badge("b"), T1)
        store.add_points(10)

        assert before.completed_recipe_ids == frozenset()
        assert list(before.unlocked_badges) == ["seed"]
        assert before.points == 0
        assert store.snapshot().points == 10

    def test_snapshot_mapping_is_read_only(self, store: ProgressStore) -> None:
        """Snapshots expose a read-only badge mapping."""
        with pytest.raises(TypeError):
            store.snapshot().unlocked_badges["x"] = None  # type: ignore[index]

    def test_snapshot_cached_until_change(self, store: ProgressStore) -> None:
        """Reads without mutation return the same snapshot."""
        assert store.snapshot() is store.snapshot()


class TestResetAndRestore:
    """Tests for reset() and restore()."""

    def test_reset_returns_to_seed_state(self, store: ProgressStore) -> None:
        """Reset clears everything except the seed badge."""
        store.mark_recipe_completed(make_recipe("r1"))
        store.add_unlocked_badge(make_badge("b"), T0)
        store.add_points(500)
        store.set_level(6)
        store.set_active_challenge("c")

        store.reset(make_badge("seed", points=5), T1)
        state = store.snapshot()

        assert state.completed_recipe_ids == frozenset()
        assert list(state.unlocked_badges) == ["seed"]
        assert state.unlocked_badges["seed"].unlocked_at == T1
        assert state.points == 0
        assert state.level == 1
        assert state.active_challenge_id is None
        assert state.distinct_cuisine_count == 0

    def test_restore(self) -> None:
        """Restore rebuilds cuisines and drops duplicate badge entries."""
        badge = make_badge("b")
        progress = ProgressStore()

        progress.restore(
            completed={"r1": "Thai", "r2": "Italian", "gone": None},
            unlocked=[UnlockedBadge(badge, T0), UnlockedBadge(badge, T1)],
            points=-5,
            level=0,
            active_challenge_id="c",
        )
        state = progress.snapshot()

        assert state.completed_recipe_ids == frozenset({"r1", "r2", "gone"})
        assert state.distinct_cuisine_count == 2
        assert state.unlocked_badges["b"].unlocked_at == T0
        assert len(state.unlocked_badges) == 1
        assert state.points == 0
        assert state.level == 1
        assert state.active_challenge_id == "c"
