"""Tests for ProgressionEngine - pure progression logic.

These tests verify the engine's stateless functions without any Home
Assistant dependencies, following the pure function testing pattern.

Tests cover:
- Rule evaluation per rule type and evaluation order
- Rule handler registry
- Level derivation and level progress
- Challenge progress, completion and date window math
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import ClassVar

from freezegun import freeze_time
import pytest

from custom_components.gourmet_muse.catalog import Catalog
from custom_components.gourmet_muse.engines.progression_engine import (
    ProgressionEngine,
)
from custom_components.gourmet_muse.models import (
    ChallengeCompletion,
    CountThreshold,
    DistinctCuisineThreshold,
    ManualFlag,
    UnlockRule,
)
from tests.helpers import SEED_ID, make_badge, make_challenge, make_state

# ============================================================================
# Rule Evaluation
# ============================================================================


class TestRuleEvaluation:
    """Tests for is_rule_satisfied and evaluate_new_badges."""

    def test_count_threshold(self, small_catalog: Catalog) -> None:
        """Count threshold compares against completed recipe count."""
        rule = CountThreshold(2)

        assert not ProgressionEngine.is_rule_satisfied(
            rule, make_state(completed={"r1"}), small_catalog
        )
        assert ProgressionEngine.is_rule_satisfied(
            rule, make_state(completed={"r1", "r2"}), small_catalog
        )

    def test_distinct_cuisine_threshold(self, small_catalog: Catalog) -> None:
        """Cuisine threshold compares against distinct cuisine count."""
        rule = DistinctCuisineThreshold(5)

        assert not ProgressionEngine.is_rule_satisfied(
            rule, make_state(distinct_cuisines=4), small_catalog
        )
        assert ProgressionEngine.is_rule_satisfied(
            rule, make_state(distinct_cuisines=5), small_catalog
        )

    def test_challenge_completion(self, small_catalog: Catalog) -> None:
        """Challenge rule needs every challenge recipe completed."""
        rule = ChallengeCompletion("duo_challenge")

        assert not ProgressionEngine.is_rule_satisfied(
            rule, make_state(completed={"r1"}), small_catalog
        )
        assert ProgressionEngine.is_rule_satisfied(
            rule, make_state(completed={"r1", "r2"}), small_catalog
        )

    def test_challenge_completion_unknown_challenge(
        self, small_catalog: Catalog
    ) -> None:
        """A rule naming a missing challenge is never satisfied."""
        assert not ProgressionEngine.is_rule_satisfied(
            ChallengeCompletion("ghost"),
            make_state(completed={"r1", "r2"}),
            small_catalog,
        )

    def test_manual_flag_never_satisfied(self, small_catalog: Catalog) -> None:
        """Manual badges are only unlocked by force unlock."""
        state = make_state(
            completed={"r1", "r2", "r3"}, points=10_000, distinct_cuisines=3
        )
        assert not ProgressionEngine.is_rule_satisfied(
            ManualFlag(), state, small_catalog
        )

    def test_unregistered_rule_raises(self, small_catalog: Catalog) -> None:
        """Rules without a handler are reported, not silently skipped."""

        @dataclass(frozen=True, slots=True)
        class Unhandled(UnlockRule):
            rule_type: ClassVar[str] = "unhandled"

        with pytest.raises(TypeError):
            ProgressionEngine.is_rule_satisfied(
                Unhandled(), make_state(), small_catalog
            )

    def test_evaluate_new_badges_in_catalog_order(
        self, small_catalog: Catalog
    ) -> None:
        """Simultaneous unlocks come back in definition order."""
        state = make_state(
            completed={"r1", "r2", "r3", "r4", "r5"}, distinct_cuisines=5
        )

        badges = ProgressionEngine.evaluate_new_badges(state, small_catalog)

        assert [b.badge_id for b in badges] == ["first_steps", "explorer", "duo"]

    def test_evaluate_new_badges_skips_unlocked(self, small_catalog: Catalog) -> None:
        """Already unlocked badges are not returned again."""
        state = make_state(
            completed={"r1"},
            unlocked=[small_catalog.get_badge("first_steps")],
        )

        assert ProgressionEngine.evaluate_new_badges(state, small_catalog) == []

    def test_evaluate_new_badges_never_returns_seed(self) -> None:
        """The seed badge is never awarded through evaluation."""
        catalog = Catalog(
            [],
            [make_badge(SEED_ID, CountThreshold(0))],
            seed_badge_id=SEED_ID,
        )
        assert ProgressionEngine.evaluate_new_badges(make_state(), catalog) == []

    def test_register_rule_handler(self, small_catalog: Catalog) -> None:
        """Extra rule types can be plugged in."""

        @dataclass(frozen=True, slots=True)
        class PointsThreshold(UnlockRule):
            rule_type: ClassVar[str] = "points_threshold"
            threshold: int = 0

        ProgressionEngine.register_rule_handler(
            PointsThreshold,
            lambda rule, state, catalog: state.points >= rule.threshold,
        )
        try:
            assert ProgressionEngine.is_rule_satisfied(
                PointsThreshold(100), make_state(points=150), small_catalog
            )
        finally:
            ProgressionEngine._RULE_HANDLERS.pop(PointsThreshold)


# ============================================================================
# Levels
# ============================================================================


class TestLevels:
    """Tests for level derivation."""

    @pytest.mark.parametrize(
        ("points", "level"),
        [(0, 1), (20, 1), (99, 1), (100, 2), (199, 2), (500, 6), (1234, 13)],
    )
    def test_level_for_points(self, points: int, level: int) -> None:
        """Level is points // 100 + 1."""
        assert ProgressionEngine.level_for_points(points) == level

    def test_next_level_never_lowers(self) -> None:
        """A higher current level is kept."""
        assert ProgressionEngine.next_level(5, 120) == 5
        assert ProgressionEngine.next_level(1, 320) == 4

    def test_points_to_next_level(self) -> None:
        """Remaining points to the next level boundary."""
        assert ProgressionEngine.points_to_next_level(1, 20) == 80
        assert ProgressionEngine.points_to_next_level(2, 100) == 100
        # Level kept above what points justify
        assert ProgressionEngine.points_to_next_level(5, 900) == 0

    def test_level_progress(self) -> None:
        """Fraction of the current level, clamped to [0, 1]."""
        assert ProgressionEngine.level_progress(1, 20) == pytest.approx(0.2)
        assert ProgressionEngine.level_progress(2, 150) == pytest.approx(0.5)
        assert ProgressionEngine.level_progress(5, 120) == 0.0
        assert ProgressionEngine.level_progress(1, 900) == 1.0


# ============================================================================
# Challenges
# ============================================================================


class TestChallenges:
    """Tests for challenge progress and date windows."""

    def test_challenge_progress(self) -> None:
        """Progress is the completed share of challenge recipes."""
        challenge = make_challenge("c", ("r1", "r2"))

        assert ProgressionEngine.challenge_progress(challenge, frozenset()) == 0.0
        assert ProgressionEngine.challenge_progress(
            challenge, frozenset({"r1", "r9"})
        ) == pytest.approx(0.5)
        assert ProgressionEngine.challenge_progress(
            challenge, frozenset({"r1", "r2"})
        ) == pytest.approx(1.0)

    def test_completed_challenge(self) -> None:
        """Completion requires every recipe."""
        challenge = make_challenge("c", ("r1", "r2"))

        assert not ProgressionEngine.is_challenge_completed(
            challenge, frozenset({"r1"})
        )
        assert ProgressionEngine.is_challenge_completed(
            challenge, frozenset({"r1", "r2"})
        )

    def test_empty_challenge(self) -> None:
        """No recipes: progress 0.0 but vacuously completed."""
        challenge = make_challenge("c", ())

        assert ProgressionEngine.challenge_progress(challenge, frozenset()) == 0.0
        assert ProgressionEngine.is_challenge_completed(challenge, frozenset())

    @pytest.mark.parametrize(
        ("now", "days"),
        [
            (datetime(2025, 9, 20, tzinfo=UTC), 41),
            (datetime(2025, 10, 1, tzinfo=UTC), 30),
            (datetime(2025, 10, 21, 18, 0, tzinfo=UTC), 10),
            (datetime(2025, 10, 31, tzinfo=UTC), 0),
            (datetime(2025, 11, 15, tzinfo=UTC), 0),
        ],
    )
    def test_days_remaining(self, now: datetime, days: int) -> None:
        """Whole days until the end date, never negative."""
        challenge = make_challenge("c", ("r1",))
        assert ProgressionEngine.challenge_days_remaining(challenge, now) == days

    @freeze_time("2025-10-16 09:00:00")
    def test_days_remaining_defaults_to_now(self) -> None:
        """Without an explicit time, the current UTC date is used."""
        challenge = make_challenge("c", ("r1",))
        assert ProgressionEngine.challenge_days_remaining(challenge) == 15

    @pytest.mark.parametrize(
        ("now", "fraction"),
        [
            (datetime(2025, 9, 1, tzinfo=UTC), 0.0),
            (datetime(2025, 10, 1, tzinfo=UTC), 0.0),
            (datetime(2025, 10, 16, tzinfo=UTC), 0.5),
            (datetime(2025, 10, 31, tzinfo=UTC), 1.0),
            (datetime(2026, 1, 1, tzinfo=UTC), 1.0),
        ],
    )
    def test_time_progress(self, now: datetime, fraction: float) -> None:
        """Elapsed share of the window, clamped to [0, 1]."""
        challenge = make_challenge("c", ("r1",))
        assert ProgressionEngine.challenge_time_progress(
            challenge, now
        ) == pytest.approx(fraction)

    def test_time_progress_single_day_window(self) -> None:
        """A one-day window is either not started or fully elapsed."""
        challenge = make_challenge(
            "c", ("r1",), start=date(2025, 10, 5), end=date(2025, 10, 5)
        )

        assert ProgressionEngine.challenge_time_progress(
            challenge, datetime(2025, 10, 4, tzinfo=UTC)
        ) == 0.0
        assert ProgressionEngine.challenge_time_progress(
            challenge, datetime(2025, 10, 5, tzinfo=UTC)
        ) == 1.0
