"""Progression Engine - Pure logic for badge rules, levels and challenges.

This engine provides stateless, pure Python functions for:
- Rule evaluation (which locked badges qualify for unlock right now)
- Level derivation and level progress from points
- Challenge progress and completion checks
- Challenge date window math (days remaining, elapsed fraction)

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State management and persistence belong in ProgressionManager.

Rule Types:
- CountThreshold: completed recipe count
- DistinctCuisineThreshold: distinct cuisines among completed recipes
- ChallengeCompletion: every recipe of a challenge completed
- ManualFlag: never satisfied here (force unlock only)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .. import const
from ..models import (
    ChallengeCompletion,
    CountThreshold,
    DistinctCuisineThreshold,
    ManualFlag,
    UnlockRule,
)

if TYPE_CHECKING:
    from ..catalog import Catalog
    from ..models import BadgeDefinition, Challenge, ProgressState


# Handler signature: (rule, state, catalog) -> satisfied
RuleHandler = Callable[[UnlockRule, "ProgressState", "Catalog"], bool]


class ProgressionEngine:
    """Pure logic engine for progression evaluation.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.

    PURITY CONTRACT:
    - All data comes via parameters (snapshot + catalog)
    - No side effects, no storage access, no state mutation
    - The manager applies the results (unlocks, points, persistence)
    """

    # Maps rule class to handler function
    _RULE_HANDLERS: dict[type[UnlockRule], RuleHandler] = {}

    @classmethod
    def _register_handlers(cls) -> None:
        """Register all rule handlers (once)."""
        if cls._RULE_HANDLERS:
            return

        cls._RULE_HANDLERS = {
            CountThreshold: cls._evaluate_count_threshold,
            DistinctCuisineThreshold: cls._evaluate_distinct_cuisines,
            ChallengeCompletion: cls._evaluate_challenge_completion,
            ManualFlag: cls._evaluate_manual_flag,
        }

    @classmethod
    def register_rule_handler(
        cls, rule_cls: type[UnlockRule], handler: RuleHandler
    ) -> None:
        """Register a handler for an additional rule type."""
        cls._register_handlers()
        cls._RULE_HANDLERS[rule_cls] = handler

    # =========================================================================
    # RULE EVALUATION
    # =========================================================================

    @classmethod
    def is_rule_satisfied(
        cls, rule: UnlockRule, state: ProgressState, catalog: Catalog
    ) -> bool:
        """Return True if ``rule`` holds for ``state``.

        Raises:
            TypeError: No handler is registered for the rule's type.
        """
        cls._register_handlers()
        handler = cls._RULE_HANDLERS.get(type(rule))
        if handler is None:
            raise TypeError(f"No handler registered for rule {type(rule).__name__}")
        return handler(rule, state, catalog)

    @classmethod
    def evaluate_new_badges(
        cls, state: ProgressState, catalog: Catalog
    ) -> list[BadgeDefinition]:
        """Return badges whose rule holds and that are not yet unlocked.

        Badges are returned in catalog definition order so simultaneous
        unlocks are deterministic. The seed badge is never returned.
        """
        seed_badge_id = catalog.seed_badge.badge_id
        eligible = [
            badge
            for badge in catalog.list_badge_definitions()
            if badge.badge_id != seed_badge_id
            and badge.badge_id not in state.unlocked_badges
            and cls.is_rule_satisfied(badge.rule, state, catalog)
        ]
        if eligible:
            const.LOGGER.debug(
                "DEBUG: Rule evaluation found %s newly eligible badges: %s",
                len(eligible),
                [badge.badge_id for badge in eligible],
            )
        return eligible

    @staticmethod
    def _evaluate_count_threshold(
        rule: UnlockRule, state: ProgressState, catalog: Catalog
    ) -> bool:
        assert isinstance(rule, CountThreshold)
        return len(state.completed_recipe_ids) >= rule.threshold

    @staticmethod
    def _evaluate_distinct_cuisines(
        rule: UnlockRule, state: ProgressState, catalog: Catalog
    ) -> bool:
        assert isinstance(rule, DistinctCuisineThreshold)
        return state.distinct_cuisine_count >= rule.threshold

    @classmethod
    def _evaluate_challenge_completion(
        cls, rule: UnlockRule, state: ProgressState, catalog: Catalog
    ) -> bool:
        assert isinstance(rule, ChallengeCompletion)
        challenge = catalog.get_challenge(rule.challenge_id)
        if challenge is None:
            return False
        return cls.is_challenge_completed(challenge, state.completed_recipe_ids)

    @staticmethod
    def _evaluate_manual_flag(
        rule: UnlockRule, state: ProgressState, catalog: Catalog
    ) -> bool:
        return False

    # =========================================================================
    # LEVELS
    # =========================================================================

    @staticmethod
    def level_for_points(points: int) -> int:
        """Derive the level from points: 100 points per level, starting at 1."""
        return max(const.MIN_LEVEL, points // const.POINTS_PER_LEVEL + 1)

    @classmethod
    def next_level(cls, current_level: int, points: int) -> int:
        """Return the recomputed level, never below ``current_level``."""
        return max(current_level, cls.level_for_points(points))

    @staticmethod
    def points_for_level(level: int) -> int:
        """Return the points at which ``level`` starts."""
        return (level - 1) * const.POINTS_PER_LEVEL

    @classmethod
    def points_to_next_level(cls, level: int, points: int) -> int:
        """Return the points still needed to reach ``level + 1``."""
        return max(0, cls.points_for_level(level + 1) - points)

    @classmethod
    def level_progress(cls, level: int, points: int) -> float:
        """Return the fraction of the current level completed, in [0, 1]."""
        floor = cls.points_for_level(level)
        span = cls.points_for_level(level + 1) - floor
        return min(1.0, max(0.0, (points - floor) / span))

    # =========================================================================
    # CHALLENGES
    # =========================================================================

    @staticmethod
    def challenge_progress(
        challenge: Challenge, completed_recipe_ids: frozenset[str]
    ) -> float:
        """Return the fraction of challenge recipes completed.

        A challenge without recipes has progress 0.0.
        """
        if not challenge.recipe_ids:
            return 0.0
        done = sum(1 for rid in challenge.recipe_ids if rid in completed_recipe_ids)
        return done / len(challenge.recipe_ids)

    @staticmethod
    def is_challenge_completed(
        challenge: Challenge, completed_recipe_ids: frozenset[str]
    ) -> bool:
        """Return True if every challenge recipe is completed (vacuously for none)."""
        return all(rid in completed_recipe_ids for rid in challenge.recipe_ids)

    @staticmethod
    def challenge_days_remaining(
        challenge: Challenge, now: datetime | None = None
    ) -> int:
        """Return whole days until the challenge ends, 0 once it is over."""
        today = (now or datetime.now(UTC)).date()
        return max(0, (challenge.end_date - today).days)

    @staticmethod
    def challenge_time_progress(
        challenge: Challenge, now: datetime | None = None
    ) -> float:
        """Return the elapsed fraction of the challenge window, in [0, 1]."""
        today = (now or datetime.now(UTC)).date()
        total = (challenge.end_date - challenge.start_date).days
        elapsed = (today - challenge.start_date).days
        if total <= 0:
            return 1.0 if elapsed >= 0 else 0.0
        return min(1.0, max(0.0, elapsed / total))
