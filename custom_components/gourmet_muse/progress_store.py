"""In-memory owner of the user's progression state.

ProgressStore holds the only mutable copy of the progression and exposes the
mutation primitives the ProgressionManager composes. None of them lower
points, lower the level or remove an unlocked badge; only reset() does.

The distinct cuisine count is kept as a per-cuisine counter updated on every
newly completed recipe, so rule evaluation never rescans the completed set.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from types import MappingProxyType

from . import const
from .models import BadgeDefinition, ProgressState, RecipeRef, UnlockedBadge


class ProgressStore:
    """Mutable progression state with snapshot reads."""

    def __init__(self) -> None:
        """Initialize an empty store (no seed badge until reset/restore)."""
        self._completed: set[str] = set()
        self._cuisine_counts: Counter[str] = Counter()
        self._unlocked: dict[str, UnlockedBadge] = {}
        self._points = 0
        self._level = const.MIN_LEVEL
        self._active_challenge_id: str | None = None
        self._snapshot: ProgressState | None = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self) -> ProgressState:
        """Return an immutable, internally consistent view of the state."""
        if self._snapshot is None:
            self._snapshot = ProgressState(
                completed_recipe_ids=frozenset(self._completed),
                unlocked_badges=MappingProxyType(dict(self._unlocked)),
                points=self._points,
                level=self._level,
                active_challenge_id=self._active_challenge_id,
                distinct_cuisine_count=len(self._cuisine_counts),
            )
        return self._snapshot

    def is_completed(self, recipe_id: str) -> bool:
        """Return True if the recipe is already completed."""
        return recipe_id in self._completed

    def is_unlocked(self, badge_id: str) -> bool:
        """Return True if the badge is already unlocked."""
        return badge_id in self._unlocked

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def mark_recipe_completed(self, recipe: RecipeRef) -> bool:
        """Record a completed recipe.

        Returns:
            False if the recipe was already completed (nothing changes).
        """
        if recipe.recipe_id in self._completed:
            return False
        self._completed.add(recipe.recipe_id)
        self._cuisine_counts[recipe.cuisine] += 1
        self._snapshot = None
        return True

    def add_unlocked_badge(self, badge: BadgeDefinition, timestamp: datetime) -> bool:
        """Unlock a badge at ``timestamp``.

        Returns:
            False if the badge was already unlocked; the existing entry is kept.
        """
        if badge.badge_id in self._unlocked:
            return False
        self._unlocked[badge.badge_id] = UnlockedBadge(badge, timestamp)
        self._snapshot = None
        return True

    def add_points(self, amount: int) -> None:
        """Add points.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValueError(f"Cannot add negative points: {amount}")
        if amount:
            self._points += amount
            self._snapshot = None

    def set_level(self, level: int) -> None:
        """Raise the level to ``level``; lower values leave it unchanged.

        Raises:
            ValueError: If ``level`` is below the minimum level.
        """
        if level < const.MIN_LEVEL:
            raise ValueError(f"Level must be >= {const.MIN_LEVEL}: {level}")
        if level > self._level:
            self._level = level
            self._snapshot = None

    def set_active_challenge(self, challenge_id: str | None) -> None:
        """Set or clear the joined challenge."""
        if challenge_id != self._active_challenge_id:
            self._active_challenge_id = challenge_id
            self._snapshot = None

    def reset(self, seed_badge: BadgeDefinition, timestamp: datetime) -> None:
        """Return to the initial state with only the seed badge unlocked."""
        self._completed.clear()
        self._cuisine_counts.clear()
        self._unlocked = {seed_badge.badge_id: UnlockedBadge(seed_badge, timestamp)}
        self._points = 0
        self._level = const.MIN_LEVEL
        self._active_challenge_id = None
        self._snapshot = None

    def restore(
        self,
        completed: dict[str, str | None],
        unlocked: list[UnlockedBadge],
        points: int,
        level: int,
        active_challenge_id: str | None,
    ) -> None:
        """Replace the state with previously persisted values.

        Args:
            completed: Completed recipe id -> cuisine, or None when the recipe
                no longer resolves (it still counts, but adds no cuisine).
            unlocked: Unlocked badges in unlock order; later duplicates are dropped.
            points: Stored points.
            level: Stored level.
            active_challenge_id: Stored joined challenge.
        """
        self._completed = set(completed)
        self._cuisine_counts = Counter(
            cuisine for cuisine in completed.values() if cuisine is not None
        )
        self._unlocked = {}
        for entry in unlocked:
            self._unlocked.setdefault(entry.badge_id, entry)
        self._points = max(0, points)
        self._level = max(const.MIN_LEVEL, level)
        self._active_challenge_id = active_challenge_id
        self._snapshot = None
