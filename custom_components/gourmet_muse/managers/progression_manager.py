"""Progression Manager - Stateful orchestration of the progression engine.

Owns the user's ProgressStore and is the only writer to it. Every mutating
operation runs under a single asyncio.Lock, so callers always observe a
whole operation or none of it. After each mutation the manager:
1. Recomputes the level (never lowering it)
2. Requests a non-blocking, ordered save through the storage manager
3. Fires a badge-unlocked event per newly unlocked badge
4. Pushes the new snapshot to the coordinator's entities

Pure computation (rule evaluation, level math, challenge progress) is
delegated to ProgressionEngine.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING

from homeassistant.util import dt as dt_util

from .. import const
from ..engines.progression_engine import ProgressionEngine
from ..exceptions import UnknownBadgeError, UnknownChallengeError, UnknownRecipeError
from ..progress_store import ProgressStore
from ..storage_manager import GourmetMuseStorageManager
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import GourmetMuseDataCoordinator
    from ..models import (
        BadgeCategory,
        BadgeDefinition,
        Challenge,
        ProgressState,
        UnlockedBadge,
    )


class ProgressionManager(BaseManager):
    """Orchestrates recipe completion, badge unlocks, levels and challenges."""

    def __init__(
        self, hass: HomeAssistant, coordinator: GourmetMuseDataCoordinator
    ) -> None:
        """Initialize ProgressionManager with dependencies.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator holding the catalog and storage manager
        """
        super().__init__(hass, coordinator)
        self._catalog = coordinator.catalog
        self._storage: GourmetMuseStorageManager = coordinator.storage_manager
        self._store = ProgressStore()
        self._lock = asyncio.Lock()

    async def async_setup(self) -> None:
        """Load persisted progress, seeding a fresh state when none is usable."""
        stored = await self._storage.async_load_progress(self._catalog)
        async with self._lock:
            if stored is None:
                self._store.reset(self._catalog.seed_badge, dt_util.utcnow())
                self._persist(self._store.snapshot())
                const.LOGGER.info(
                    "INFO: Seeded progress with badge '%s'",
                    self._catalog.seed_badge.badge_id,
                )
                return

            self._store.restore(
                completed=stored.completed,
                unlocked=stored.unlocked,
                points=stored.points,
                level=stored.level,
                active_challenge_id=stored.active_challenge_id,
            )
            self._store.set_level(ProgressionEngine.level_for_points(stored.points))
            seed_badge = self._catalog.seed_badge
            if self._store.add_unlocked_badge(seed_badge, dt_util.utcnow()):
                const.LOGGER.warning(
                    "WARNING: Stored progress was missing seed badge '%s', re-added",
                    seed_badge.badge_id,
                )
                self._persist(self._store.snapshot())
            if (
                stored.active_challenge_id is not None
                and self._catalog.get_challenge(stored.active_challenge_id) is None
            ):
                const.LOGGER.warning(
                    "WARNING: Joined challenge '%s' is no longer in the catalog",
                    stored.active_challenge_id,
                )

    # =========================================================================
    # READS
    # =========================================================================

    @property
    def state(self) -> ProgressState:
        """Return the current progress snapshot."""
        return self._store.snapshot()

    def points_to_next_level(self) -> int:
        """Return the points still needed for the next level."""
        state = self._store.snapshot()
        return ProgressionEngine.points_to_next_level(state.level, state.points)

    def level_progress(self) -> float:
        """Return the completed fraction of the current level."""
        state = self._store.snapshot()
        return ProgressionEngine.level_progress(state.level, state.points)

    def unlocked_badges(self) -> list[UnlockedBadge]:
        """Return unlocked badges in unlock order."""
        return list(self._store.snapshot().unlocked_badges.values())

    def locked_badges(self) -> list[BadgeDefinition]:
        """Return catalog badges not yet unlocked, in catalog order."""
        unlocked = self._store.snapshot().unlocked_badges
        return [
            badge
            for badge in self._catalog.list_badge_definitions()
            if badge.badge_id not in unlocked
        ]

    def badges_by_category(self, category: BadgeCategory) -> list[BadgeDefinition]:
        """Return catalog badges of one category, in catalog order."""
        return [
            badge
            for badge in self._catalog.list_badge_definitions()
            if badge.category == category
        ]

    def active_challenges(self) -> list[Challenge]:
        """Return catalog challenges flagged active."""
        return [c for c in self._catalog.list_challenges() if c.is_active]

    def get_challenge_progress(self, challenge_id: str) -> float:
        """Return the completed fraction of a challenge's recipes (0.0 if empty).

        Raises:
            UnknownChallengeError: The id is not in the catalog.
        """
        challenge = self._get_challenge(challenge_id)
        return ProgressionEngine.challenge_progress(
            challenge, self._store.snapshot().completed_recipe_ids
        )

    def is_challenge_completed(self, challenge_id: str) -> bool:
        """Return True if every recipe of the challenge is completed.

        Raises:
            UnknownChallengeError: The id is not in the catalog.
        """
        challenge = self._get_challenge(challenge_id)
        return ProgressionEngine.is_challenge_completed(
            challenge, self._store.snapshot().completed_recipe_ids
        )

    def challenge_days_remaining(self, challenge_id: str) -> int:
        """Return whole days left in a challenge's date window."""
        return ProgressionEngine.challenge_days_remaining(
            self._get_challenge(challenge_id), dt_util.utcnow()
        )

    def challenge_time_progress(self, challenge_id: str) -> float:
        """Return the elapsed fraction of a challenge's date window."""
        return ProgressionEngine.challenge_time_progress(
            self._get_challenge(challenge_id), dt_util.utcnow()
        )

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    async def async_complete_recipe(self, recipe_id: str) -> ProgressState:
        """Complete a recipe, award points and unlock newly earned badges.

        Completing an already completed recipe returns the current state
        unchanged: no points, no evaluation, no save.

        Raises:
            UnknownRecipeError: The id is not in the catalog.
        """
        recipe = self._catalog.get_recipe(recipe_id)
        if recipe is None:
            const.LOGGER.warning(
                "WARNING: Complete Recipe: unknown recipe '%s'", recipe_id
            )
            raise UnknownRecipeError(recipe_id)

        async with self._lock:
            if not self._store.mark_recipe_completed(recipe):
                const.LOGGER.debug(
                    "DEBUG: Recipe '%s' already completed, nothing to do", recipe_id
                )
                return self._store.snapshot()

            self._store.add_points(const.BASE_RECIPE_POINTS)
            now = dt_util.utcnow()
            unlocked = [
                badge
                for badge in ProgressionEngine.evaluate_new_badges(
                    self._store.snapshot(), self._catalog
                )
                if self._award_badge(badge, now)
            ]
            const.LOGGER.info(
                "INFO: Recipe '%s' completed (%s badges unlocked)",
                recipe_id,
                len(unlocked),
            )
            return self._commit(unlocked, now)

    async def async_force_unlock(self, badge_id: str) -> ProgressState:
        """Unlock a badge from an external trigger (e.g. sharing, seasonal events).

        No-op if the badge is already unlocked.

        Raises:
            UnknownBadgeError: The id is not in the catalog.
        """
        badge = self._catalog.get_badge(badge_id)
        if badge is None:
            const.LOGGER.warning("WARNING: Unlock Badge: unknown badge '%s'", badge_id)
            raise UnknownBadgeError(badge_id)

        async with self._lock:
            now = dt_util.utcnow()
            if not self._award_badge(badge, now):
                const.LOGGER.debug("DEBUG: Badge '%s' already unlocked", badge_id)
                return self._store.snapshot()
            return self._commit([badge], now)

    async def async_join_challenge(self, challenge_id: str) -> ProgressState:
        """Join a challenge, replacing any previously joined one.

        Raises:
            UnknownChallengeError: The id is not in the catalog.
        """
        self._get_challenge(challenge_id)
        async with self._lock:
            if self._store.snapshot().active_challenge_id == challenge_id:
                return self._store.snapshot()
            self._store.set_active_challenge(challenge_id)
            const.LOGGER.info("INFO: Joined challenge '%s'", challenge_id)
            return self._commit([], dt_util.utcnow())

    async def async_leave_challenge(self) -> ProgressState:
        """Leave the joined challenge, if any."""
        async with self._lock:
            active = self._store.snapshot().active_challenge_id
            if active is None:
                return self._store.snapshot()
            self._store.set_active_challenge(None)
            const.LOGGER.info("INFO: Left challenge '%s'", active)
            return self._commit([], dt_util.utcnow())

    async def async_reset(self) -> ProgressState:
        """Clear all progress and re-seed the initial state."""
        async with self._lock:
            self._store.reset(self._catalog.seed_badge, dt_util.utcnow())
            const.LOGGER.warning("WARNING: Progress reset to the initial state")
            return self._commit([], dt_util.utcnow())

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _get_challenge(self, challenge_id: str) -> Challenge:
        challenge = self._catalog.get_challenge(challenge_id)
        if challenge is None:
            const.LOGGER.warning("WARNING: Unknown challenge '%s'", challenge_id)
            raise UnknownChallengeError(challenge_id)
        return challenge

    def _award_badge(self, badge: BadgeDefinition, now: datetime) -> bool:
        """Unlock a badge and grant its points; False if already unlocked."""
        if not self._store.add_unlocked_badge(badge, now):
            return False
        self._store.add_points(badge.award_points)
        const.LOGGER.info(
            "INFO: Badge '%s' unlocked (%s, +%s points)",
            badge.name,
            badge.rarity.value,
            badge.award_points,
        )
        return True

    def _commit(
        self, unlocked: list[BadgeDefinition], now: datetime
    ) -> ProgressState:
        """Finish a mutation: level, save, events, entity update."""
        state = self._store.snapshot()
        self._store.set_level(ProgressionEngine.next_level(state.level, state.points))
        state = self._store.snapshot()

        self._persist(state)
        for badge in unlocked:
            self.emit(
                const.EVENT_BADGE_UNLOCKED,
                badge_id=badge.badge_id,
                name=badge.name,
                rarity=badge.rarity.value,
                points_awarded=badge.award_points,
                unlocked_at=now.isoformat(),
            )
        self.coordinator.async_set_updated_data(state)
        return state

    def _persist(self, state: ProgressState) -> None:
        """Queue the snapshot for saving without waiting for the write."""
        self._storage.async_request_save(GourmetMuseStorageManager.encode(state))
