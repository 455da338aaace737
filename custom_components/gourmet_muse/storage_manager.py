# File: storage_manager.py
"""Handles persistent progress storage for the Gourmet Muse integration.

Uses Home Assistant's Storage helper to save and load the progression state,
ensuring it is preserved across restarts. The document holds the unlocked
badges (with definition snapshots), completed recipes, points, level and the
joined challenge under ``progress.*`` keys.

Writes are fire-and-forget for callers but strictly ordered: every save
request carries a monotonic version, a single drain task writes the newest
pending payload, and a payload whose version is not newer than the last
successful write is never written.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import voluptuous as vol
from homeassistant.helpers.storage import Store
from homeassistant.util import dt as dt_util
from homeassistant.util.file import WriteError
from homeassistant.util.json import SerializationError

from . import const
from .exceptions import PersistenceReadCorruptError, PersistenceWriteFailedError
from .models import BadgeDefinition, UnlockedBadge

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .catalog import Catalog
    from .models import ProgressState


UNLOCKED_BADGE_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_BADGE_ID): str,
        vol.Required(const.DATA_BADGE_UNLOCKED_AT): str,
        vol.Required(const.DATA_BADGE_DEFINITION): dict,
    },
    extra=vol.ALLOW_EXTRA,
)

PROGRESS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_UNLOCKED_BADGES, default=list): [
            UNLOCKED_BADGE_SCHEMA
        ],
        vol.Optional(const.DATA_COMPLETED_RECIPES, default=list): [str],
        vol.Optional(const.DATA_POINTS, default=0): vol.All(int, vol.Range(min=0)),
        vol.Optional(const.DATA_LEVEL, default=0): vol.All(int, vol.Range(min=0)),
        vol.Optional(const.DATA_ACTIVE_CHALLENGE, default=None): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


class ProgressDocumentStore(Store[dict[str, Any]]):
    """Store that remembers the error of its last write.

    Store.async_save() logs and swallows WriteError and SerializationError,
    so the failure is captured where the file is actually written.
    """

    def __init__(self, hass: HomeAssistant, version: int, key: str) -> None:
        """Initialize the store with no recorded write error."""
        super().__init__(hass, version, key)
        self.last_write_error: Exception | None = None

    async def _async_write_data(self, path: str, data: dict) -> None:
        try:
            await super()._async_write_data(path, data)
        except (SerializationError, WriteError) as err:
            self.last_write_error = err
            raise


@dataclass(frozen=True, slots=True)
class StoredProgress:
    """Decoded progress document, ready for ProgressStore.restore()."""

    completed: dict[str, str | None]
    unlocked: list[UnlockedBadge]
    points: int
    level: int
    active_challenge_id: str | None


class GourmetMuseStorageManager:
    """Manages loading and ordered saving of progress through Home Assistant's storage."""

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store = ProgressDocumentStore(hass, const.STORAGE_VERSION, storage_key)
        self._version = 0
        self._saved_version = 0
        self._pending: tuple[int, dict[str, Any]] | None = None
        self._writer: asyncio.Task | None = None

    def get_storage_path(self) -> str:
        """Get the storage file path.

        Returns:
            str: The absolute path to the storage file.
        """
        return self._store.path

    @property
    def saved_version(self) -> int:
        """Version stamp of the last payload written successfully."""
        return self._saved_version

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    @staticmethod
    def encode(state: ProgressState) -> dict[str, Any]:
        """Serialize a progress snapshot to the storage document layout."""
        return {
            const.DATA_UNLOCKED_BADGES: [
                {
                    const.DATA_BADGE_ID: unlocked.badge_id,
                    const.DATA_BADGE_UNLOCKED_AT: unlocked.unlocked_at.isoformat(),
                    const.DATA_BADGE_DEFINITION: unlocked.badge.as_dict(),
                }
                for unlocked in state.unlocked_badges.values()
            ],
            const.DATA_COMPLETED_RECIPES: sorted(state.completed_recipe_ids),
            const.DATA_POINTS: state.points,
            const.DATA_LEVEL: state.level,
            const.DATA_ACTIVE_CHALLENGE: state.active_challenge_id,
        }

    @staticmethod
    def decode(data: Any, catalog: Catalog) -> StoredProgress:
        """Validate and decode a storage document.

        Unlocked badges still in the catalog use the catalog definition; the
        stored snapshot is used for badges the catalog no longer has.

        Raises:
            PersistenceReadCorruptError: The document is malformed.
        """
        try:
            validated = PROGRESS_SCHEMA(data)
        except vol.Invalid as err:
            raise PersistenceReadCorruptError(
                f"Stored progress failed validation: {err}"
            ) from err

        unlocked: list[UnlockedBadge] = []
        for entry in validated[const.DATA_UNLOCKED_BADGES]:
            badge_id = entry[const.DATA_BADGE_ID]
            unlocked_at = dt_util.parse_datetime(entry[const.DATA_BADGE_UNLOCKED_AT])
            if unlocked_at is None:
                raise PersistenceReadCorruptError(
                    f"Badge '{badge_id}' has an invalid unlock timestamp"
                )
            if unlocked_at.tzinfo is None:
                unlocked_at = unlocked_at.replace(tzinfo=dt_util.UTC)

            badge = catalog.get_badge(badge_id)
            if badge is None:
                try:
                    badge = BadgeDefinition.from_dict(entry[const.DATA_BADGE_DEFINITION])
                except (KeyError, TypeError, ValueError) as err:
                    raise PersistenceReadCorruptError(
                        f"Badge '{badge_id}' has an invalid definition snapshot: {err}"
                    ) from err
                if badge.badge_id != badge_id:
                    raise PersistenceReadCorruptError(
                        f"Badge entry '{badge_id}' holds a snapshot of '{badge.badge_id}'"
                    )
            unlocked.append(UnlockedBadge(badge, unlocked_at))

        completed: dict[str, str | None] = {}
        for recipe_id in validated[const.DATA_COMPLETED_RECIPES]:
            recipe = catalog.get_recipe(recipe_id)
            completed[recipe_id] = recipe.cuisine if recipe else None

        return StoredProgress(
            completed=completed,
            unlocked=unlocked,
            points=validated[const.DATA_POINTS],
            level=validated[const.DATA_LEVEL] or const.MIN_LEVEL,
            active_challenge_id=validated[const.DATA_ACTIVE_CHALLENGE],
        )

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    async def async_load_progress(self, catalog: Catalog) -> StoredProgress | None:
        """Load stored progress.

        Returns:
            The decoded progress, or None when nothing usable is stored (no
            document yet, or a corrupt one) and the caller should seed.
        """
        const.LOGGER.debug("DEBUG: GourmetMuseStorageManager: Loading progress")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing progress found. Starting fresh")
            return None

        try:
            stored = self.decode(existing_data, catalog)
        except PersistenceReadCorruptError as err:
            const.LOGGER.warning(
                "WARNING: Stored progress in %s is corrupt, falling back to a "
                "fresh start: %s",
                self._storage_key,
                err,
            )
            return None

        const.LOGGER.debug(
            "DEBUG: Loaded progress: %s recipes, %s badges, %s points",
            len(stored.completed),
            len(stored.unlocked),
            stored.points,
        )
        return stored

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def async_request_save(self, data: dict[str, Any]) -> int:
        """Queue ``data`` for saving without waiting for the write.

        A newer request replaces an older one that has not been written yet.

        Returns:
            The version stamp assigned to this payload.
        """
        self._version += 1
        self._pending = (self._version, data)
        if self._writer is None or self._writer.done():
            self._writer = self.hass.async_create_task(
                self._async_drain(), f"{const.DOMAIN} progress save"
            )
        return self._version

    async def async_flush(self) -> None:
        """Wait until every queued payload has been handled."""
        while self._writer is not None and not self._writer.done():
            await self._writer

    async def _async_drain(self) -> None:
        """Write pending payloads, newest first, until none are left."""
        while self._pending is not None:
            version, data = self._pending
            self._pending = None
            await self._async_save_with_retry(version, data)

    async def _async_save_with_retry(self, version: int, data: dict[str, Any]) -> None:
        """Write one payload, retrying failures up to PERSIST_MAX_ATTEMPTS times."""
        for attempt in range(1, const.PERSIST_MAX_ATTEMPTS + 1):
            if self._pending is not None and self._pending[0] > version:
                const.LOGGER.debug(
                    "DEBUG: Progress version %s superseded by %s before writing",
                    version,
                    self._pending[0],
                )
                return
            try:
                await self._async_write(version, data)
            except PersistenceWriteFailedError as err:
                const.LOGGER.warning(
                    "WARNING: Progress save attempt %s/%s failed: %s",
                    attempt,
                    const.PERSIST_MAX_ATTEMPTS,
                    err.reason,
                )
                continue
            return

        const.LOGGER.error(
            "ERROR: Failed to save progress version %s after %s attempts. "
            "In-memory progress is kept and will be saved with the next change. "
            "Check disk space and file permissions for %s",
            version,
            const.PERSIST_MAX_ATTEMPTS,
            self._store.path,
        )

    async def _async_write(self, version: int, data: dict[str, Any]) -> None:
        """Single write attempt.

        Raises:
            PersistenceWriteFailedError: The file could not be written.
        """
        if version <= self._saved_version:
            const.LOGGER.debug(
                "DEBUG: Skipping stale progress version %s (saved: %s)",
                version,
                self._saved_version,
            )
            return
        self._store.last_write_error = None
        await self._store.async_save(data)
        if (err := self._store.last_write_error) is not None:
            raise PersistenceWriteFailedError(version, err) from err
        self._saved_version = version
        const.LOGGER.debug("DEBUG: Progress version %s saved to storage", version)

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        await self.async_flush()
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
