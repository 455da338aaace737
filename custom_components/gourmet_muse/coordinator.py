# File: coordinator.py
"""Coordinator for the Gourmet Muse integration.

The coordinator is the composition root of one integration instance: it owns
the catalog, the storage manager and the progression manager, and fans out
every new progress snapshot to entities. Progress only changes through the
manager, which pushes snapshots with async_set_updated_data(), so there is no
polling interval.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from . import const
from .catalog import Catalog
from .managers import ProgressionManager
from .models import ProgressState
from .storage_manager import GourmetMuseStorageManager


class GourmetMuseDataCoordinator(DataUpdateCoordinator[ProgressState]):
    """Coordinator for Gourmet Muse progression data."""

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: GourmetMuseStorageManager,
        catalog: Catalog,
    ) -> None:
        """Initialize the GourmetMuseDataCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.config_entry = config_entry
        self.storage_manager = storage_manager
        self.catalog = catalog
        self.progression_manager = ProgressionManager(hass, self)

    async def _async_update_data(self) -> ProgressState:
        """Return the current progress snapshot."""
        return self.progression_manager.state
