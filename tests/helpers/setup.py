"""Setup helpers for Gourmet Muse tests.

Example:
    result = await setup_integration(hass, mock_config_entry)
    state = await result.manager.async_complete_recipe("pad_thai")
    # Access: result.config_entry, result.coordinator, result.manager
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from custom_components.gourmet_muse import const
from custom_components.gourmet_muse.coordinator import GourmetMuseDataCoordinator
from custom_components.gourmet_muse.managers import ProgressionManager

# Patch target for controlling unlock timestamps in the manager
MANAGER_MODULE = "custom_components.gourmet_muse.managers.progression_manager"


@dataclass
class SetupResult:
    """Result from setup_integration.

    Attributes:
        config_entry: The loaded ConfigEntry
        coordinator: The GourmetMuseDataCoordinator instance
        manager: The ProgressionManager owned by the coordinator
    """

    config_entry: ConfigEntry
    coordinator: GourmetMuseDataCoordinator
    manager: ProgressionManager


async def setup_integration(hass: HomeAssistant, config_entry) -> SetupResult:
    """Add and load the config entry, returning the live objects."""
    config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(config_entry.entry_id)
    await hass.async_block_till_done()

    coordinator: GourmetMuseDataCoordinator = hass.data[const.DOMAIN][
        config_entry.entry_id
    ][const.COORDINATOR]
    return SetupResult(
        config_entry=config_entry,
        coordinator=coordinator,
        manager=coordinator.progression_manager,
    )


def write_stored_progress(hass_storage: dict[str, Any], data: Any) -> None:
    """Place a progress document in mocked storage before setup."""
    hass_storage[const.STORAGE_KEY] = {
        "version": const.STORAGE_VERSION,
        "minor_version": 1,
        "key": const.STORAGE_KEY,
        "data": data,
    }


def stored_progress(hass_storage: dict[str, Any]) -> dict[str, Any]:
    """Return the progress document currently in mocked storage."""
    return hass_storage[const.STORAGE_KEY]["data"]
