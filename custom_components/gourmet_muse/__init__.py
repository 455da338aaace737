# File: __init__.py
"""Initialization file for the Gourmet Muse integration.

Handles setting up the integration, including loading configuration entries,
initializing progress storage, and preparing the coordinator that owns the
progression engine.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization as the composition root of one instance.
- Storage management for persistent progress handling.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .catalog import build_default_catalog
from .coordinator import GourmetMuseDataCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import GourmetMuseStorageManager


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Gourmet Muse entry: %s", entry.entry_id)

    # Initialize the storage manager to handle persistent progress.
    storage_manager = GourmetMuseStorageManager(hass, const.STORAGE_KEY)

    # Create the coordinator; it builds the progression manager.
    coordinator = GourmetMuseDataCoordinator(
        hass, entry, storage_manager, build_default_catalog()
    )

    # Load (or seed) progress before the first refresh publishes it.
    await coordinator.progression_manager.async_setup()
    await coordinator.async_config_entry_first_refresh()

    # Store the coordinator and storage manager in hass.data.
    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    # Set up services required by the integration.
    async_setup_services(hass)

    # Forward the setup to supported platforms.
    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    const.LOGGER.info("INFO: Gourmet Muse setup complete for entry: %s", entry.entry_id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Gourmet Muse entry: %s", entry.entry_id)

    # Unload platforms
    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)

        # Make sure the last progress change reaches disk.
        storage_manager: GourmetMuseStorageManager = entry_data[const.STORAGE_MANAGER]
        await storage_manager.async_flush()

        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing Gourmet Muse entry: %s", entry.entry_id)

    storage_manager = GourmetMuseStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: Gourmet Muse entry data cleared: %s", entry.entry_id)
