# File: sensor.py
"""Sensors for the Gourmet Muse integration.

- Points sensor: current points, with points to the next level
- Level sensor: current level, with the completed fraction of that level
- Badges sensor: unlocked badge count, with unlocked and locked badge ids
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import GourmetMuseDataCoordinator
from .entity import GourmetMuseEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for Gourmet Muse integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: GourmetMuseDataCoordinator = data[const.COORDINATOR]

    async_add_entities(
        [
            PointsSensor(coordinator, entry),
            LevelSensor(coordinator, entry),
            BadgesSensor(coordinator, entry),
        ]
    )


class GourmetMuseSensor(GourmetMuseEntity, SensorEntity):
    """Sensor reading from the progression snapshot."""

    _platform = Platform.SENSOR


class PointsSensor(GourmetMuseSensor):
    """Sensor for the user's total points."""

    _entity_key = const.SENSOR_KEY_POINTS
    _entity_label = "Points"
    _attr_icon = const.DEFAULT_POINTS_ICON
    _attr_state_class = SensorStateClass.TOTAL_INCREASING

    @property
    def native_value(self) -> int:
        """Return the current points."""
        return self.progress.points

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return points to the next level."""
        return {const.ATTR_POINTS_TO_NEXT_LEVEL: self.manager.points_to_next_level()}


class LevelSensor(GourmetMuseSensor):
    """Sensor for the user's level."""

    _entity_key = const.SENSOR_KEY_LEVEL
    _entity_label = "Level"
    _attr_icon = const.DEFAULT_LEVEL_ICON
    _attr_state_class = SensorStateClass.MEASUREMENT

    @property
    def native_value(self) -> int:
        return self.progress.level

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the completed fraction of the current level."""
        return {const.ATTR_LEVEL_PROGRESS: round(self.manager.level_progress(), 3)}


class BadgesSensor(GourmetMuseSensor):
    """Sensor for unlocked badges."""

    _entity_key = const.SENSOR_KEY_BADGES
    _entity_label = "Badges"
    _attr_icon = const.DEFAULT_BADGES_ICON

    @property
    def native_value(self) -> int:
        """Return how many badges are unlocked."""
        return len(self.progress.unlocked_badges)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return unlocked and locked badge ids."""
        return {
            const.ATTR_UNLOCKED_BADGES: list(self.progress.unlocked_badges),
            const.ATTR_LOCKED_BADGES: [
                badge.badge_id for badge in self.manager.locked_badges()
            ],
        }
