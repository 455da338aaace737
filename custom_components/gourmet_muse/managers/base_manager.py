"""Base manager class for Gourmet Muse managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import GourmetMuseDataCoordinator


class BaseManager(ABC):
    """Base class for all Gourmet Muse managers with scoped event support.

    Provides:
    - Instance-scoped event firing on the Home Assistant bus (emit)
    - Typed access to the owning coordinator

    Subclasses must implement:
    - async_setup(): Load state, initialize derived data
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: GourmetMuseDataCoordinator
    ) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator managing this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def emit(self, event_type: str, **payload: Any) -> None:
        """Fire an instance-scoped event for automations.

        Args:
            event_type: Event type constant (e.g., const.EVENT_BADGE_UNLOCKED)
            **payload: Event data (must be JSON-serializable); the config
                entry id is added as ``entry_id``

        Example:
            self.emit(
                const.EVENT_BADGE_UNLOCKED,
                badge_id="first_steps",
                points_awarded=10,
            )
        """
        const.LOGGER.debug(
            "Firing event '%s' for instance %s with payload keys: %s",
            event_type,
            self.entry_id,
            list(payload.keys()),
        )
        self.hass.bus.async_fire(event_type, {"entry_id": self.entry_id, **payload})

    @abstractmethod
    async def async_setup(self) -> None:
        """Set up the manager (load state, initialize derived data).

        Called once during integration setup, before the first refresh.
        """
