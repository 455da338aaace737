"""Base entity for Gourmet Muse progression entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import GourmetMuseDataCoordinator

if TYPE_CHECKING:
    from .managers import ProgressionManager
    from .models import ProgressState


class GourmetMuseEntity(CoordinatorEntity[GourmetMuseDataCoordinator]):
    """Entity bound to one progression, identified by a per-entry key.

    Subclasses set ``_entity_key`` and ``_entity_label``; the unique id, name
    and entity id are derived from them.
    """

    _attr_has_entity_name = False
    _platform: str = ""
    _entity_key: str = ""
    _entity_label: str = ""

    def __init__(
        self, coordinator: GourmetMuseDataCoordinator, entry: ConfigEntry
    ) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{self._entity_key}"
        self._attr_name = f"{const.GOURMET_MUSE_TITLE} {self._entity_label}"
        self.entity_id = f"{self._platform}.{const.DOMAIN}_{self._entity_key}"

    @property
    def progress(self) -> ProgressState:
        """Latest progress snapshot pushed by the manager."""
        return self.coordinator.data

    @property
    def manager(self) -> ProgressionManager:
        return self.coordinator.progression_manager
