"""Base entity classes for EcoQuest integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import EcoQuestCoordinator


class EcoQuestCoordinatorEntity(CoordinatorEntity[EcoQuestCoordinator]):
    """Base entity class for EcoQuest sensors with typed coordinator access.

    All entities of an entry hang off one service device named after the
    entry, so a game reset (new player id) keeps entity ids stable.
    """

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: EcoQuestCoordinator, entry: ConfigEntry, key: str
    ) -> None:
        """Initialize the entity."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{key}"
        self._attr_translation_key = key
        self._attr_device_info = DeviceInfo(
            identifiers={(const.DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer=const.ECOQUEST_TITLE,
            model="Progression",
            entry_type=DeviceEntryType.SERVICE,
        )

    @property
    def coordinator(self) -> EcoQuestCoordinator:
        """Return typed coordinator.

        Uses object.__getattribute__ to access the private _coordinator attribute
        set by the parent CoordinatorEntity class.
        """
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: EcoQuestCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
