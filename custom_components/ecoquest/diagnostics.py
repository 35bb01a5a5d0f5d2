"""Diagnostics support for EcoQuest integration.

Returns the game state in its storage format, so it can be compared with the
ecoquest_game_state file directly, plus the analytics export.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import EcoQuestCoordinator
from .store import EcoQuestStore


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: EcoQuestCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    now = dt_util.utcnow()

    return {
        "entry": {
            "data": dict(entry.data),
            "options": dict(entry.options),
        },
        "game_state": EcoQuestStore.serialize(coordinator.game_state, now),
        "export": coordinator.build_export(now),
    }
