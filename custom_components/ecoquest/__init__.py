# File: __init__.py
"""Initialization file for the EcoQuest integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization and one-time onboarding of the player profile.
- Storage management for persistent game state.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import EcoQuestCoordinator
from .services import async_setup_services, async_unload_services
from .store import EcoQuestStore
from .utils.dt_utils import set_default_timezone


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for EcoQuest entry: %s", entry.entry_id)

    # Streak and weekly boundaries follow the configured time zone
    if tz := dt_util.get_time_zone(hass.config.time_zone):
        set_default_timezone(tz)

    store = EcoQuestStore(hass, const.STORAGE_KEY)
    coordinator = EcoQuestCoordinator(hass, entry, store)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    # Onboarding answers from the config flow are applied once
    if not coordinator.player.get(const.DATA_PLAYER_ONBOARDING_COMPLETE):
        coordinator.apply_preferences({**entry.data, **entry.options})

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORE: store,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    const.LOGGER.info("INFO: EcoQuest setup complete for entry: %s", entry.entry_id)
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Push options flow changes into the player profile."""
    coordinator: EcoQuestCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    coordinator.apply_preferences(dict(entry.options))


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading EcoQuest entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)
        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing EcoQuest entry: %s", entry.entry_id)

    await EcoQuestStore(hass, const.STORAGE_KEY).async_clear()

    const.LOGGER.info("INFO: EcoQuest game data cleared: %s", entry.entry_id)
