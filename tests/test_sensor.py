"""Tests for EcoQuest sensors and diagnostics."""

from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoquest import const
from custom_components.ecoquest.diagnostics import (
    async_get_config_entry_diagnostics,
)
from tests.conftest import create_quest, get_coordinator


def _entity_id(hass: HomeAssistant, entry: MockConfigEntry, key: str) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, f"{entry.entry_id}_{key}"
    )
    assert entity_id is not None
    return entity_id


async def test_sensors_created(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Seven sensors report a fresh game."""
    expected = {
        const.SENSOR_KEY_TOTAL_XP: "0",
        const.SENSOR_KEY_LEVEL: "1",
        const.SENSOR_KEY_STREAK: "0",
        const.SENSOR_KEY_CHALLENGES_COMPLETED: "0",
        const.SENSOR_KEY_CO2_SAVED: "0",
        const.SENSOR_KEY_ACHIEVEMENTS: "0",
        const.SENSOR_KEY_WEEKLY_PROGRESS: "0",
    }
    for key, value in expected.items():
        state = hass.states.get(_entity_id(hass, init_integration, key))
        assert state is not None, key
        assert state.state == value, key

    streak = hass.states.get(_entity_id(hass, init_integration, const.SENSOR_KEY_STREAK))
    assert streak.attributes["icon"] == "mdi:fire-off"


async def test_sensors_follow_progress(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Completing quests updates every progression sensor."""
    coordinator = get_coordinator(hass, init_integration)
    for i in range(5):
        coordinator.add_quest(create_quest(f"w{i}", xp_reward=250))
        coordinator.complete_quest(f"w{i}")
    await hass.async_block_till_done()

    xp = hass.states.get(_entity_id(hass, init_integration, const.SENSOR_KEY_TOTAL_XP))
    assert xp.state == "1250"
    assert xp.attributes[const.ATTR_LEVEL] == 2
    assert xp.attributes[const.ATTR_XP_FOR_NEXT_LEVEL] == 2000
    assert xp.attributes[const.ATTR_PROGRESS_TO_NEXT_LEVEL] == 0.25

    level = hass.states.get(_entity_id(hass, init_integration, const.SENSOR_KEY_LEVEL))
    assert level.state == "2"

    co2 = hass.states.get(_entity_id(hass, init_integration, const.SENSOR_KEY_CO2_SAVED))
    assert float(co2.state) == 12.5
    assert co2.attributes[const.ATTR_MONEY_SAVED] == 25

    badges = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_ACHIEVEMENTS)
    )
    assert badges.state == "1"
    assert badges.attributes[const.ATTR_UNLOCKED_ACHIEVEMENTS] == ["Waste Warrior"]
    assert badges.attributes[const.ATTR_TOTAL_ACHIEVEMENTS] == 12

    weekly = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_WEEKLY_PROGRESS)
    )
    assert weekly.state == "5"
    assert weekly.attributes[const.ATTR_CHALLENGES_PER_WEEK] == 4
    assert weekly.attributes[const.ATTR_PERCENT_COMPLETE] == 125


async def test_entities_share_one_device(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """All sensors belong to the entry's service device."""
    registry = er.async_get(hass)
    entries = er.async_entries_for_config_entry(registry, init_integration.entry_id)

    assert len(entries) == 7
    assert len({entry.device_id for entry in entries}) == 1


async def test_diagnostics(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Diagnostics return the stored state format and the export."""
    coordinator = get_coordinator(hass, init_integration)
    coordinator.add_quest(create_quest("q1"))

    diagnostics = await async_get_config_entry_diagnostics(hass, init_integration)

    assert diagnostics["entry"]["data"][const.CONF_PLAYER_NAME] == "Asha"
    assert diagnostics["entry"]["options"][const.CONF_CHALLENGES_PER_WEEK] == 4
    quest = diagnostics["game_state"][const.DATA_QUESTS][0]
    assert isinstance(quest[const.DATA_QUEST_CREATED_AT], str)
    assert "weekly_comparison" in diagnostics["export"]
