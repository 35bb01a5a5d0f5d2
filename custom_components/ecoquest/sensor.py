# File: sensor.py
"""Sensors for the EcoQuest integration.

Sensors Defined in This File (7):
01. TotalXpSensor
02. LevelSensor
03. StreakSensor
04. ChallengesCompletedSensor
05. Co2SavedSensor
06. AchievementsUnlockedSensor
07. WeeklyProgressSensor
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfMass
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import EcoQuestCoordinator
from .entity import EcoQuestCoordinatorEntity
from .utils.dt_utils import dt_to_iso
from .utils.math_utils import calculate_percentage


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for EcoQuest integration."""
    coordinator: EcoQuestCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    async_add_entities(
        [
            TotalXpSensor(coordinator, entry),
            LevelSensor(coordinator, entry),
            StreakSensor(coordinator, entry),
            ChallengesCompletedSensor(coordinator, entry),
            Co2SavedSensor(coordinator, entry),
            AchievementsUnlockedSensor(coordinator, entry),
            WeeklyProgressSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
# 01 TotalXpSensor
# ------------------------------------------------------------------------------------------
class TotalXpSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Lifetime XP with level progress in attributes."""

    _attr_icon = "mdi:star-four-points"
    _attr_native_unit_of_measurement = const.UNIT_XP
    _attr_state_class = SensorStateClass.TOTAL_INCREASING

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_TOTAL_XP)

    @property
    def native_value(self) -> int:
        """Return total XP."""
        return self.coordinator.player[const.DATA_PLAYER_TOTAL_XP]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose level progress."""
        return {
            const.ATTR_LEVEL: self.coordinator.level,
            const.ATTR_XP_FOR_NEXT_LEVEL: self.coordinator.xp_for_next_level,
            const.ATTR_PROGRESS_TO_NEXT_LEVEL: round(
                self.coordinator.progress_to_next_level, 3
            ),
        }


# ------------------------------------------------------------------------------------------
# 02 LevelSensor
# ------------------------------------------------------------------------------------------
class LevelSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Current level."""

    _attr_icon = "mdi:trophy-variant"
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_LEVEL)

    @property
    def native_value(self) -> int:
        """Return the level derived from total XP."""
        return self.coordinator.level


# ------------------------------------------------------------------------------------------
# 03 StreakSensor
# ------------------------------------------------------------------------------------------
class StreakSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Consecutive active days.

    Uses a flame icon while the streak is alive.
    """

    _attr_native_unit_of_measurement = const.UNIT_DAYS
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_STREAK)

    @property
    def native_value(self) -> int:
        """Return the current streak."""
        return self.coordinator.player[const.DATA_PLAYER_CURRENT_STREAK]

    @property
    def icon(self) -> str:
        """Return the icon for the current streak."""
        return "mdi:fire" if self.native_value else "mdi:fire-off"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the longest streak."""
        return {
            const.ATTR_LONGEST_STREAK: self.coordinator.player[
                const.DATA_PLAYER_LONGEST_STREAK
            ],
        }


# ------------------------------------------------------------------------------------------
# 04 ChallengesCompletedSensor
# ------------------------------------------------------------------------------------------
class ChallengesCompletedSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Completed quest count, with the number of open quests in attributes."""

    _attr_icon = "mdi:check-decagram"
    _attr_native_unit_of_measurement = const.UNIT_QUESTS
    _attr_state_class = SensorStateClass.TOTAL_INCREASING

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_CHALLENGES_COMPLETED)

    @property
    def native_value(self) -> int:
        """Return completed quests."""
        return self.coordinator.player[const.DATA_PLAYER_STATS][
            const.DATA_STATS_CHALLENGES_COMPLETED
        ]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose open quest count."""
        return {const.ATTR_AVAILABLE_QUESTS: len(self.coordinator.available_quests)}


# ------------------------------------------------------------------------------------------
# 05 Co2SavedSensor
# ------------------------------------------------------------------------------------------
class Co2SavedSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Estimated CO2 saved by completed quests."""

    _attr_icon = "mdi:molecule-co2"
    _attr_native_unit_of_measurement = UnitOfMass.KILOGRAMS
    _attr_state_class = SensorStateClass.TOTAL_INCREASING

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_CO2_SAVED)

    @property
    def native_value(self) -> float:
        """Return kg of CO2 saved."""
        return self.coordinator.player[const.DATA_PLAYER_STATS][
            const.DATA_STATS_CO2_SAVED
        ]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the other impact metrics."""
        stats = self.coordinator.player[const.DATA_PLAYER_STATS]
        return {
            const.ATTR_MONEY_SAVED: stats[const.DATA_STATS_MONEY_SAVED],
            const.ATTR_TREES_EQUIVALENT: stats[const.DATA_STATS_TREES_EQUIVALENT],
        }


# ------------------------------------------------------------------------------------------
# 06 AchievementsUnlockedSensor
# ------------------------------------------------------------------------------------------
class AchievementsUnlockedSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Unlocked achievement count with their titles in attributes."""

    _attr_icon = "mdi:medal"
    _attr_native_unit_of_measurement = const.UNIT_BADGES
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_ACHIEVEMENTS)

    @property
    def native_value(self) -> int:
        """Return the unlocked count."""
        return len(self.coordinator.unlocked_achievements)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose unlocked titles and the catalog size."""
        return {
            const.ATTR_UNLOCKED_ACHIEVEMENTS: [
                a[const.DATA_ACHIEVEMENT_TITLE]
                for a in self.coordinator.unlocked_achievements
            ],
            const.ATTR_TOTAL_ACHIEVEMENTS: len(self.coordinator.achievements),
        }


# ------------------------------------------------------------------------------------------
# 07 WeeklyProgressSensor
# ------------------------------------------------------------------------------------------
class WeeklyProgressSensor(EcoQuestCoordinatorEntity, SensorEntity):
    """Quests completed in the current weekly window."""

    _attr_icon = "mdi:calendar-check"
    _attr_native_unit_of_measurement = const.UNIT_QUESTS
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: EcoQuestCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_WEEKLY_PROGRESS)

    @property
    def native_value(self) -> int:
        """Return progress in the current window."""
        return self.coordinator.player[const.DATA_PLAYER_WEEKLY_TARGET][
            const.DATA_WEEKLY_CURRENT_PROGRESS
        ]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the target and window start."""
        target = self.coordinator.player[const.DATA_PLAYER_WEEKLY_TARGET]
        return {
            const.ATTR_CHALLENGES_PER_WEEK: target[
                const.DATA_WEEKLY_CHALLENGES_PER_WEEK
            ],
            const.ATTR_WEEK_START: dt_to_iso(target[const.DATA_WEEKLY_WEEK_START]),
            const.ATTR_PERCENT_COMPLETE: calculate_percentage(
                target[const.DATA_WEEKLY_CURRENT_PROGRESS],
                target[const.DATA_WEEKLY_CHALLENGES_PER_WEEK],
            ),
        }
