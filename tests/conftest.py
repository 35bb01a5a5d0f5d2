"""Shared fixtures for EcoQuest tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import patch

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoquest import const
from custom_components.ecoquest.coordinator import EcoQuestCoordinator
from custom_components.ecoquest.data_builders import (
    build_catalog_achievements,
    build_default_game_state,
    build_player,
)
from custom_components.ecoquest.store import EcoQuestStore
from custom_components.ecoquest.type_defs import (
    GameState,
    PlayerProfile,
    Quest,
    QuizSession,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

# Wednesday 11:00 in US/Pacific (the hass fixture time zone)
BASE_TIME = datetime(2025, 6, 11, 18, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a config entry as created by the config flow."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=const.ECOQUEST_TITLE,
        data={
            const.CONF_PLAYER_NAME: "Asha",
            const.CONF_DISPLAY_NAME: "Asha the Green",
        },
        options={
            const.CONF_INTERESTS: [const.QuestType.WASTE, const.QuestType.ENERGY],
            const.CONF_EXPERIENCE_LEVEL: const.ExperienceLevel.INTERMEDIATE,
            const.CONF_PRIMARY_GOALS: [const.GOAL_REDUCE_WASTE],
            const.CONF_AVAILABLE_TIME: const.AVAILABLE_TIME_10_20,
            const.CONF_PREFERRED_ACTIVITIES: [const.ACTIVITY_CHALLENGES],
            const.CONF_MOTIVATIONS: [const.MOTIVATION_SAVE_MONEY],
            const.CONF_CLIMATE: const.CLIMATE_ARID,
            const.CONF_COUNTRY: "India",
            const.CONF_REGION: "Rajasthan",
            const.CONF_CHALLENGES_PER_WEEK: 4,
        },
        entry_id="test_entry_id",
    )


@pytest.fixture
async def coordinator(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> EcoQuestCoordinator:
    """Return a coordinator holding a fresh game started at BASE_TIME."""
    mock_config_entry.add_to_hass(hass)
    store = EcoQuestStore(hass)
    coord = EcoQuestCoordinator(hass, mock_config_entry, store)
    with patch(
        "custom_components.ecoquest.coordinator.dt_util.utcnow",
        return_value=BASE_TIME,
    ):
        await coord.async_load_state()
    await hass.async_block_till_done()
    return coord


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the EcoQuest integration with empty storage."""
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry


def get_coordinator(hass: HomeAssistant, entry: MockConfigEntry) -> EcoQuestCoordinator:
    """Return the coordinator of a loaded entry."""
    return hass.data[const.DOMAIN][entry.entry_id][const.COORDINATOR]


# ------------------------------------------------------------------------------------------
# Record factories
# ------------------------------------------------------------------------------------------


def create_player(**overrides: Any) -> PlayerProfile:
    """Return a level 1 player created at BASE_TIME."""
    player = build_player(BASE_TIME, name="Test Player", tz=UTC)
    player.update(overrides)  # type: ignore[typeddict-item]
    return player


def create_quest(
    quest_id: str,
    quest_type: str = const.QuestType.WASTE,
    difficulty: str = const.Difficulty.EASY,
    xp_reward: int = 100,
    status: str = const.QuestStatus.AVAILABLE,
    completed_at: datetime | None = None,
) -> Quest:
    """Return a quest record."""
    return {
        const.DATA_QUEST_ID: quest_id,
        const.DATA_QUEST_TITLE: f"Quest {quest_id}",
        const.DATA_QUEST_DESCRIPTION: "",
        const.DATA_QUEST_TYPE: quest_type,
        const.DATA_QUEST_DIFFICULTY: difficulty,
        const.DATA_QUEST_XP_REWARD: xp_reward,
        const.DATA_QUEST_REALM: "Test Realm",
        const.DATA_QUEST_STATUS: status,
        const.DATA_QUEST_COMPLETED_AT: completed_at,
        const.DATA_QUEST_CREATED_AT: BASE_TIME,
        const.DATA_QUEST_IS_AI_GENERATED: False,
    }


def create_quiz_session(
    score: int,
    total: int = 5,
    completed_at: datetime = BASE_TIME,
    category: str = const.QuestType.WATER,
) -> QuizSession:
    """Return a quiz session with ``total`` questions of one category."""
    questions = [
        {
            const.DATA_QUESTION_ID: f"{category}-q{i}",
            const.DATA_QUESTION_TEXT: "?",
            const.DATA_QUESTION_OPTIONS: ["a", "b"],
            const.DATA_QUESTION_CORRECT_ANSWER: 0,
            const.DATA_QUESTION_EXPLANATION: "",
            const.DATA_QUESTION_CATEGORY: category,
            const.DATA_QUESTION_DIFFICULTY: const.Difficulty.EASY,
        }
        for i in range(total)
    ]
    return {
        const.DATA_QUIZ_SESSION_ID: f"session-{score}-{total}",
        const.DATA_QUIZ_SESSION_QUESTIONS: questions,  # type: ignore[typeddict-item]
        const.DATA_QUIZ_SESSION_ANSWERS: [0] * score + [1] * (total - score),
        const.DATA_QUIZ_SESSION_SCORE: score,
        const.DATA_QUIZ_SESSION_XP_EARNED: score * const.QUIZ_XP_PER_CORRECT_ANSWER,
        const.DATA_QUIZ_SESSION_COMPLETED_AT: completed_at,
    }


def create_game_state(**overrides: Any) -> GameState:
    """Return a default game state at BASE_TIME with optional top-level overrides."""
    state = build_default_game_state(BASE_TIME, name="Test Player", tz=UTC)
    state[const.DATA_ACHIEVEMENTS] = build_catalog_achievements()
    state.update(overrides)  # type: ignore[typeddict-item]
    return state
