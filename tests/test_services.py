"""Tests for EcoQuest services."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ServiceValidationError
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry
import voluptuous as vol

from custom_components.ecoquest import const
from tests.conftest import BASE_TIME, create_quest, get_coordinator


async def _call(
    hass: HomeAssistant,
    service: str,
    data: dict[str, Any] | None = None,
    return_response: bool = False,
) -> Any:
    return await hass.services.async_call(
        const.DOMAIN,
        service,
        data or {},
        blocking=True,
        return_response=return_response,
    )


async def test_services_registered(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Every service is registered while the entry is loaded."""
    for service in const.SERVICES:
        assert hass.services.has_service(const.DOMAIN, service)


# =============================================================================
# QUESTS
# =============================================================================


async def test_generate_quest_returns_quest(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """generate_quest adds a quest and returns it with ISO dates."""
    response = await _call(
        hass,
        const.SERVICE_GENERATE_QUEST,
        {const.FIELD_TYPE: "water", const.FIELD_DIFFICULTY: "hard"},
        return_response=True,
    )

    quest = response["quest"]
    assert quest[const.DATA_QUEST_TYPE] == "water"
    assert quest[const.DATA_QUEST_DIFFICULTY] == "hard"
    assert isinstance(quest[const.DATA_QUEST_CREATED_AT], str)
    assert quest[const.DATA_QUEST_COMPLETED_AT] is None
    coordinator = get_coordinator(hass, init_integration)
    assert coordinator.get_quest(quest[const.DATA_QUEST_ID]) is not None


async def test_generate_quest_rejects_unknown_type(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Schema validation rejects unknown quest types."""
    with pytest.raises(vol.Invalid):
        await _call(hass, const.SERVICE_GENERATE_QUEST, {const.FIELD_TYPE: "air"})


async def test_add_and_complete_quest(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A user defined quest can be started and completed for its XP."""
    response = await _call(
        hass,
        const.SERVICE_ADD_QUEST,
        {
            const.FIELD_TITLE: "Community Clean-up",
            const.FIELD_TYPE: "waste",
            const.FIELD_DIFFICULTY: "medium",
            const.FIELD_XP_REWARD: 175,
        },
        return_response=True,
    )
    quest_id = response["quest"][const.DATA_QUEST_ID]
    assert response["quest"][const.DATA_QUEST_REALM] == "Waste Realm"

    await _call(hass, const.SERVICE_START_QUEST, {const.FIELD_QUEST_ID: quest_id})
    coordinator = get_coordinator(hass, init_integration)
    assert coordinator.get_quest(quest_id)[const.DATA_QUEST_STATUS] == (
        const.QuestStatus.IN_PROGRESS
    )

    await _call(hass, const.SERVICE_COMPLETE_QUEST, {const.FIELD_QUEST_ID: quest_id})
    await _call(hass, const.SERVICE_COMPLETE_QUEST, {const.FIELD_QUEST_ID: quest_id})

    assert coordinator.player[const.DATA_PLAYER_TOTAL_XP] == 175
    assert coordinator.get_quest(quest_id)[const.DATA_QUEST_STATUS] == (
        const.QuestStatus.COMPLETED
    )


async def test_pause_quest(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """pause_quest returns an in-progress quest to available."""
    coordinator = get_coordinator(hass, init_integration)
    coordinator.add_quest(create_quest("q1", status=const.QuestStatus.IN_PROGRESS))

    await _call(hass, const.SERVICE_PAUSE_QUEST, {const.FIELD_QUEST_ID: "q1"})

    assert coordinator.get_quest("q1")[const.DATA_QUEST_STATUS] == (
        const.QuestStatus.AVAILABLE
    )


async def test_complete_unknown_quest(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Completing an unknown quest only logs a warning."""
    await _call(hass, const.SERVICE_COMPLETE_QUEST, {const.FIELD_QUEST_ID: "nope"})

    assert "unknown quest nope" in caplog.text
    coordinator = get_coordinator(hass, init_integration)
    assert coordinator.player[const.DATA_PLAYER_TOTAL_XP] == 0


# =============================================================================
# QUIZZES AND MINI-GAMES
# =============================================================================


async def test_generate_quiz(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """generate_quiz returns distinct questions from one category."""
    response = await _call(
        hass,
        const.SERVICE_GENERATE_QUIZ,
        {const.FIELD_COUNT: 3, const.FIELD_CATEGORY: "energy"},
        return_response=True,
    )

    questions = response["questions"]
    assert len(questions) == 3
    assert len({q[const.DATA_QUESTION_ID] for q in questions}) == 3
    assert all(q[const.DATA_QUESTION_CATEGORY] == "energy" for q in questions)


async def test_submit_quiz(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A submitted quiz is scored and credited."""
    response = await _call(
        hass,
        const.SERVICE_SUBMIT_QUIZ,
        {
            const.FIELD_QUESTION_IDS: ["waste-001", "waste-002"],
            const.FIELD_ANSWERS: [2, 3],
        },
        return_response=True,
    )

    assert response == {"score": 1, "xp_earned": 20}
    coordinator = get_coordinator(hass, init_integration)
    assert coordinator.player[const.DATA_PLAYER_TOTAL_XP] == 20
    assert len(coordinator.quiz_sessions) == 1


async def test_submit_quiz_length_mismatch(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Mismatched answers raise a translated validation error."""
    with pytest.raises(ServiceValidationError) as err:
        await _call(
            hass,
            const.SERVICE_SUBMIT_QUIZ,
            {const.FIELD_QUESTION_IDS: ["waste-001", "waste-002"], const.FIELD_ANSWERS: [2]},
        )

    assert err.value.translation_key == const.TRANS_KEY_ERROR_QUIZ_LENGTH_MISMATCH
    assert err.value.translation_placeholders == {"questions": "2", "answers": "1"}
    assert get_coordinator(hass, init_integration).quiz_sessions == []


async def test_submit_quiz_unknown_question(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Question ids outside the bank are rejected."""
    with pytest.raises(ServiceValidationError) as err:
        await _call(
            hass,
            const.SERVICE_SUBMIT_QUIZ,
            {const.FIELD_QUESTION_IDS: ["made-up"], const.FIELD_ANSWERS: [0]},
        )
    assert err.value.translation_key == const.TRANS_KEY_ERROR_UNKNOWN_QUESTION


async def test_record_mini_game(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A mini-game score is converted to XP."""
    response = await _call(
        hass,
        const.SERVICE_RECORD_MINI_GAME,
        {const.FIELD_GAME_ID: "water-drops", const.FIELD_SCORE: 750},
        return_response=True,
    )

    assert response == {"xp_earned": 37}
    coordinator = get_coordinator(hass, init_integration)
    assert coordinator.player[const.DATA_PLAYER_STATS][
        const.DATA_STATS_MINI_GAMES_PLAYED
    ] == 1


async def test_record_unknown_mini_game(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Unknown games raise a translated validation error."""
    with pytest.raises(ServiceValidationError) as err:
        await _call(
            hass,
            const.SERVICE_RECORD_MINI_GAME,
            {const.FIELD_GAME_ID: "tetris", const.FIELD_SCORE: 10},
        )

    assert err.value.translation_key == const.TRANS_KEY_ERROR_UNKNOWN_GAME
    assert err.value.translation_placeholders == {"game_id": "tetris"}


# =============================================================================
# PLAYER
# =============================================================================


async def test_check_in_next_day(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    freezer: Any,
) -> None:
    """Checking in on the following day extends the streak."""
    freezer.move_to(BASE_TIME)
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    coordinator = get_coordinator(hass, mock_config_entry)

    await _call(hass, const.SERVICE_CHECK_IN)
    assert coordinator.player[const.DATA_PLAYER_CURRENT_STREAK] == 0

    freezer.move_to(BASE_TIME + timedelta(days=1))
    await _call(hass, const.SERVICE_CHECK_IN)
    await _call(hass, const.SERVICE_CHECK_IN)

    assert coordinator.player[const.DATA_PLAYER_CURRENT_STREAK] == 1
    assert coordinator.player[const.DATA_PLAYER_LONGEST_STREAK] == 1


async def test_update_player(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Profile fields and the weekly goal can be edited."""
    await _call(
        hass,
        const.SERVICE_UPDATE_PLAYER,
        {
            const.FIELD_NAME: "Kai",
            const.FIELD_DISPLAY_NAME: "Captain Compost",
            const.FIELD_CHALLENGES_PER_WEEK: 7,
        },
    )

    player = get_coordinator(hass, init_integration).player
    assert player[const.DATA_PLAYER_NAME] == "Kai"
    assert player[const.DATA_PLAYER_DISPLAY_NAME] == "Captain Compost"
    assert player[const.DATA_PLAYER_WEEKLY_TARGET][
        const.DATA_WEEKLY_CHALLENGES_PER_WEEK
    ] == 7


async def test_reset_requires_confirmation(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """reset_game refuses to run without confirmation."""
    coordinator = get_coordinator(hass, init_integration)
    coordinator.add_quest(create_quest("q1"))

    with pytest.raises(ServiceValidationError) as err:
        await _call(
            hass, const.SERVICE_RESET_GAME, {const.FIELD_CONFIRM_DESTRUCTIVE: False}
        )

    assert err.value.translation_key == const.TRANS_KEY_ERROR_CONFIRM_REQUIRED
    assert len(coordinator.quests) == 1


async def test_reset_game(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,
    hass_storage: dict[str, Any],
) -> None:
    """A confirmed reset replaces the game and saves the fresh state."""
    coordinator = get_coordinator(hass, init_integration)
    coordinator.add_quest(create_quest("q1"))
    coordinator.complete_quest("q1")

    await _call(
        hass,
        const.SERVICE_RESET_GAME,
        {const.FIELD_CONFIRM_DESTRUCTIVE: True, const.FIELD_DELETE_STORAGE: True},
    )
    await hass.async_block_till_done()

    assert coordinator.quests == []
    assert coordinator.player[const.DATA_PLAYER_TOTAL_XP] == 0
    stored = hass_storage[const.STORAGE_KEY]["data"]
    assert stored[const.DATA_QUESTS] == []
    assert stored[const.DATA_PLAYER][const.DATA_PLAYER_TOTAL_XP] == 0


async def test_export_progress(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """export_progress returns the progress report."""
    coordinator = get_coordinator(hass, init_integration)
    coordinator.add_quest(create_quest("q1", xp_reward=120))
    coordinator.complete_quest("q1")

    response = await _call(hass, const.SERVICE_EXPORT_PROGRESS, return_response=True)

    assert response["player"]["total_xp"] == 120
    assert response["insights"]["total_activities"] == 1
    assert response["weekly_comparison"]["this_week"] == 120
    assert len(response["personalization"]["tips"]) == 3


async def test_services_removed_on_unload(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Unloading the entry removes the services."""
    assert await hass.config_entries.async_unload(init_integration.entry_id)
    await hass.async_block_till_done()

    assert not hass.services.has_service(const.DOMAIN, const.SERVICE_CHECK_IN)
