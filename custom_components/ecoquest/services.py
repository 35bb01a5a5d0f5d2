# File: services.py
"""Defines custom services for the EcoQuest integration.

These services allow direct actions through scripts, automations and
dashboards: quest lifecycle, quizzes, mini-games, daily check-ins, profile
edits, resets and the progress export.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import config_validation as cv
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import EcoQuestCoordinator
from .data_builders import GameDataValidationError, build_quest
from .type_defs import Quest
from .utils.dt_utils import dt_to_iso

# --- Service Schemas ---
GENERATE_QUEST_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_TYPE): vol.In(const.QUEST_TYPES),
        vol.Optional(const.FIELD_DIFFICULTY): vol.In(const.DIFFICULTIES),
    }
)

ADD_QUEST_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION, default=""): cv.string,
        vol.Required(const.FIELD_TYPE): vol.In(const.QUEST_TYPES),
        vol.Required(const.FIELD_DIFFICULTY): vol.In(const.DIFFICULTIES),
        vol.Required(const.FIELD_XP_REWARD): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(const.FIELD_REALM): cv.string,
    }
)

QUEST_ID_SCHEMA = vol.Schema({vol.Required(const.FIELD_QUEST_ID): cv.string})

GENERATE_QUIZ_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.FIELD_COUNT, default=const.DEFAULT_QUIZ_QUESTION_COUNT
        ): vol.All(vol.Coerce(int), vol.Range(min=1, max=20)),
        vol.Optional(const.FIELD_CATEGORY): vol.In(const.QUEST_TYPES),
        vol.Optional(const.FIELD_DIFFICULTY): vol.In(const.DIFFICULTIES),
    }
)

SUBMIT_QUIZ_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_QUESTION_IDS): vol.All(cv.ensure_list, [cv.string]),
        vol.Required(const.FIELD_ANSWERS): vol.All(
            cv.ensure_list, [vol.Coerce(int)]
        ),
    }
)

RECORD_MINI_GAME_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_GAME_ID): cv.string,
        vol.Required(const.FIELD_SCORE): vol.All(vol.Coerce(int), vol.Range(min=0)),
    }
)

CHECK_IN_SCHEMA = vol.Schema({})

UPDATE_PLAYER_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_NAME): vol.All(cv.string, vol.Length(min=1)),
        vol.Optional(const.FIELD_DISPLAY_NAME): cv.string,
        vol.Optional(const.FIELD_CHALLENGES_PER_WEEK): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=50)
        ),
    }
)

RESET_GAME_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CONFIRM_DESTRUCTIVE): cv.boolean,
        vol.Optional(const.FIELD_DELETE_STORAGE, default=False): cv.boolean,
    }
)

EXPORT_PROGRESS_SCHEMA = vol.Schema({})


def _get_coordinator(hass: HomeAssistant) -> EcoQuestCoordinator:
    """Return the coordinator of the loaded config entry."""
    for entry_data in hass.data.get(const.DOMAIN, {}).values():
        return entry_data[const.COORDINATOR]
    raise HomeAssistantError(
        translation_domain=const.DOMAIN,
        translation_key=const.TRANS_KEY_ERROR_NOT_LOADED,
    )


def _validation_error(err: GameDataValidationError) -> ServiceValidationError:
    return ServiceValidationError(
        translation_domain=const.DOMAIN,
        translation_key=err.translation_key,
        translation_placeholders=err.placeholders,
    )


def _quest_response(quest: Quest) -> dict[str, Any]:
    """Return a JSON-safe copy of a quest."""
    response: dict[str, Any] = dict(quest)
    response[const.DATA_QUEST_CREATED_AT] = dt_to_iso(quest[const.DATA_QUEST_CREATED_AT])
    response[const.DATA_QUEST_COMPLETED_AT] = dt_to_iso(
        quest.get(const.DATA_QUEST_COMPLETED_AT)
    )
    return response


def async_setup_services(hass: HomeAssistant) -> None:
    """Register EcoQuest services."""

    async def handle_generate_quest(call: ServiceCall) -> ServiceResponse:
        """Handle generating a new quest."""
        coordinator = _get_coordinator(hass)
        try:
            quest = coordinator.generate_quest(
                call.data.get(const.FIELD_TYPE), call.data.get(const.FIELD_DIFFICULTY)
            )
        except GameDataValidationError as err:
            raise _validation_error(err) from err

        const.LOGGER.info(
            "INFO: Generated quest '%s' (%s)",
            quest[const.DATA_QUEST_TITLE],
            quest[const.DATA_QUEST_ID],
        )
        if call.return_response:
            return {"quest": _quest_response(quest)}
        return None

    async def handle_add_quest(call: ServiceCall) -> ServiceResponse:
        """Handle adding a user defined quest."""
        coordinator = _get_coordinator(hass)
        try:
            quest = build_quest(
                {
                    const.DATA_QUEST_TITLE: call.data[const.FIELD_TITLE],
                    const.DATA_QUEST_DESCRIPTION: call.data[const.FIELD_DESCRIPTION],
                    const.DATA_QUEST_TYPE: call.data[const.FIELD_TYPE],
                    const.DATA_QUEST_DIFFICULTY: call.data[const.FIELD_DIFFICULTY],
                    const.DATA_QUEST_XP_REWARD: call.data[const.FIELD_XP_REWARD],
                    const.DATA_QUEST_REALM: call.data.get(const.FIELD_REALM),
                },
                dt_util.utcnow(),
            )
        except GameDataValidationError as err:
            raise _validation_error(err) from err

        coordinator.add_quest(quest)
        if call.return_response:
            return {"quest": _quest_response(quest)}
        return None

    async def handle_start_quest(call: ServiceCall) -> None:
        """Handle starting a quest."""
        _get_coordinator(hass).start_quest(call.data[const.FIELD_QUEST_ID])

    async def handle_pause_quest(call: ServiceCall) -> None:
        """Handle pausing a quest."""
        _get_coordinator(hass).pause_quest(call.data[const.FIELD_QUEST_ID])

    async def handle_complete_quest(call: ServiceCall) -> None:
        """Handle completing a quest."""
        coordinator = _get_coordinator(hass)
        quest_id = call.data[const.FIELD_QUEST_ID]
        if coordinator.get_quest(quest_id) is None:
            const.LOGGER.warning("WARNING: Complete Quest: unknown quest %s", quest_id)
            return
        coordinator.complete_quest(quest_id)

    async def handle_generate_quiz(call: ServiceCall) -> ServiceResponse:
        """Handle drawing quiz questions."""
        questions = _get_coordinator(hass).generate_quiz(
            call.data[const.FIELD_COUNT],
            call.data.get(const.FIELD_CATEGORY),
            call.data.get(const.FIELD_DIFFICULTY),
        )
        return {"questions": [dict(q) for q in questions]}

    async def handle_submit_quiz(call: ServiceCall) -> ServiceResponse:
        """Handle scoring and recording a quiz."""
        coordinator = _get_coordinator(hass)
        try:
            session = coordinator.submit_quiz(
                call.data[const.FIELD_QUESTION_IDS], call.data[const.FIELD_ANSWERS]
            )
        except GameDataValidationError as err:
            raise _validation_error(err) from err

        const.LOGGER.info(
            "INFO: Quiz submitted: %s/%s correct",
            session[const.DATA_QUIZ_SESSION_SCORE],
            len(session[const.DATA_QUIZ_SESSION_QUESTIONS]),
        )
        if call.return_response:
            return {
                const.DATA_QUIZ_SESSION_SCORE: session[const.DATA_QUIZ_SESSION_SCORE],
                const.DATA_QUIZ_SESSION_XP_EARNED: session[
                    const.DATA_QUIZ_SESSION_XP_EARNED
                ],
            }
        return None

    async def handle_record_mini_game(call: ServiceCall) -> ServiceResponse:
        """Handle recording a mini-game play."""
        coordinator = _get_coordinator(hass)
        try:
            score = coordinator.record_mini_game(
                call.data[const.FIELD_GAME_ID], call.data[const.FIELD_SCORE]
            )
        except GameDataValidationError as err:
            raise _validation_error(err) from err

        if call.return_response:
            return {
                const.DATA_GAME_SCORE_XP_EARNED: score[const.DATA_GAME_SCORE_XP_EARNED]
            }
        return None

    async def handle_check_in(call: ServiceCall) -> None:
        """Handle the daily streak check-in."""
        _get_coordinator(hass).update_streak()

    async def handle_update_player(call: ServiceCall) -> None:
        """Handle editing the player profile."""
        coordinator = _get_coordinator(hass)
        updates: dict[str, Any] = {}
        if const.FIELD_NAME in call.data:
            updates[const.DATA_PLAYER_NAME] = call.data[const.FIELD_NAME]
        if const.FIELD_DISPLAY_NAME in call.data:
            updates[const.DATA_PLAYER_DISPLAY_NAME] = call.data[
                const.FIELD_DISPLAY_NAME
            ]
        if const.FIELD_CHALLENGES_PER_WEEK in call.data:
            weekly_target = dict(coordinator.player[const.DATA_PLAYER_WEEKLY_TARGET])
            weekly_target[const.DATA_WEEKLY_CHALLENGES_PER_WEEK] = call.data[
                const.FIELD_CHALLENGES_PER_WEEK
            ]
            updates[const.DATA_PLAYER_WEEKLY_TARGET] = weekly_target

        if not updates:
            const.LOGGER.debug("DEBUG: Update Player: nothing to update")
            return
        coordinator.update_player(updates)

    async def handle_reset_game(call: ServiceCall) -> None:
        """Handle resetting all game progress."""
        if not call.data[const.FIELD_CONFIRM_DESTRUCTIVE]:
            raise ServiceValidationError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_CONFIRM_REQUIRED,
            )

        coordinator = _get_coordinator(hass)
        if call.data[const.FIELD_DELETE_STORAGE]:
            await coordinator.store.async_clear()
        coordinator.reset_game()
        const.LOGGER.info(
            "INFO: Reset Game: progress cleared by user %s", call.context.user_id
        )

    async def handle_export_progress(call: ServiceCall) -> ServiceResponse:
        """Handle building the progress report."""
        return _get_coordinator(hass).build_export()

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GENERATE_QUEST,
        handle_generate_quest,
        schema=GENERATE_QUEST_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_QUEST,
        handle_add_quest,
        schema=ADD_QUEST_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_START_QUEST,
        handle_start_quest,
        schema=QUEST_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_PAUSE_QUEST,
        handle_pause_quest,
        schema=QUEST_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_QUEST,
        handle_complete_quest,
        schema=QUEST_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GENERATE_QUIZ,
        handle_generate_quiz,
        schema=GENERATE_QUIZ_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SUBMIT_QUIZ,
        handle_submit_quiz,
        schema=SUBMIT_QUIZ_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RECORD_MINI_GAME,
        handle_record_mini_game,
        schema=RECORD_MINI_GAME_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CHECK_IN,
        handle_check_in,
        schema=CHECK_IN_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_PLAYER,
        handle_update_player,
        schema=UPDATE_PLAYER_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_GAME,
        handle_reset_game,
        schema=RESET_GAME_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_EXPORT_PROGRESS,
        handle_export_progress,
        schema=EXPORT_PROGRESS_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    const.LOGGER.info("INFO: EcoQuest services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister EcoQuest services when unloading the integration."""
    for service in const.SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: EcoQuest services have been unregistered")
