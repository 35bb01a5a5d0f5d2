# File: config_flow.py
"""Config flow for the EcoQuest integration.

Two onboarding steps: the player's name, then sustainability preferences.
Names go to the entry data, preferences to the entry options so the options
flow can edit them later.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlowResult
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import EcoQuestOptionsFlowHandler

# pylint: disable=abstract-method


class EcoQuestConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for EcoQuest."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        self._data: dict[str, Any] = {}

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Ask for the player's name."""
        # A single game per Home Assistant instance
        if self._async_current_entries():
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_player_inputs(user_input)
            if not errors:
                self._data = fh.build_player_data(user_input)
                return await self.async_step_preferences()

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_player_schema(user_input),
            errors=errors,
        )

    async def async_step_preferences(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Collect interests, goals and the weekly target."""
        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_preferences_inputs(user_input)
            if not errors:
                const.LOGGER.debug(
                    "DEBUG: Creating EcoQuest entry for player '%s'",
                    self._data[const.CONF_PLAYER_NAME],
                )
                return self.async_create_entry(
                    title=const.ECOQUEST_TITLE,
                    data=self._data,
                    options=fh.build_preferences_data(user_input),
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_PREFERENCES,
            data_schema=fh.build_preferences_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> EcoQuestOptionsFlowHandler:
        """Return the Options Flow."""
        return EcoQuestOptionsFlowHandler()
