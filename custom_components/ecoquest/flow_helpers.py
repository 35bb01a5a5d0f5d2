# File: flow_helpers.py
"""Helpers for the EcoQuest integration's Config and Options flow.

Provides schema builders and input-processing logic for onboarding.

Each form has:
- build_<form>_schema(default) -> vol.Schema
- validate_<form>_inputs(user_input) -> errors_dict (empty dict = no errors)
- build_<form>_data(user_input) -> dict stored on the config entry (CONF_* keys)

**Example flow:**
```python
errors = validate_preferences_inputs(user_input)
if not errors:
    options = build_preferences_data(user_input)
```
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.helpers import selector

from . import const


def _select(
    options: list[str], translation_key: str, multiple: bool = False
) -> selector.SelectSelector:
    return selector.SelectSelector(
        selector.SelectSelectorConfig(
            options=options,
            multiple=multiple,
            mode=selector.SelectSelectorMode.LIST
            if multiple
            else selector.SelectSelectorMode.DROPDOWN,
            translation_key=translation_key,
        )
    )


# ----------------------------------------------------------------------------------
# PLAYER SCHEMA
# ----------------------------------------------------------------------------------


def build_player_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build a schema for the player's name and display name."""
    default = default or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_PLAYER_NAME,
                default=default.get(const.CONF_PLAYER_NAME, const.DEFAULT_PLAYER_NAME),
            ): str,
            vol.Optional(
                const.CONF_DISPLAY_NAME,
                default=default.get(const.CONF_DISPLAY_NAME, ""),
            ): str,
        }
    )


def validate_player_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate player inputs.

    Returns:
        Dictionary of errors (empty if validation passes).
    """
    errors: dict[str, str] = {}
    if not user_input.get(const.CONF_PLAYER_NAME, "").strip():
        errors[const.CONF_PLAYER_NAME] = const.TRANS_KEY_ERROR_NAME_REQUIRED
    return errors


def build_player_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Build config entry data from the player form."""
    return {
        const.CONF_PLAYER_NAME: user_input[const.CONF_PLAYER_NAME].strip(),
        const.CONF_DISPLAY_NAME: user_input.get(const.CONF_DISPLAY_NAME, "").strip(),
    }


# ----------------------------------------------------------------------------------
# PREFERENCES SCHEMA
# ----------------------------------------------------------------------------------


def build_preferences_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build a schema for the onboarding preferences.

    Used by both the config flow preferences step and the options flow, with
    the current options as defaults.
    """
    default = default or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_INTERESTS,
                default=default.get(const.CONF_INTERESTS, []),
            ): _select(const.QUEST_TYPES, const.CONF_INTERESTS, multiple=True),
            vol.Required(
                const.CONF_EXPERIENCE_LEVEL,
                default=default.get(
                    const.CONF_EXPERIENCE_LEVEL, const.DEFAULT_EXPERIENCE_LEVEL
                ),
            ): _select(const.EXPERIENCE_LEVELS, const.CONF_EXPERIENCE_LEVEL),
            vol.Optional(
                const.CONF_PRIMARY_GOALS,
                default=default.get(const.CONF_PRIMARY_GOALS, []),
            ): _select(const.PRIMARY_GOALS, const.CONF_PRIMARY_GOALS, multiple=True),
            vol.Required(
                const.CONF_AVAILABLE_TIME,
                default=default.get(
                    const.CONF_AVAILABLE_TIME, const.DEFAULT_AVAILABLE_TIME
                ),
            ): _select(const.AVAILABLE_TIMES, const.CONF_AVAILABLE_TIME),
            vol.Optional(
                const.CONF_PREFERRED_ACTIVITIES,
                default=default.get(const.CONF_PREFERRED_ACTIVITIES, []),
            ): _select(
                const.PREFERRED_ACTIVITIES,
                const.CONF_PREFERRED_ACTIVITIES,
                multiple=True,
            ),
            vol.Optional(
                const.CONF_MOTIVATIONS,
                default=default.get(const.CONF_MOTIVATIONS, []),
            ): _select(const.MOTIVATIONS, const.CONF_MOTIVATIONS, multiple=True),
            vol.Required(
                const.CONF_CLIMATE,
                default=default.get(const.CONF_CLIMATE, const.CLIMATE_TEMPERATE),
            ): _select(const.CLIMATES, const.CONF_CLIMATE),
            vol.Optional(
                const.CONF_COUNTRY,
                default=default.get(const.CONF_COUNTRY, ""),
            ): str,
            vol.Optional(
                const.CONF_REGION,
                default=default.get(const.CONF_REGION, ""),
            ): str,
            vol.Required(
                const.CONF_CHALLENGES_PER_WEEK,
                default=default.get(
                    const.CONF_CHALLENGES_PER_WEEK, const.DEFAULT_CHALLENGES_PER_WEEK
                ),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=1,
                    max=50,
                    step=1,
                )
            ),
        }
    )


def validate_preferences_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate preference inputs.

    At least one interest is required so quests can be ranked.

    Returns:
        Dictionary of errors (empty if validation passes).
    """
    errors: dict[str, str] = {}
    if not user_input.get(const.CONF_INTERESTS):
        errors[const.CONF_INTERESTS] = const.TRANS_KEY_ERROR_NO_INTERESTS
    return errors


def build_preferences_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Build config entry options from the preferences form.

    Number selectors return floats; the weekly target is stored as an int.
    """
    return {
        const.CONF_INTERESTS: list(user_input.get(const.CONF_INTERESTS, [])),
        const.CONF_EXPERIENCE_LEVEL: user_input.get(
            const.CONF_EXPERIENCE_LEVEL, const.DEFAULT_EXPERIENCE_LEVEL
        ),
        const.CONF_PRIMARY_GOALS: list(user_input.get(const.CONF_PRIMARY_GOALS, [])),
        const.CONF_AVAILABLE_TIME: user_input.get(
            const.CONF_AVAILABLE_TIME, const.DEFAULT_AVAILABLE_TIME
        ),
        const.CONF_PREFERRED_ACTIVITIES: list(
            user_input.get(const.CONF_PREFERRED_ACTIVITIES, [])
        ),
        const.CONF_MOTIVATIONS: list(user_input.get(const.CONF_MOTIVATIONS, [])),
        const.CONF_CLIMATE: user_input.get(const.CONF_CLIMATE, const.CLIMATE_TEMPERATE),
        const.CONF_COUNTRY: user_input.get(const.CONF_COUNTRY, "").strip(),
        const.CONF_REGION: user_input.get(const.CONF_REGION, "").strip(),
        const.CONF_CHALLENGES_PER_WEEK: int(
            user_input.get(
                const.CONF_CHALLENGES_PER_WEEK, const.DEFAULT_CHALLENGES_PER_WEEK
            )
        ),
    }
