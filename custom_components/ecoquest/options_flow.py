# File: options_flow.py
"""Options Flow for the EcoQuest integration.

Edits the onboarding preferences after setup. Saved options are pushed into
the player profile by the entry's update listener.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlowResult

from . import const
from . import flow_helpers as fh


class EcoQuestOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for editing player preferences."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Show the preferences form with the current options."""
        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_preferences_inputs(user_input)
            if not errors:
                return self.async_create_entry(
                    data=fh.build_preferences_data(user_input)
                )

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_preferences_schema(
                user_input or dict(self.config_entry.options)
            ),
            errors=errors,
        )
