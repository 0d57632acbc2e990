"""Config flow and options flow for CO2 Monitor integration.

The config flow asks for the one required setting, the URL of the remote
sensor endpoint, and stores it in the entry's options. The options flow lets
the user change the endpoint later; saving it reloads the integration.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers import selector

from .config import ConfKeys, resolve
from .const import (
    DOMAIN,
    ERROR_ENDPOINT_IN_USE,
    ERROR_INVALID_URL,
    INTEGRATION_NAME,
    PAYLOAD_KEY_CO2,
    PAYLOAD_KEY_CO2_DETECTED,
)
from .log import Log

# ---------------------------------------------------------------------------
# Example payload shown in the form description
# ---------------------------------------------------------------------------

PAYLOAD_EXAMPLE: str = f'{{"{PAYLOAD_KEY_CO2}": 612, "{PAYLOAD_KEY_CO2_DETECTED}": true}}'


# ===========================================================================
# Schema builders
# ===========================================================================


#
# _build_schema_endpoint
#
def _build_schema_endpoint(defaults: dict[str, Any]) -> vol.Schema:
    """Build the voluptuous schema for the endpoint form.

    Args:
        defaults: Current/default values keyed by ConfKeys string values.

    Returns:
        Schema with a single required URL field.
    """

    resolved = resolve(defaults)
    schema: dict[vol.Marker, Any] = {}

    schema[
        vol.Required(
            ConfKeys.ENDPOINT.value,
            default=resolved.endpoint,
        )
    ] = selector.TextSelector(selector.TextSelectorConfig(type=selector.TextSelectorType.URL))

    return vol.Schema(schema)


# ===========================================================================
# Validation helpers
# ===========================================================================


#
# _validate_endpoint
#
def _validate_endpoint(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate the endpoint input.

    Rules:
    - The endpoint must be an absolute http(s) URL.

    Args:
        user_input: Form data submitted by the user.

    Returns:
        Dictionary of field-key to error-key pairs (empty if valid).
    """

    errors: dict[str, str] = {}

    endpoint = str(user_input.get(ConfKeys.ENDPOINT.value, "")).strip()

    try:
        cv.url(endpoint)
    except vol.Invalid:
        errors[ConfKeys.ENDPOINT.value] = ERROR_INVALID_URL

    return errors


#
# _normalize_input
#
def _normalize_input(user_input: dict[str, Any]) -> dict[str, Any]:
    """Return the input with the endpoint stripped of surrounding whitespace."""

    return {**user_input, ConfKeys.ENDPOINT.value: str(user_input[ConfKeys.ENDPOINT.value]).strip()}


# ===========================================================================
# Config flow (initial setup)
# ===========================================================================


#
# FlowHandler
#
class FlowHandler(config_entries.ConfigFlow, domain=DOMAIN):
    """Config flow for the CO2 Monitor integration.

    Creates one config entry per endpoint. The endpoint is stored in the
    entry's options, where all user settings live.
    """

    # Schema version -- increment and implement async_migrate_entry on changes
    VERSION = 1

    # Explicit domain attribute for tests referencing FlowHandler.domain
    domain = DOMAIN

    #
    # async_step_user
    #
    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Handle initial setup: ask for the endpoint URL."""

        schema = _build_schema_endpoint({})
        placeholders = {"payload_example": PAYLOAD_EXAMPLE}

        if user_input is None:
            return self.async_show_form(
                step_id="user",
                data_schema=schema,
                description_placeholders=placeholders,
            )

        errors = _validate_endpoint(user_input)
        if errors:
            return self.async_show_form(
                step_id="user",
                data_schema=self.add_suggested_values_to_schema(schema, user_input),
                errors=errors,
                description_placeholders=placeholders,
            )

        options = _normalize_input(user_input)

        # One entry per endpoint
        await self.async_set_unique_id(options[ConfKeys.ENDPOINT.value])
        self._abort_if_unique_id_configured()

        Log().info(f"Config flow completed for endpoint {options[ConfKeys.ENDPOINT.value]}")
        return self.async_create_entry(
            title=INTEGRATION_NAME,
            data={},
            options=options,
        )

    #
    # async_get_options_flow
    #
    @staticmethod
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> config_entries.OptionsFlow:
        """Create the options flow."""

        return OptionsFlowHandler(config_entry)


# ===========================================================================
# Options flow (post-setup configuration)
# ===========================================================================


#
# OptionsFlowHandler
#
class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handle post-setup configuration for the CO2 Monitor integration."""

    #
    # __init__
    #
    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        """Initialize options flow.

        Avoid assigning to OptionsFlow.config_entry directly to prevent
        frame-helper warnings in tests; keep a private reference instead.
        """

        self._config_entry = config_entry
        self._logger = Log(entry_id=config_entry.entry_id)

    #
    # _current_settings
    #
    def _current_settings(self) -> dict[str, Any]:
        """Return current option values as a plain dict."""

        return dict(self._config_entry.options) if self._config_entry.options else {}

    #
    # async_step_init
    #
    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Single step: change the endpoint URL."""

        defaults = self._current_settings()
        schema = _build_schema_endpoint(defaults)

        if user_input is None:
            return self.async_show_form(
                step_id="init",
                data_schema=self.add_suggested_values_to_schema(schema, defaults),
            )

        errors = _validate_endpoint(user_input)
        if not errors and self._endpoint_in_use(_normalize_input(user_input)[ConfKeys.ENDPOINT.value]):
            # One entry per endpoint
            errors[ConfKeys.ENDPOINT.value] = ERROR_ENDPOINT_IN_USE

        if errors:
            return self.async_show_form(
                step_id="init",
                data_schema=self.add_suggested_values_to_schema(schema, user_input),
                errors=errors,
            )

        merged = {**defaults, **_normalize_input(user_input)}
        new_endpoint = merged[ConfKeys.ENDPOINT.value]

        # The unique ID tracks the endpoint. Update it together with the options so
        # the update listener in __init__.py fires (and reloads) only once.
        if self._config_entry.unique_id != new_endpoint:
            self.hass.config_entries.async_update_entry(
                self._config_entry,
                unique_id=new_endpoint,
                options=merged,
            )

        self._logger.info(f"Options flow completed. Saving configuration: {merged}")
        return self.async_create_entry(title="", data=merged)

    #
    # _endpoint_in_use
    #
    def _endpoint_in_use(self, endpoint: str) -> bool:
        """Return True if another entry of this integration uses the endpoint."""

        return any(
            entry.unique_id == endpoint
            for entry in self.hass.config_entries.async_entries(DOMAIN)
            if entry.entry_id != self._config_entry.entry_id
        )
