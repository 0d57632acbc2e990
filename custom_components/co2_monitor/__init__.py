"""
Custom integration exposing a remote CO2 sensor endpoint to Home Assistant.

The integration polls an HTTP endpoint on a fixed interval, caches the most
recent valid reading, and serves it to a CO2 level sensor and a CO2 detected
binary sensor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.const import Platform
from homeassistant.loader import async_get_loaded_integration

from .config_flow import OptionsFlowHandler
from .const import DOMAIN, HA_OPTIONS, INTEGRATION_NAME
from .coordinator import SensorStateCoordinator
from .data import RuntimeData
from .log import Log

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .data import IntegrationConfigEntry

# List of platforms provided by this integration
PLATFORMS: list[Platform] = [
    Platform.BINARY_SENSOR,
    Platform.SENSOR,
]


#
# async_setup_entry
#
async def async_setup_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> bool:
    """Set up the CO2 Monitor integration from a config entry.

    This function is called by Home Assistant during:
    - Initial setup of the integration via the UI (after the user completes the config flow)
    - Integration reload (via UI or when config options change)
    - HA restart

    What this function does:
    - Creates the coordinator (which starts the refresh timer)
    - Stores runtime data on the entry
    - Sets up platforms
    - Sets up the reload listener

    No refresh is forced here: entities start with the default reading and
    the first fetch happens one refresh interval later.
    """

    logger = Log(entry_id=entry.entry_id)
    logger.info("Starting integration setup")

    coordinator: SensorStateCoordinator | None = None

    try:
        # Create the coordinator; stop its timer whenever the entry unloads
        coordinator = SensorStateCoordinator(hass, entry)
        entry.async_on_unload(coordinator.async_shutdown)

        # All user settings are stored in options
        config = dict(getattr(entry, HA_OPTIONS, {}) or {})

        # Store shared state
        entry.runtime_data = RuntimeData(
            integration=async_get_loaded_integration(hass, entry.domain),
            coordinator=coordinator,
            config=config,
        )

        # Call each platform's async_setup_entry()
        logger.debug(f"Setting up platforms: {PLATFORMS}")
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

        # Register the update listener
        entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    except (OSError, ValueError, TypeError) as err:
        # "Expected" errors: only log an error message
        logger.error(f"Failed to set up {INTEGRATION_NAME} integration: {err}")
        if coordinator is not None:
            coordinator.async_shutdown()
        return False
    except Exception as err:
        # "Unexpected" errors: log exception with stack trace
        logger.exception(f"Error during {INTEGRATION_NAME} setup: {err}")
        if coordinator is not None:
            coordinator.async_shutdown()
        return False
    else:
        logger.info(f"{INTEGRATION_NAME} integration setup completed")
        return True


#
# async_get_options_flow
#
async def async_get_options_flow(entry: IntegrationConfigEntry) -> OptionsFlowHandler:
    """Return the options flow for this handler.

    This function is called by Home Assistant when:
    - The user clicks the gear icon to bring up the integration's options dialog.
    """

    return OptionsFlowHandler(entry)


#
# async_unload_entry
#
async def async_unload_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> bool:
    """Handle removal of an entry.

    The coordinator's timer is stopped by the unload callback registered
    during setup.
    """

    logger = Log(entry_id=entry.entry_id)
    logger.info(f"Unloading {INTEGRATION_NAME} integration")

    try:
        result = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
        return result
    except (OSError, ValueError, TypeError) as err:
        # "Expected" errors: only log an error message
        logger.error(f"Error unloading {INTEGRATION_NAME} integration: {err}")
        return False
    except Exception as err:
        # "Unexpected" errors: log exception with stack trace
        logger.exception(f"Error unloading {INTEGRATION_NAME} integration: {err}")
        return False


#
# async_reload_entry
#
async def async_reload_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> None:
    """Reload the config entry after its options changed.

    The refresh interval is fixed and the endpoint is bound to the fetcher at
    construction, so every options change needs a full reload.
    """

    logger = Log(entry_id=entry.entry_id)

    if hasattr(entry, "runtime_data") and entry.runtime_data:
        old_config = entry.runtime_data.config
        new_config = dict(getattr(entry, HA_OPTIONS, {}) or {})

        changed_keys = {key for key in set(old_config.keys()) | set(new_config.keys()) if old_config.get(key) != new_config.get(key)}
        if changed_keys:
            changes = ", ".join(f"{key}={new_config.get(key)}" for key in sorted(changed_keys))
            logger.info(f"Settings change detected ({changes})")

    logger.info(f"Reloading {INTEGRATION_NAME} integration")
    await hass.config_entries.async_reload(entry.entry_id)


# Re-export common package-level symbols for convenience imports in tooling/tests
__all__ = [
    "DOMAIN",
    "PLATFORMS",
    "async_setup_entry",
    "async_unload_entry",
    "async_reload_entry",
]
