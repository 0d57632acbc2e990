"""Conftest for unit tests.

Provides a config entry pointing at a test endpoint and a coordinator built
from it. HTTP traffic goes through ``aioclient_mock`` so no real requests are
made; the coordinator's refresh timer is stopped on teardown.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.co2_monitor.const import DOMAIN, INTEGRATION_NAME
from custom_components.co2_monitor.coordinator import SensorStateCoordinator

# Endpoint used by all tests
ENDPOINT: str = "http://co2-sensor.local/api/reading"


#
# _make_entry
#
def _make_entry(options: dict[str, Any] | None = None) -> Any:
    """Create a MockConfigEntry with the test endpoint unless overridden."""

    from pytest_homeassistant_custom_component.common import MockConfigEntry

    return MockConfigEntry(
        domain=DOMAIN,
        title=INTEGRATION_NAME,
        data={},
        options={"endpoint": ENDPOINT} if options is None else options,
    )


@pytest.fixture
def config_entry(hass: HomeAssistant) -> Any:
    """Return a MockConfigEntry added to hass (not set up)."""

    entry = _make_entry()
    entry.add_to_hass(hass)
    return entry


@pytest.fixture
async def coordinator(
    hass: HomeAssistant,
    config_entry: Any,
    aioclient_mock: AiohttpClientMocker,  # noqa: ARG001
) -> AsyncGenerator[SensorStateCoordinator]:
    """Return a coordinator for the test entry; stops its timer afterwards."""

    coord = SensorStateCoordinator(hass, config_entry)
    yield coord
    coord.async_shutdown()
