"""Binary sensor platform for co2_monitor.

Provides a single read-only binary sensor:

- **co2_detected**: On when the remote device reports an abnormal CO2 level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)

from .const import BINARY_SENSOR_KEY_CO2_DETECTED
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import SensorStateCoordinator
    from .data import IntegrationConfigEntry


# ---------------------------------------------------------------------------
# Binary sensor descriptions
# ---------------------------------------------------------------------------

BINARY_SENSOR_CO2_DETECTED = BinarySensorEntityDescription(
    key=BINARY_SENSOR_KEY_CO2_DETECTED,
    translation_key=BINARY_SENSOR_KEY_CO2_DETECTED,
    device_class=BinarySensorDeviceClass.GAS,
    icon="mdi:molecule-co2",
)


# ---------------------------------------------------------------------------
# Platform setup
# ---------------------------------------------------------------------------


#
# async_setup_entry
#
async def async_setup_entry(
    hass: HomeAssistant,  # noqa: ARG001
    entry: IntegrationConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Create all binary sensor entities for a config entry."""

    coordinator = entry.runtime_data.coordinator

    async_add_entities(
        [
            CO2DetectedBinarySensor(coordinator),
        ]
    )


# ---------------------------------------------------------------------------
# Binary sensor entity class
# ---------------------------------------------------------------------------


#
# CO2DetectedBinarySensor
#
class CO2DetectedBinarySensor(IntegrationEntity, BinarySensorEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Binary sensor that is on when the device reports CO2 detected."""

    #
    # __init__
    #
    def __init__(self, coordinator: SensorStateCoordinator) -> None:
        """Initialize the CO2 detected binary sensor.

        Args:
            coordinator: The coordinator owning the cached reading.
        """

        super().__init__(coordinator, BINARY_SENSOR_CO2_DETECTED)

    #
    # is_on
    #
    @property
    # BinarySensorEntity.is_on is a cached_property; we intentionally override
    # with a regular @property so it re-evaluates from the cache each access.
    def is_on(self) -> bool:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the cached CO2-detected flag."""

        return self.coordinator.read_co2_detected()
