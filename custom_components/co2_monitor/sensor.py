"""Sensor platform for co2_monitor.

Provides a single read-only sensor:

- **co2_level**: CO2 concentration in ppm, served from the coordinator cache.
  Extra attributes show when the cache was last refreshed and the kind of
  the most recent refresh error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import CONCENTRATION_PARTS_PER_MILLION

from .const import ATTR_LAST_ERROR, ATTR_LAST_UPDATED, SENSOR_KEY_CO2_LEVEL
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import SensorStateCoordinator
    from .data import IntegrationConfigEntry


# ---------------------------------------------------------------------------
# Sensor descriptions
# ---------------------------------------------------------------------------

SENSOR_CO2_LEVEL = SensorEntityDescription(
    key=SENSOR_KEY_CO2_LEVEL,
    translation_key=SENSOR_KEY_CO2_LEVEL,
    native_unit_of_measurement=CONCENTRATION_PARTS_PER_MILLION,
    device_class=SensorDeviceClass.CO2,
    state_class=SensorStateClass.MEASUREMENT,
    suggested_display_precision=0,
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
    """Create all sensor entities for a config entry."""

    coordinator = entry.runtime_data.coordinator

    async_add_entities(
        [
            CO2LevelSensor(coordinator),
        ]
    )


# ---------------------------------------------------------------------------
# Sensor entity class
# ---------------------------------------------------------------------------


#
# CO2LevelSensor
#
class CO2LevelSensor(IntegrationEntity, SensorEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """CO2 level sensor backed by the coordinator cache."""

    #
    # __init__
    #
    def __init__(self, coordinator: SensorStateCoordinator) -> None:
        """Initialize the CO2 level sensor.

        Args:
            coordinator: The coordinator owning the cached reading.
        """

        super().__init__(coordinator, SENSOR_CO2_LEVEL)

    #
    # native_value
    #
    @property
    def native_value(self) -> float:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the cached CO2 level."""

        return self.coordinator.read_co2_level()

    #
    # extra_state_attributes
    #
    @property
    def extra_state_attributes(self) -> dict[str, Any]:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return when the cache was last refreshed and the last error kind."""

        cache = self.coordinator.cache_entry
        last_updated = cache.last_updated_at.isoformat() if cache.last_updated_at else None
        last_error = str(cache.last_error) if cache.last_error else None

        return {
            ATTR_LAST_UPDATED: last_updated,
            ATTR_LAST_ERROR: last_error,
        }
