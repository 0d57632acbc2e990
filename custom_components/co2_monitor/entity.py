"""Base entity for co2_monitor.

Entities do not poll. They read their value from the coordinator's cache
(pull) and write their state when the coordinator pushes a new value for
their field.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity, EntityDescription

from .const import DEVICE_MANUFACTURER, DEVICE_MODEL, DOMAIN

if TYPE_CHECKING:
    from .coordinator import SensorStateCoordinator


#
# IntegrationEntity
#
class IntegrationEntity(Entity):
    """Common base for all co2_monitor entities."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    #
    # __init__
    #
    def __init__(
        self,
        coordinator: SensorStateCoordinator,
        entity_description: EntityDescription,
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: The coordinator owning the cached reading.
            entity_description: Descriptor; its key is also the push key.
        """

        self.coordinator = coordinator
        self.entity_description = entity_description

        entry = coordinator.config_entry
        self._attr_unique_id = f"{entry.entry_id}_{entity_description.key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer=DEVICE_MANUFACTURER,
            model=DEVICE_MODEL,
            serial_number=entry.entry_id,
            configuration_url=coordinator.endpoint,
        )

    #
    # async_added_to_hass
    #
    async def async_added_to_hass(self) -> None:
        """Subscribe to pushes for this entity's field."""

        await super().async_added_to_hass()
        self.async_on_remove(
            self.coordinator.async_add_listener(
                self._handle_value_pushed,
                self.entity_description.key,
            )
        )

    #
    # _handle_value_pushed
    #
    @callback
    def _handle_value_pushed(self, value: Any) -> None:  # noqa: ARG002
        """Write the new state; the value itself is read back from the cache."""

        self.async_write_ha_state()
