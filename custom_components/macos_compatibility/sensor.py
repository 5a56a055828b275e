"""Sensor declaration."""

import logging

from homeassistant.components.sensor import SensorEntity
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, get_device_info

_LOGGER = logging.getLogger(__name__)


class MacOSCompatibilitySensor(CoordinatorEntity, SensorEntity):
    """Exposes one column of the compatibility record."""

    def __init__(
        self,
        coordinator,
        device_name: str,
        name: str,
        key: str,
        entity_category: EntityCategory = None,
        icon: str | None = None,
    ) -> None:
        """Initialize sensor class."""
        super().__init__(coordinator)

        # device properties
        host = coordinator.host
        self._attr_device_info = get_device_info(device_name, host)

        # base entity properties
        self._key = key
        self._attr_name = f"{name} ({host})"
        self._attr_unique_id = f"{key}_{host}"
        self._attr_entity_category = entity_category
        self._attr_icon = icon

        _LOGGER.debug("%r", self)

    @property
    def native_value(self) -> str | None:
        """Return column value from the latest record."""
        if self.coordinator.data is None:
            return None
        return self.coordinator.data.as_row().get(self._key)

    def __repr__(self):
        """Represent the object."""
        return f"\nName: {self.name}\n\tKey: {self._key}"


async def async_setup_entry(hass: HomeAssistant, config_entry, async_add_entities):
    """Asyncronious entry setup."""
    coordinator = hass.data[DOMAIN][config_entry.entry_id]
    device_name = config_entry.data["name"]

    entities = [
        MacOSCompatibilitySensor(
            coordinator, device_name, "Status", "status", icon="mdi:apple"
        ),
        MacOSCompatibilitySensor(
            coordinator, device_name, "Latest macOS", "latest_macos"
        ),
        MacOSCompatibilitySensor(
            coordinator,
            device_name,
            "Latest compatible macOS",
            "latest_compatible_macos",
        ),
        MacOSCompatibilitySensor(
            coordinator, device_name, "System version", "system_version"
        ),
        MacOSCompatibilitySensor(
            coordinator,
            device_name,
            "Model identifier",
            "model_identifier",
            entity_category=EntityCategory.DIAGNOSTIC,
        ),
    ]
    async_add_entities(entities)
