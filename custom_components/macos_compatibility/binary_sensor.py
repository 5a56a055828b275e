"""Binary sensor declaration."""

import logging

from homeassistant.components.binary_sensor import BinarySensorEntity
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, get_device_info
from .helpers.types import Compatibility

_LOGGER = logging.getLogger(__name__)


class MacOSCompatibleBinarySensor(CoordinatorEntity, BinarySensorEntity):
    """On when the Mac supports the newest published macOS."""

    def __init__(self, coordinator, device_name: str) -> None:
        """Initialize binary sensor class."""
        super().__init__(coordinator)

        host = coordinator.host
        self._attr_device_info = get_device_info(device_name, host)
        self._attr_name = f"Compatible ({host})"
        self._attr_unique_id = f"is_compatible_{host}"
        self._attr_icon = "mdi:apple"

    @property
    def is_on(self) -> bool | None:
        """Return verdict; unknown when the feed could not be used."""
        if self.coordinator.data is None:
            return None
        verdict = self.coordinator.data.is_compatible
        if verdict is Compatibility.UNKNOWN:
            return None
        return verdict is Compatibility.COMPATIBLE

    @property
    def extra_state_attributes(self) -> dict[str, str]:
        """Expose the whole record."""
        if self.coordinator.data is None:
            return {}
        return self.coordinator.data.as_row()


async def async_setup_entry(hass: HomeAssistant, config_entry, async_add_entities):
    """Asyncronious entry setup."""
    coordinator = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities(
        [MacOSCompatibleBinarySensor(coordinator, config_entry.data["name"])]
    )
