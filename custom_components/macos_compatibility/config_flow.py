"""Configuration flow description."""

import logging

import voluptuous as vol

from homeassistant.config_entries import ConfigFlow

from .const import DOMAIN, INTEGRATION_DEFAULTS

_LOGGER = logging.getLogger(__name__)


def build_mac_schema(defaults: dict) -> vol.Schema:
    """Build form schema for a Mac reachable over SSH."""
    return vol.Schema(
        {
            vol.Required("name", default=defaults.get("name", "Mac")): str,
            vol.Required("host", default=defaults.get("host", "")): str,
            vol.Required(
                "username",
                default=defaults.get("username", INTEGRATION_DEFAULTS["username"]),
            ): str,
            vol.Required(
                "ssh_key_path",
                default=defaults.get(
                    "ssh_key_path", INTEGRATION_DEFAULTS["ssh_key_path"]
                ),
            ): str,
            vol.Required(
                "scan_interval_hours",
                default=defaults.get(
                    "scan_interval_hours", INTEGRATION_DEFAULTS["scan_interval_hours"]
                ),
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=168)),
        }
    )


class MacOSCompatibilityConfigFlow(ConfigFlow, domain=DOMAIN):
    """Configuration flow class."""

    VERSION = 1

    async def async_step_user(self, user_input=None):
        """Request Mac connection info."""
        if user_input is not None:
            host = user_input["host"].strip()
            await self.async_set_unique_id(host)
            self._abort_if_unique_id_configured()
            _LOGGER.debug("Create entry with data: %s", user_input)
            return self.async_create_entry(
                title=f"macOS Compatibility {user_input['name']}",
                data={**user_input, "host": host},
            )

        return self.async_show_form(
            step_id="user", data_schema=build_mac_schema({})
        )
