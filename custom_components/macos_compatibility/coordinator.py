"""Coordinator that runs the compatibility pipeline for one Mac."""

from __future__ import annotations

from datetime import timedelta
import logging
from typing import TYPE_CHECKING

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .const import DOMAIN, FETCH_DEADLINE, INTEGRATION_DEFAULTS
from .helpers.compatibility import async_check_compatibility
from .helpers.ssh_client import MacSSH
from .helpers.types import EvaluationResult

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


class MacOSCompatibilityCoordinator(DataUpdateCoordinator[EvaluationResult]):
    """Reads system facts over SSH and evaluates them against the SOFA feed.

    The feed fetcher is shared by all entries and guarded by a lock, so only
    one fetch touches the cache directory at a time.
    """

    def __init__(self, hass: HomeAssistant, config_entry: ConfigEntry) -> None:
        """Initialize the coordinator for the Mac configured in the entry."""
        data = config_entry.data
        hours = data.get("scan_interval_hours", INTEGRATION_DEFAULTS["scan_interval_hours"])
        super().__init__(
            hass=hass,
            logger=_LOGGER,
            name=f"{DOMAIN}-{data['host']}",
            update_interval=timedelta(hours=hours),
            config_entry=config_entry,
        )
        self.host = data["host"]
        self._ssh = MacSSH(
            data["host"],
            hass.config.path(data.get("ssh_key_path", INTEGRATION_DEFAULTS["ssh_key_path"])),
            username=data.get("username", INTEGRATION_DEFAULTS["username"]),
        )
        self._fetcher = hass.data[DOMAIN]["fetcher"]
        self._fetch_lock = hass.data[DOMAIN]["fetch_lock"]

    async def _async_update_data(self) -> EvaluationResult:
        """Produce a fresh EvaluationResult.

        Feed problems never fail the update: they end up in the record. Only
        missing system facts do, as there is nothing to evaluate then.
        """
        facts = await self._ssh.async_get_system_facts()
        if facts is None:
            raise UpdateFailed(f"Failed to get system facts from {self.host}")

        deadline = self.hass.loop.time() + FETCH_DEADLINE
        result = await async_check_compatibility(
            facts, self._fetcher, deadline=deadline, lock=self._fetch_lock
        )

        _LOGGER.debug("Coordinator data for %s: %s", self.host, result.as_row())
        return result
