"""Initialize macOS Compatibility integration."""

from __future__ import annotations

import asyncio
from functools import partial
import logging
from typing import TYPE_CHECKING

from .const import DOMAIN
from .helpers.config_loader import load_feed_config
from .helpers.feed_fetcher import SofaFeedFetcher

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [
    "binary_sensor",
    "sensor",
]

FEED_CONFIG_FILE = "macos_compatibility.yaml"


async def async_setup(hass: HomeAssistant, config) -> bool:
    """Prepare shared state.

    Stores the following structure in hass.data[DOMAIN]:
      - "fetcher": shared SofaFeedFetcher; set up by the first entry
      - "fetch_lock": serializes fetches against the cache directory
    """
    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN].setdefault("fetch_lock", asyncio.Lock())
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the shared feed fetcher and a coordinator for this Mac."""
    # Home Assistant is only imported once an entry is set up, the helpers
    # package stays importable without it.
    from homeassistant.helpers.aiohttp_client import async_get_clientsession

    from .coordinator import MacOSCompatibilityCoordinator

    entry.async_on_unload(entry.add_update_listener(_on_entry_update))

    domain_data = hass.data.setdefault(DOMAIN, {})
    domain_data.setdefault("fetch_lock", asyncio.Lock())

    if "fetcher" not in domain_data:
        feed_config = await hass.async_add_executor_job(
            partial(
                load_feed_config,
                hass.config.path(FEED_CONFIG_FILE),
                cache_dir=hass.config.path("sofa"),
            )
        )
        _LOGGER.debug("Feed config: %s", feed_config)
        domain_data["fetcher"] = SofaFeedFetcher(
            feed_config, session=async_get_clientsession(hass)
        )

    coordinator = MacOSCompatibilityCoordinator(hass, entry)
    await coordinator.async_config_entry_first_refresh()
    domain_data[entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id, None)
    return unload_ok


async def _on_entry_update(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload on any change."""
    await hass.config_entries.async_reload(entry.entry_id)
