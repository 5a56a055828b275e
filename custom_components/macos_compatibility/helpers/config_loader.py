"""Provide feed settings with optional overrides from YAML."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
from pathlib import Path

import yaml

from ..const import CACHE_DIR, REQUEST_TIMEOUT, SOFA_URL, USER_AGENT
from .exceptions import ConfigError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Where the feed lives, how to ask for it and where to cache it."""

    url: str = SOFA_URL
    user_agent: str = USER_AGENT
    cache_dir: str = CACHE_DIR
    timeout: float = REQUEST_TIMEOUT


def load_feed_config(config_path: str | Path, **defaults) -> FeedConfig:
    """Load feed configuration from a YAML file.

    Keys in the file mirror FeedConfig fields. A missing file yields the
    defaults. Keyword defaults replace the built-in ones; values from the
    file win over both.

    Raises:
        ConfigError: If the file is not valid YAML, is not a mapping, holds
            unknown keys or a non-positive timeout.

    """
    config_path = Path(config_path)
    try:
        with config_path.open("r", encoding="utf-8") as file:
            raw = yaml.safe_load(file) or {}
    except FileNotFoundError:
        _LOGGER.debug("Feed config not found at %s, using defaults", config_path)
        raw = {}
    except yaml.YAMLError as err:
        _LOGGER.error("Error parsing YAML from %s: %s", config_path, err)
        raise ConfigError(f"Invalid YAML in {config_path}") from err
    except OSError as err:
        raise ConfigError(f"Error loading config from {config_path}") from err

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    values = {key: value for key, value in defaults.items() if value is not None}
    values.update(raw)
    return build_feed_config(values)


def build_feed_config(values: dict) -> FeedConfig:
    """Validate a plain mapping and turn it into FeedConfig."""
    known = {f.name for f in fields(FeedConfig)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown feed config keys: {', '.join(sorted(unknown))}")

    config = replace(FeedConfig(), **values)
    try:
        timeout = float(config.timeout)
    except (TypeError, ValueError) as err:
        raise ConfigError(f"Invalid timeout: {config.timeout!r}") from err
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout}")
    return replace(config, timeout=timeout, cache_dir=str(config.cache_dir))
