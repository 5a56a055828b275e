"""Filesystem cache for the last known SOFA feed body and its ETag."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile

from ..const import BODY_FILE, CACHE_DIR, CACHE_DIR_MODE, VALIDATOR_FILE
from .exceptions import StorageError
from .types import CachedFeed

_LOGGER = logging.getLogger(__name__)

BODY = "body"
VALIDATOR = "validator"

_FILES = {
    BODY: BODY_FILE,
    VALIDATOR: VALIDATOR_FILE,
}


class CacheStore:
    """Two-slot artifact store under a single directory.

    A slot that was never written reads back as an empty string. Writes go
    through a temp file in the same directory and a rename, so a reader sees
    either the old value or the new one.

    No locking: one writer per cache directory at a time.
    """

    def __init__(self, cache_dir: str | Path = CACHE_DIR) -> None:
        """Initialize store rooted at cache_dir."""
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        """Return the file backing a slot."""
        try:
            return self.cache_dir / _FILES[key]
        except KeyError:
            raise KeyError(f"Unknown cache artifact: {key!r}") from None

    def ensure_directory(self) -> None:
        """Create the cache directory if it does not exist yet."""
        if self.cache_dir.is_dir():
            return
        try:
            self.cache_dir.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as err:
            _LOGGER.error("Failed to create cache directory %s: %s", self.cache_dir, err)
            raise StorageError(
                f"Failed to create cache directory {self.cache_dir}"
            ) from err
        _LOGGER.debug("Created cache directory %s", self.cache_dir)

    def read_artifact(self, key: str) -> str:
        """Return stored content of a slot, or "" if it was never written."""
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as err:
            raise StorageError(f"Failed to read {path}") from err

    def write_artifact(self, key: str, content: str) -> None:
        """Replace the content of a slot."""
        path = self.path_for(key)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.cache_dir, prefix=f".{path.stem}_", suffix=".tmp"
            )
        except OSError as err:
            raise StorageError(f"Failed to write {path}") from err

        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                file.write(content)
            os.replace(tmp, path)
        except OSError as err:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}") from err
        _LOGGER.debug("Cached %s (%d chars) at %s", key, len(content), path)

    def load(self) -> CachedFeed:
        """Return both slots as a snapshot."""
        return CachedFeed(
            body=self.read_artifact(BODY),
            validator=self.read_artifact(VALIDATOR),
        )
