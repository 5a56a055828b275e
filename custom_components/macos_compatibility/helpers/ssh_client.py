"""SSH utils."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
import shlex

import asyncssh

from .types import SystemFacts

_LOGGER = logging.getLogger(__name__)
logging.getLogger("asyncssh").setLevel(logging.WARNING)

SW_VERS_COMMAND = "sw_vers -productVersion"
HW_MODEL_COMMAND = "sysctl -n hw.model"


class MacSSH:
    """Async SSH client wrapper around asyncssh reading facts from a Mac.

    Usage:
        facts = await MacSSH("10.0.0.5", "/config/ssh_keys/id_ed25519").async_get_system_facts()
    """

    def __init__(
        self,
        host: str,
        key_path: str,
        username: str = "admin",
        connect_timeout: float = 5.0,
        command_timeout: float | None = 5.0,
    ) -> None:
        """Initialize wrapper."""
        self.host = host
        self.key_path = key_path
        self.username = username
        self.connect_timeout = connect_timeout
        self.command_timeout = command_timeout
        self.conn: asyncssh.SSHClientConnection | None = None

    async def __aenter__(self) -> MacSSH:
        """Open SSH connection when entering async context."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        """Close SSH connection when leaving async context."""
        await self.close()

    async def connect(self) -> None:
        """Establish SSH connection if it is not already open.

        Raises:
            TimeoutError, asyncssh.Error, OSError: If the Mac is unreachable.

        """
        if self.conn is not None:
            return
        _LOGGER.debug("Trying to connect to %s@%s", self.username, self.host)

        client_keys: list | None = None
        key_file = Path(self.key_path)
        if key_file.exists():
            key_text = await asyncio.to_thread(key_file.read_text)
            client_keys = [asyncssh.import_private_key(key_text)]
        else:
            _LOGGER.warning(
                "SSH key not found at %s; attempting agent/defaults", self.key_path
            )
        try:
            self.conn = await asyncssh.connect(
                host=self.host,
                username=self.username,
                client_keys=client_keys,
                known_hosts=None,
                connect_timeout=self.connect_timeout,
            )
        except (TimeoutError, asyncssh.Error, OSError) as exc:
            _LOGGER.warning("SSH connect to %s failed: %s", self.host, exc)
            self.conn = None
            raise
        _LOGGER.debug("Successfully connected to %s@%s", self.username, self.host)

    async def exec_command(self, command: str) -> str | None:
        """Run a remote command with a hard timeout; return stripped stdout.

        Returns None when the command times out or exits non-zero.
        """
        if self.conn is None:
            await self.connect()

        _LOGGER.debug("Executing SSH command on %s | %s", self.host, command)
        try:
            result = await asyncio.wait_for(
                self.conn.run(f"sh -c {shlex.quote(command)}"), self.command_timeout
            )
        except TimeoutError:
            _LOGGER.warning("SSH command timed out on %s: %s", self.host, command)
            return None

        if result.exit_status != 0:
            _LOGGER.error(
                "Command %s failed on %s: %s | %s",
                command,
                self.host,
                result.exit_status,
                result.stderr,
            )
            return None
        return _first_line(result.stdout)

    async def close(self) -> None:
        """Close the SSH connection."""
        if self.conn is None:
            return
        try:
            self.conn.close()
            await self.conn.wait_closed()
        finally:
            self.conn = None

    async def async_get_system_facts(self) -> SystemFacts | None:
        """Read product version and hardware model; None if unavailable."""
        try:
            async with self:
                version = await self.exec_command(SW_VERS_COMMAND)
                model = await self.exec_command(HW_MODEL_COMMAND)
        except (TimeoutError, asyncssh.Error, OSError) as exc:
            _LOGGER.debug("System facts over SSH failed for %s: %s", self.host, exc)
            return None

        if not version or not model:
            _LOGGER.error(
                "Incomplete system facts from %s: version=%r model=%r",
                self.host,
                version,
                model,
            )
            return None
        return SystemFacts(system_version=version, model_identifier=model)


def _first_line(text: str | bytes | None) -> str | None:
    """Return the first non-empty line from text, or None."""
    if not text:
        return None
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    for line in text.splitlines():
        s = line.strip()
        if s:
            return s
    return None
