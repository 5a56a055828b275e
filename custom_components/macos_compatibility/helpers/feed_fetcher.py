"""Conditional fetch of the SOFA feed with a filesystem cache fallback."""

from __future__ import annotations

import asyncio
import logging

import aiohttp
from aiohttp import ClientTimeout

from .cache_store import BODY, VALIDATOR, CacheStore
from .config_loader import FeedConfig
from .exceptions import NetworkError, StorageError
from .types import CachedFeed, FeedSource, FeedText

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_NOT_MODIFIED = 304


class SofaFeedFetcher:
    """Fetches the SOFA feed using the cached ETag as a precondition.

    Exactly one request is made per `fetch()`. Whatever goes wrong, the caller
    gets a FeedText: fresh body, cached body (304 or stale fallback) or an
    empty one when nothing is available.

    Usage:
        async with aiohttp.ClientSession() as session:
            fetcher = SofaFeedFetcher(FeedConfig(), session=session)
            feed = await fetcher.fetch()
    """

    def __init__(
        self,
        config: FeedConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        store: CacheStore | None = None,
    ) -> None:
        """Initialize fetcher; without a session one is opened per fetch."""
        self.config = config or FeedConfig()
        self.store = store or CacheStore(self.config.cache_dir)
        self._session = session

    async def fetch(self, deadline: float | None = None) -> FeedText:
        """Return the feed text from the network or the cache.

        Args:
            deadline: Optional event loop time after which the request is
                abandoned and the cached copy is used instead.

        """
        try:
            await asyncio.to_thread(self.store.ensure_directory)
        except StorageError as err:
            _LOGGER.error("Cache unavailable, not fetching SOFA feed: %s", err)
            return FeedText()

        cached = await self._load_cache()

        # Conditional only when a cached body can answer a 304.
        validator = cached.validator if cached.body else ""
        try:
            status, body, etag = await self._request(validator, deadline)
        except NetworkError as err:
            _LOGGER.warning("SOFA feed request failed: %s", err)
            return self._fallback(cached, reason=str(err))

        if status == HTTP_NOT_MODIFIED:
            _LOGGER.info("Using cached SOFA json (304 Not Modified)")
            return FeedText(cached.body, FeedSource.NOT_MODIFIED)

        if status == HTTP_OK:
            await self._save(body, etag)
            return FeedText(body, FeedSource.NETWORK)

        return self._fallback(cached, reason=f"HTTP {status}")

    async def _load_cache(self) -> CachedFeed:
        """Read cached artifacts; unreadable cache counts as empty."""
        try:
            return await asyncio.to_thread(self.store.load)
        except StorageError as err:
            _LOGGER.error("Failed to read SOFA cache: %s", err)
            return CachedFeed()

    async def _save(self, body: str, etag: str | None) -> None:
        """Persist a fresh body, then its ETag."""
        try:
            await asyncio.to_thread(self.store.write_artifact, BODY, body)
            if etag:
                await asyncio.to_thread(self.store.write_artifact, VALIDATOR, etag)
        except StorageError as err:
            _LOGGER.error("Failed to cache SOFA json: %s", err)

    async def _request(
        self, validator: str, deadline: float | None
    ) -> tuple[int, str, str | None]:
        """Send the conditional GET and return (status, body, etag)."""
        timeout = self.config.timeout
        if deadline is not None:
            remaining = deadline - asyncio.get_running_loop().time()
            if remaining <= 0:
                raise NetworkError("deadline expired before request")
            timeout = min(timeout, remaining)

        headers = {"User-Agent": self.config.user_agent}
        if validator:
            headers["If-None-Match"] = validator

        _LOGGER.debug(
            "GET %s | timeout=%.1fs conditional=%s",
            self.config.url,
            timeout,
            bool(validator),
        )
        try:
            if self._session is not None:
                return await self._get(self._session, headers, timeout)
            async with aiohttp.ClientSession() as session:
                return await self._get(session, headers, timeout)
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as err:
            raise NetworkError(f"{type(err).__name__}: {err}") from err

    async def _get(
        self, session: aiohttp.ClientSession, headers: dict[str, str], timeout: float
    ) -> tuple[int, str, str | None]:
        """Perform the request on a given session."""
        async with session.get(
            self.config.url, headers=headers, timeout=ClientTimeout(total=timeout)
        ) as resp:
            body = await resp.text() if resp.status == HTTP_OK else ""
            return resp.status, body, resp.headers.get("ETag")

    @staticmethod
    def _fallback(cached: CachedFeed, reason: str) -> FeedText:
        """Return the cached body as stale data, or nothing."""
        if cached.body:
            _LOGGER.warning(
                "Failed to fetch new data (%s), using cached data", reason
            )
            return FeedText(cached.body, FeedSource.STALE)
        _LOGGER.error(
            "Failed to fetch SOFA data (%s) and no cache available", reason
        )
        return FeedText()
