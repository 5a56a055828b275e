"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from custom_components.macos_compatibility.helpers.cache_store import CacheStore
from custom_components.macos_compatibility.helpers.config_loader import FeedConfig


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside `async with`."""

    def __init__(self, status=200, body="", headers=None, error=None):
        self.status = status
        self._body = body
        self.headers = headers or {}
        self._error = error

    async def text(self):
        return self._body

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records GET calls and replays a canned response."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        return self.response


def build_feed(latest="15.0", models=None) -> str:
    """Return SOFA-shaped JSON text."""
    return json.dumps(
        {
            "UpdateHash": "abc123",
            "OSVersions": [
                {"OSVersion": latest, "Latest": {"ProductVersion": f"{latest}.1"}},
                {"OSVersion": "14", "Latest": {"ProductVersion": "14.7"}},
            ],
            "Models": models if models is not None else {},
        }
    )


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return a not yet existing cache directory."""
    return tmp_path / "sofa"


@pytest.fixture
def store(cache_dir: Path) -> CacheStore:
    """Return a cache store over a temporary directory."""
    return CacheStore(cache_dir)


@pytest.fixture
def feed_config(cache_dir: Path) -> FeedConfig:
    """Return feed settings pointing at the temporary cache."""
    return FeedConfig(url="https://feed.test/macos_data_feed.json", cache_dir=str(cache_dir), timeout=5.0)


@pytest.fixture
def fake_response():
    """Factory for canned responses."""
    return FakeResponse


@pytest.fixture
def fake_session():
    """Factory for recording sessions."""
    return FakeSession


@pytest.fixture
def feed_factory():
    """Factory for SOFA JSON documents."""
    return build_feed
