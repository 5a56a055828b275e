"""Fetch, evaluate and assemble in one call."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Protocol

from .evaluator import evaluate
from .result import assemble
from .types import EvaluationResult, FeedText, SystemFacts

_LOGGER = logging.getLogger(__name__)


class FeedProvider(Protocol):
    """Anything that can hand over the current feed text."""

    async def fetch(self, deadline: float | None = None) -> FeedText:
        """Return the feed text, empty when unavailable."""


async def async_check_compatibility(
    facts: SystemFacts,
    fetcher: FeedProvider,
    deadline: float | None = None,
    lock: asyncio.Lock | None = None,
) -> EvaluationResult:
    """Run the whole pipeline for one machine and return its record.

    Args:
        facts: System version and model of the machine.
        fetcher: Source of the feed text.
        deadline: Event loop time by which the feed must be obtained. Time
            spent waiting for `lock` counts against it.
        lock: Serializes fetches sharing one cache directory.

    """
    async with lock or contextlib.nullcontext():
        feed = await fetcher.fetch(deadline)
    if feed.is_stale:
        _LOGGER.info("Evaluating %s against stale SOFA data", facts.model_identifier)

    verdict = evaluate(feed.body, facts.model_identifier)
    result = assemble(facts, verdict)
    _LOGGER.debug("Compatibility result: %s", result.as_row())
    return result
