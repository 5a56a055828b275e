"""Typed helpers for pipeline payloads (dataclasses, no TypedDict)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Compatibility(Enum):
    """Tri-state compatibility verdict, valued with its row encoding."""

    COMPATIBLE = "1"
    INCOMPATIBLE = "0"
    UNKNOWN = "-1"

    @classmethod
    def from_bool(cls, value: bool) -> Compatibility:
        """Map a plain equality result onto the verdict."""
        return cls.COMPATIBLE if value else cls.INCOMPATIBLE


class FeedSource(Enum):
    """Where the feed text handed to the evaluator came from."""

    NETWORK = "network"
    NOT_MODIFIED = "not_modified"
    STALE = "stale"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class SystemFacts:
    """Snapshot of the host supplied by an external collaborator."""

    system_version: str
    model_identifier: str


@dataclass(frozen=True, slots=True)
class CachedFeed:
    """Last known feed body and validator token; empty means never written."""

    body: str = ""
    validator: str = ""


@dataclass(frozen=True, slots=True)
class FeedText:
    """Raw feed document produced by the fetcher."""

    body: str = ""
    source: FeedSource = FeedSource.NONE

    @property
    def is_stale(self) -> bool:
        """Return True when the body is an outdated cached copy."""
        return self.source is FeedSource.STALE

    def __bool__(self) -> bool:
        return bool(self.body)


@dataclass(frozen=True, slots=True)
class FeedDocument:
    """Parsed SOFA feed: newest macOS and raw `Models` entries by identifier."""

    latest_os_version: str
    model_support: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Verdict:
    """Evaluator output for one model."""

    latest_os: str
    latest_compatible_os: str
    is_compatible: Compatibility
    status: str
    model_identifier: str


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Single output record of a compatibility check."""

    system_version: str
    system_os_major: str
    model_identifier: str
    latest_macos: str
    latest_compatible_macos: str
    is_compatible: Compatibility
    status: str

    def as_row(self) -> dict[str, str]:
        """Return the record keyed by column name, every value a string."""
        return {
            "system_version": self.system_version,
            "system_os_major": self.system_os_major,
            "model_identifier": self.model_identifier,
            "latest_macos": self.latest_macos,
            "latest_compatible_macos": self.latest_compatible_macos,
            "is_compatible": self.is_compatible.value,
            "status": self.status,
        }
