"""Compose the output record from system facts and a verdict."""

from __future__ import annotations

from .types import EvaluationResult, SystemFacts, Verdict


def system_os_major(system_version: str) -> str:
    """Return the leading component of a dotted version (e.g. 14 from 14.5)."""
    return system_version.partition(".")[0]


def assemble(facts: SystemFacts, verdict: Verdict) -> EvaluationResult:
    """Build the single record for one evaluation."""
    return EvaluationResult(
        system_version=facts.system_version,
        system_os_major=system_os_major(facts.system_version),
        model_identifier=verdict.model_identifier,
        latest_macos=verdict.latest_os,
        latest_compatible_macos=verdict.latest_compatible_os,
        is_compatible=verdict.is_compatible,
        status=verdict.status,
    )
