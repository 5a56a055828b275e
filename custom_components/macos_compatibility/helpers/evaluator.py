"""Compatibility decision over the SOFA feed.

Versions are compared as exact strings: "15.0" and "15" are different
releases here. Upstream works this way, so a model is compatible only when
its newest supported release is literally the newest published one.
"""

from __future__ import annotations

import json
import logging

from ..const import (
    STATUS_FAIL,
    STATUS_NO_DATA,
    STATUS_PARSE_ERROR,
    STATUS_PASS,
    STATUS_UNSUPPORTED,
    VERSION_ERROR,
    VERSION_UNKNOWN,
    VERSION_UNSUPPORTED,
    VIRTUAL_MAC_MARKER,
    VIRTUAL_MAC_REFERENCE_MODEL,
)
from .exceptions import NoDataError, ParseError
from .types import Compatibility, FeedDocument, Verdict

_LOGGER = logging.getLogger(__name__)


def substitute_virtual_model(model_identifier: str) -> str:
    """Map any virtualized Mac identifier onto the reference physical model."""
    if VIRTUAL_MAC_MARKER in model_identifier:
        return VIRTUAL_MAC_REFERENCE_MODEL
    return model_identifier


def parse_feed(text: str) -> FeedDocument:
    """Parse SOFA JSON into a FeedDocument.

    Only what the decision needs is validated: the first `OSVersions` entry
    and the `Models` mapping. Per model entries are checked lazily on lookup.

    Raises:
        NoDataError: If text is empty.
        ParseError: If text is not JSON or required fields are missing.

    """
    if not text:
        raise NoDataError("Empty feed")

    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as err:
        raise ParseError(str(err)) from err

    if not isinstance(raw, dict):
        raise ParseError("feed is not a JSON object")

    os_versions = raw.get("OSVersions")
    if not isinstance(os_versions, list) or not os_versions:
        raise ParseError("missing or empty 'OSVersions'")
    first = os_versions[0]
    latest = first.get("OSVersion") if isinstance(first, dict) else None
    if not isinstance(latest, str):
        raise ParseError("'OSVersions[0].OSVersion' is not a string")

    models = raw.get("Models")
    if not isinstance(models, dict):
        raise ParseError("missing 'Models' object")

    return FeedDocument(latest_os_version=latest, model_support=models)


def latest_supported_os(document: FeedDocument, model_identifier: str) -> str | None:
    """Return the newest release supported by a model, None if untracked.

    Raises:
        ParseError: If the model entry exists but is malformed.

    """
    entry = document.model_support.get(model_identifier)
    if entry is None:
        return None
    if not isinstance(entry, dict):
        raise ParseError(f"'Models.{model_identifier}' is not an object")

    supported = entry.get("SupportedOS") or []
    if not isinstance(supported, list):
        raise ParseError(f"'Models.{model_identifier}.SupportedOS' is not a list")
    if not supported:
        return None
    if not isinstance(supported[0], str):
        raise ParseError(f"'Models.{model_identifier}.SupportedOS[0]' is not a string")
    return supported[0]


def evaluate(feed_text: str, model_identifier: str) -> Verdict:
    """Decide whether a model runs the newest macOS published in the feed.

    Never raises: an empty feed and a malformed feed produce their own
    verdicts with `Compatibility.UNKNOWN`. The model identifier is only
    substituted once the feed has been parsed.
    """
    try:
        document = parse_feed(feed_text)
        model_identifier = substitute_virtual_model(model_identifier)
        latest_compatible = latest_supported_os(document, model_identifier)
    except NoDataError:
        return Verdict(
            latest_os=VERSION_UNKNOWN,
            latest_compatible_os=VERSION_UNKNOWN,
            is_compatible=Compatibility.UNKNOWN,
            status=STATUS_NO_DATA,
            model_identifier=model_identifier,
        )
    except ParseError as err:
        _LOGGER.error("Exception parsing SOFA data: %s", err)
        return Verdict(
            latest_os=VERSION_ERROR,
            latest_compatible_os=VERSION_ERROR,
            is_compatible=Compatibility.UNKNOWN,
            status=STATUS_PARSE_ERROR.format(cause=err),
            model_identifier=model_identifier,
        )

    latest = document.latest_os_version
    status = None
    if latest_compatible is None:
        latest_compatible = VERSION_UNSUPPORTED
        status = STATUS_UNSUPPORTED

    is_compatible = latest == latest_compatible
    if status is None:
        status = STATUS_PASS if is_compatible else STATUS_FAIL

    _LOGGER.debug(
        "Model %s: latest=%s latest_compatible=%s status=%s",
        model_identifier,
        latest,
        latest_compatible,
        status,
    )
    return Verdict(
        latest_os=latest,
        latest_compatible_os=latest_compatible,
        is_compatible=Compatibility.from_bool(is_compatible),
        status=status,
        model_identifier=model_identifier,
    )
