"""
Tests for the compatibility decision over feed data.
"""

import json

import pytest

from custom_components.macos_compatibility.helpers.evaluator import (
    evaluate,
    parse_feed,
    substitute_virtual_model,
)
from custom_components.macos_compatibility.helpers.exceptions import (
    NoDataError,
    ParseError,
)
from custom_components.macos_compatibility.helpers.types import Compatibility


class TestParseFeed:
    """Tests for FeedDocument parsing."""

    def test_reads_latest_and_models(self, feed_factory):
        doc = parse_feed(feed_factory("15.0", {"Mac14,2": {"SupportedOS": ["15.0"]}}))
        assert doc.latest_os_version == "15.0"
        assert "Mac14,2" in doc.model_support

    def test_empty_text_is_no_data(self):
        with pytest.raises(NoDataError):
            parse_feed("")

    @pytest.mark.parametrize(
        "text",
        [
            "not json {{{",
            "[]",
            '{"Models": {}}',
            '{"OSVersions": [], "Models": {}}',
            '{"OSVersions": [{"OSVersion": 15}], "Models": {}}',
            '{"OSVersions": [{"OSVersion": "15"}]}',
            "[" * 200000 + "]" * 200000,
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(ParseError):
            parse_feed(text)


class TestVirtualMachineSubstitution:
    """Tests for VirtualMac mapping."""

    @pytest.mark.parametrize("model", ["VirtualMac2,1", "VirtualMac1,1", "xVirtualMacy"])
    def test_maps_to_reference(self, model):
        assert substitute_virtual_model(model) == "Macmini9,1"

    def test_idempotent(self):
        once = substitute_virtual_model("VirtualMac2,1")
        assert substitute_virtual_model(once) == once

    def test_physical_model_untouched(self):
        assert substitute_virtual_model("MacBookPro18,1") == "MacBookPro18,1"

    def test_case_sensitive(self):
        assert substitute_virtual_model("virtualmac2,1") == "virtualmac2,1"


class TestEvaluate:
    """Tests for the verdict."""

    def test_pass(self, feed_factory):
        text = feed_factory("15.0", {"Mac14,2": {"SupportedOS": ["15.0", "14.7"]}})
        verdict = evaluate(text, "Mac14,2")
        assert verdict.latest_os == "15.0"
        assert verdict.latest_compatible_os == "15.0"
        assert verdict.is_compatible is Compatibility.COMPATIBLE
        assert verdict.status == "Pass"

    def test_fail(self, feed_factory):
        text = feed_factory("15.0", {"MacBookPro18,1": {"SupportedOS": ["14.5", "14.4"]}})
        verdict = evaluate(text, "MacBookPro18,1")
        assert verdict.latest_compatible_os == "14.5"
        assert verdict.is_compatible is Compatibility.INCOMPATIBLE
        assert verdict.status == "Fail"

    def test_string_equality_only(self, feed_factory):
        text = feed_factory("15", {"Mac14,2": {"SupportedOS": ["15.0"]}})
        verdict = evaluate(text, "Mac14,2")
        assert verdict.is_compatible is Compatibility.INCOMPATIBLE
        assert verdict.status == "Fail"

    def test_unknown_model(self, feed_factory):
        verdict = evaluate(feed_factory("15.0", {"Mac14,2": {"SupportedOS": ["15.0"]}}), "iMac9,1")
        assert verdict.latest_compatible_os == "Unsupported"
        assert verdict.status == "Unsupported Hardware"
        assert verdict.is_compatible is Compatibility.INCOMPATIBLE

    def test_empty_supported_list(self, feed_factory):
        verdict = evaluate(feed_factory("15.0", {"iMac9,1": {"SupportedOS": []}}), "iMac9,1")
        assert verdict.latest_compatible_os == "Unsupported"
        assert verdict.status == "Unsupported Hardware"

    def test_model_keys_are_case_sensitive(self, feed_factory):
        verdict = evaluate(feed_factory("15.0", {"Mac14,2": {"SupportedOS": ["15.0"]}}), "mac14,2")
        assert verdict.status == "Unsupported Hardware"

    def test_unsupported_wins_over_equal_strings(self, feed_factory):
        verdict = evaluate(feed_factory("Unsupported", {}), "iMac9,1")
        assert verdict.is_compatible is Compatibility.COMPATIBLE
        assert verdict.status == "Unsupported Hardware"

    def test_virtual_mac_uses_reference_model(self, feed_factory):
        text = feed_factory("15.0", {"Macmini9,1": {"SupportedOS": ["15.0"]}})
        verdict = evaluate(text, "VirtualMac2,1")
        assert verdict.model_identifier == "Macmini9,1"
        assert verdict.status == "Pass"

    def test_empty_feed(self):
        verdict = evaluate("", "VirtualMac2,1")
        assert verdict.latest_os == "Unknown"
        assert verdict.latest_compatible_os == "Unknown"
        assert verdict.is_compatible is Compatibility.UNKNOWN
        assert verdict.status == "Could not obtain data"
        assert verdict.model_identifier == "VirtualMac2,1"

    def test_empty_feed_never_parsed(self, monkeypatch):
        def explode(*args, **kwargs):
            raise AssertionError("json.loads called")

        monkeypatch.setattr(json, "loads", explode)
        assert evaluate("", "Mac14,2").status == "Could not obtain data"

    def test_parse_error(self):
        verdict = evaluate("<html>gateway timeout</html>", "Mac14,2")
        assert verdict.latest_os == "Error"
        assert verdict.latest_compatible_os == "Error"
        assert verdict.is_compatible is Compatibility.UNKNOWN
        assert verdict.status.startswith("Error parsing data: ")
        assert len(verdict.status) > len("Error parsing data: ")

    def test_malformed_model_entry_is_parse_error(self, feed_factory):
        verdict = evaluate(feed_factory("15.0", {"Mac14,2": {"SupportedOS": [15]}}), "Mac14,2")
        assert verdict.status.startswith("Error parsing data: ")
        assert verdict.is_compatible is Compatibility.UNKNOWN

    @pytest.mark.parametrize(
        ("text", "model", "status"),
        [
            ("", "Mac14,2", "Could not obtain data"),
            ("{", "Mac14,2", "Error parsing data"),
            (None, "iMac9,1", "Unsupported Hardware"),
            (None, "Mac14,2", "Pass"),
        ],
    )
    def test_outcomes_are_exclusive(self, feed_factory, text, model, status):
        if text is None:
            text = feed_factory("15.0", {"Mac14,2": {"SupportedOS": ["15.0"]}})
        assert evaluate(text, model).status.startswith(status)

    def test_deeply_nested_feed_is_parse_error(self):
        depth = 200000
        verdict = evaluate("[" * depth + "]" * depth, "Mac14,2")
        assert verdict.is_compatible is Compatibility.UNKNOWN
        assert verdict.status.startswith("Error parsing data: ")
