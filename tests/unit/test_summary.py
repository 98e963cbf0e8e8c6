"""Unit tests for the flat EDID summary."""

from __future__ import annotations

from edidparse import parse_bytes
from edidparse.summary import EdidSummary, summarize


class TestSummarize:
    """Test summary extraction from a decoded block."""

    def test_sample(self, sample_edid):
        summary = summarize(parse_bytes(sample_edid))
        assert summary.manufacturer == "APP"
        assert summary.product_code == 40994
        assert summary.product_code_hex == "A022"
        assert summary.manufacture_week == 4
        assert summary.manufacture_year == 2013
        assert summary.model_year is False
        assert summary.version == "1.4"
        assert summary.digital_input is True
        assert summary.monitor_name == "Color LCD"
        assert summary.monitor_serial is None
        assert summary.screen_size_cm == (33.0, 21.0)
        assert summary.preferred_mode == "2880x1800@59.99Hz"
        assert summary.extension_count == 0

    def test_no_size(self, build_edid):
        summary = summarize(parse_bytes(build_edid({21: 0, 22: 0})))
        assert summary.screen_size_cm is None

    def test_no_detailed_timing(self, build_edid):
        block = build_edid({54: bytes([0, 0, 0, 0x10]) + bytes(14)})
        assert summarize(parse_bytes(block)).preferred_mode is None

    def test_interlaced_preferred_mode(self, build_edid):
        dtd_1080i = bytes.fromhex("011d8018711c1620582c2500c48e2100009e")
        summary = summarize(parse_bytes(build_edid({54: dtd_1080i})))
        assert summary.preferred_mode == "1920x540i@60.05Hz"

    def test_json_round_trip(self, sample_edid):
        summary = summarize(parse_bytes(sample_edid))
        assert EdidSummary.model_validate_json(summary.model_dump_json()) == summary
