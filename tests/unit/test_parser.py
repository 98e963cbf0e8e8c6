"""End-to-end tests for decoding a complete base block."""

from __future__ import annotations

import io

import pytest
from structlog.testing import capture_logs

from edidparse import (
    ByteSource,
    ChecksumError,
    DecodeOptions,
    EdidError,
    FormatError,
    SourceReadError,
    TruncatedError,
    block_checksum,
    parse,
    parse_bytes,
    parse_stream,
    verify_checksum,
)
from edidparse.models import (
    DigitalInput,
    DPMSFeatures,
    ImageSize,
    ManufacturerID,
    MonitorName,
    SeparateSync,
    Unused,
    Version,
)
from edidparse.types import DisplayType, EstablishedTiming, SyncPolarity


class _RecordingSource(ByteSource):
    """ByteSource that records every request."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.requests: list[int] = []

    def read_exact(self, size: int) -> bytes:
        self.requests.append(size)
        return self.data[:size]


class TestSampleBlock:
    """Decode the captured MacBook Pro panel block."""

    @pytest.fixture
    def edid(self, sample_edid):
        return parse_bytes(sample_edid)

    def test_product(self, edid):
        assert edid.product.manufacturer_id == ManufacturerID(code="APP", raw=0x0610)
        assert edid.product.product_code == 40994
        assert edid.product.serial_number == 0
        assert edid.product.manufacture_date.week == 4
        assert edid.product.manufacture_date.year == 2013

    def test_version(self, edid):
        assert edid.version == Version(1, 4)

    def test_display(self, edid):
        assert edid.display.input == DigitalInput(dfp_compatible=True)
        assert edid.display.max_size == ImageSize(width=33.0, height=21.0)
        assert edid.display.gamma == pytest.approx(2.2)
        assert edid.display.dpms == DPMSFeatures(
            standby_supported=False,
            suspend_supported=False,
            low_power_supported=False,
            display_type=DisplayType.MONOCHROME,
            default_srgb=False,
            preferred_timing_mode=True,
            default_gtf_supported=False,
        )

    def test_color(self, edid):
        assert edid.color.red == pytest.approx((0.6533, 0.3340), abs=1e-4)
        assert edid.color.green == pytest.approx((0.2998, 0.6201), abs=1e-4)
        assert edid.color.blue == pytest.approx((0.1465, 0.0498), abs=1e-4)
        assert edid.color.white == pytest.approx((0.3125, 0.3291), abs=1e-4)

    def test_timings(self, edid):
        assert edid.timings.established_timings == ()
        assert edid.timings.standard_timings == ()
        assert len(edid.timings.detailed_timings) == 1
        timing = edid.timings.detailed_timings[0]
        assert timing.pixel_clock == 337_750_000
        assert timing.active == (2880, 1800)
        assert timing.back_porch == (80, 43)
        assert timing.sync_type == SeparateSync(
            horizontal=SyncPolarity.POSITIVE, vertical=SyncPolarity.NEGATIVE
        )

    def test_descriptors(self, edid):
        assert edid.descriptors == (MonitorName("Color LCD"), Unused(), Unused())
        assert edid.extension_count == 0

    def test_convenience_properties(self, edid):
        assert edid.monitor_name == "Color LCD"
        assert edid.monitor_serial is None
        assert edid.preferred_timing is edid.timings.detailed_timings[0]

    def test_deterministic(self, sample_edid, edid):
        assert parse_bytes(sample_edid) == edid
        assert hash(parse_bytes(sample_edid)) == hash(edid)


class TestChecksum:
    """Test checksum computation and enforcement."""

    def test_sample_sums_to_zero(self, sample_edid):
        assert block_checksum(sample_edid) == 0
        verify_checksum(sample_edid)  # does not raise

    @pytest.mark.parametrize("bit", range(8))
    def test_flipped_checksum_bit(self, sample_edid, bit):
        block = bytearray(sample_edid)
        block[127] ^= 1 << bit
        with pytest.raises(ChecksumError) as exc_info:
            parse_bytes(bytes(block))
        assert exc_info.value.offset == 127
        assert exc_info.value.total in (1 << bit, 256 - (1 << bit))

    @pytest.mark.parametrize("offset", [8, 20, 54, 100, 126])
    def test_flipped_body_byte(self, sample_edid, offset):
        block = bytearray(sample_edid)
        block[offset] ^= 0x40
        with pytest.raises(ChecksumError, match="Checksum mismatch"):
            parse_bytes(bytes(block))

    def test_verification_disabled(self, sample_edid):
        block = bytearray(sample_edid)
        block[127] = 0
        with capture_logs() as logs:
            edid = parse_bytes(
                bytes(block), options=DecodeOptions(verify_checksum=False)
            )
        assert edid.monitor_name == "Color LCD"
        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert warnings[0]["event"] == "edid_checksum_mismatch"
        assert warnings[0]["checksum"] == "0x00"

    def test_is_edid_error(self):
        assert issubclass(ChecksumError, EdidError)


class TestHeader:
    """Test header rejection."""

    def test_bad_header(self, build_edid):
        with pytest.raises(FormatError) as exc_info:
            parse_bytes(build_edid({0: 0x01}))
        assert exc_info.value.offset == 0

    def test_header_checked_before_checksum(self, sample_edid):
        block = bytearray(sample_edid)
        block[3] = 0
        with pytest.raises(FormatError):
            parse_bytes(bytes(block))

    def test_all_zero_block(self):
        with pytest.raises(FormatError):
            parse_bytes(bytes(128))


class TestTruncation:
    """Test short inputs."""

    @pytest.mark.parametrize("length", [0, 1, 8, 64, 127])
    def test_short_buffer(self, sample_edid, length):
        with pytest.raises(TruncatedError) as exc_info:
            parse_bytes(sample_edid[:length])
        assert exc_info.value.expected == 128
        assert exc_info.value.received == length

    def test_every_short_length(self, sample_edid):
        for length in range(128):
            with pytest.raises(TruncatedError):
                parse_bytes(sample_edid[:length])

    def test_short_stream(self, sample_edid):
        with pytest.raises(TruncatedError):
            parse_stream(io.BytesIO(sample_edid[:100]))

    def test_truncated_is_source_error(self):
        assert issubclass(TruncatedError, SourceReadError)


class TestEntryPoints:
    """Test parse / parse_bytes / parse_stream."""

    def test_trailing_extension_ignored(self, sample_edid):
        assert parse_bytes(sample_edid + bytes(128)) == parse_bytes(sample_edid)

    def test_bytearray_and_memoryview(self, sample_edid):
        expected = parse_bytes(sample_edid)
        assert parse_bytes(bytearray(sample_edid)) == expected
        assert parse_bytes(memoryview(sample_edid)) == expected

    def test_stream(self, sample_edid):
        assert parse_stream(io.BytesIO(sample_edid)).monitor_name == "Color LCD"

    def test_source_read_once(self, sample_edid):
        source = _RecordingSource(sample_edid)
        parse(source)
        assert source.requests == [128]

    def test_extension_count(self, build_edid):
        assert parse_bytes(build_edid({126: 1})).extension_count == 1

    def test_standard_timings_merged(self, build_edid):
        fa = bytes([0, 0, 0, 0xFA, 0]) + bytes.fromhex("81800101010101010101" "0101") + b"\n"
        block = build_edid({38: b"\xd1\xc0", 90: fa})
        edid = parse_bytes(block)
        assert [t.horizontal_resolution for t in edid.timings.standard_timings] == [1920, 1280]

    def test_white_points_merged(self, build_edid):
        fb = bytes([0, 0, 0, 0xFB, 0, 1, 0, 0x50, 0x54, 120]) + bytes(5) + b"\n  "
        edid = parse_bytes(build_edid({108: fb}))
        assert len(edid.color.white_points) == 1
        assert edid.color.white_points[0].index == 1

    def test_established_timings(self, build_edid):
        edid = parse_bytes(build_edid({35: b"\x21\x08\x00"}))
        assert EstablishedTiming.H1024_V768_F60 in edid.timings.established_timings

    def test_permissive_version(self, build_edid):
        edid = parse_bytes(build_edid({18: 3, 19: 7}))
        assert edid.version == Version(3, 7)
