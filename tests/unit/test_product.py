"""Unit tests for header, version and product identification decoding."""

from __future__ import annotations

import pytest

from edidparse.exceptions import FormatError
from edidparse.models import Version
from edidparse.product import (
    check_header,
    parse_manufacture_date,
    parse_manufacturer_id,
    parse_product_information,
    parse_version,
)


class TestHeader:
    """Test the fixed 8-byte header check."""

    def test_valid_header(self, sample_edid):
        check_header(sample_edid)  # does not raise

    @pytest.mark.parametrize("index", range(8))
    def test_any_corrupt_byte_rejected(self, sample_edid, index):
        block = bytearray(sample_edid)
        block[index] ^= 0x01
        with pytest.raises(FormatError, match="Invalid EDID header") as exc_info:
            check_header(bytes(block))
        assert exc_info.value.offset == 0


class TestManufacturerID:
    """Test 3-letter PNP ID decoding."""

    def test_apple(self):
        mid = parse_manufacturer_id(b"\x06\x10")
        assert mid.code == "APP"
        assert mid.raw == 0x0610
        assert str(mid) == "APP"

    def test_dell(self):
        # D=4, E=5, L=12 -> 0b0_00100_00101_01100 = 0x10AC
        assert parse_manufacturer_id(b"\x10\xac").code == "DEL"

    def test_abc(self):
        word = (1 << 10) | (2 << 5) | 3
        mid = parse_manufacturer_id(word.to_bytes(2, "big"))
        assert mid.code == "ABC"

    def test_reserved_bit_ignored(self):
        assert parse_manufacturer_id(b"\x86\x10").code == "APP"


class TestManufactureDate:
    """Test week/year decoding."""

    def test_week_and_year(self):
        date = parse_manufacture_date(4, 23)
        assert date.week == 4
        assert date.year == 2013
        assert date.is_model_year is False

    def test_model_year(self):
        date = parse_manufacture_date(0xFF, 30)
        assert date.year == 2020
        assert date.is_model_year is True

    def test_unspecified_week(self):
        assert parse_manufacture_date(0, 0).year == 1990


class TestProductInformation:
    """Test bytes 8-17 as a whole."""

    def test_sample(self, sample_edid):
        info = parse_product_information(sample_edid)
        assert info.manufacturer_id.code == "APP"
        assert info.product_code == 40994
        assert info.serial_number == 0
        assert info.manufacture_date.week == 4
        assert info.manufacture_date.year == 2013

    def test_serial_little_endian(self, build_edid):
        block = build_edid({12: b"\x78\x56\x34\x12"})
        assert parse_product_information(block).serial_number == 0x12345678


class TestVersion:
    """Test version/revision bytes."""

    def test_sample(self, sample_edid):
        version = parse_version(sample_edid)
        assert version == Version(1, 4)
        assert str(version) == "1.4"

    def test_unknown_version_kept(self, build_edid):
        assert parse_version(build_edid({18: 2, 19: 0})) == Version(2, 0)

    def test_at_least(self):
        assert Version(1, 4).at_least(1, 4)
        assert Version(2, 0).at_least(1, 4)
        assert not Version(1, 3).at_least(1, 4)
