"""Header, version and product identification (base block bytes 0-19)."""

from __future__ import annotations

from edidparse.exceptions import FormatError
from edidparse.fields import letters5, u16_be, u16_le, u32_le
from edidparse.models import (
    ManufactureDate,
    ManufacturerID,
    ProductInformation,
    Version,
)
from edidparse.types import EDID_HEADER, MANUFACTURE_YEAR_BASE, EdidOffset


def check_header(block: bytes) -> None:
    """Raise FormatError unless the block opens with the fixed EDID pattern."""
    header = bytes(block[EdidOffset.HEADER:EdidOffset.HEADER + len(EDID_HEADER)])
    if header != EDID_HEADER:
        raise FormatError(
            f"Invalid EDID header: {header.hex(' ')}",
            offset=EdidOffset.HEADER,
        )


def parse_manufacturer_id(data: bytes) -> ManufacturerID:
    """Parse the 2-byte manufacturer ID.

    Layout (big-endian word):
        Bit 15:     reserved (0)
        Bits 14-10: first letter
        Bits 9-5:   second letter
        Bits 4-0:   third letter
    """
    word = u16_be(data)
    return ManufacturerID(code=letters5(word & 0x7FFF), raw=word)


def parse_manufacture_date(week: int, year: int) -> ManufactureDate:
    return ManufactureDate(week=week, year=year + MANUFACTURE_YEAR_BASE)


def parse_product_information(block: bytes) -> ProductInformation:
    """Parse bytes 8-17: manufacturer, product code, serial, date."""
    return ProductInformation(
        manufacturer_id=parse_manufacturer_id(
            block[EdidOffset.MANUFACTURER_ID:EdidOffset.MANUFACTURER_ID + 2]
        ),
        product_code=u16_le(block, EdidOffset.PRODUCT_CODE),
        serial_number=u32_le(block, EdidOffset.SERIAL_NUMBER),
        manufacture_date=parse_manufacture_date(
            block[EdidOffset.MANUFACTURE_WEEK],
            block[EdidOffset.MANUFACTURE_YEAR],
        ),
    )


def parse_version(block: bytes) -> Version:
    """Bytes 18-19, taken as-is; later versions still decode structurally."""
    return Version(
        version=block[EdidOffset.VERSION],
        revision=block[EdidOffset.REVISION],
    )
