"""18-byte descriptor blocks: detailed timings and monitor descriptors.

Bytes 54-125 hold four blocks. A block whose first two bytes (pixel clock)
are zero is a display descriptor, keyed by the tag in byte 3:

    0xFF  serial number string      0xFC  monitor name string
    0xFD  range limits              0x10  dummy / unused
    anything else                   kept verbatim as ManufacturerDefined

Tags 0xFA (extra standard timings) and 0xFB (extra white points) are also
kept verbatim, and their contents are merged into the timings and color
characteristics of the block.
"""

from __future__ import annotations

from dataclasses import dataclass

from edidparse.config import DEFAULT_OPTIONS, DecodeOptions
from edidparse.display import chromaticity, parse_gamma
from edidparse.fields import bits, descriptor_text, u16_le
from edidparse.models import (
    DefaultGtf,
    DetailedTiming,
    ManufacturerDefined,
    MonitorDescriptor,
    MonitorName,
    MonitorRangeLimits,
    MonitorSerialNumber,
    RangeLimitsOnly,
    SecondaryGtf,
    SecondaryTiming,
    StandardTiming,
    TimingFormula,
    Unused,
    Version,
    WhitePoint,
)
from edidparse.timings import parse_detailed_timing, parse_standard_timings
from edidparse.types import (
    DESCRIPTOR_BLOCK_SIZE,
    DESCRIPTOR_TEXT_LENGTH,
    DescriptorTag,
    EdidOffset,
    TimingFormulaCode,
)
from edidparse.utils.logging import get_logger

logger = get_logger(__name__)

_DESCRIPTOR_COUNT = 4

# Range limit offset flags (block byte 4), EDID 1.4
_RATE_OFFSET = 255

# Tags 0x00-0x0F are manufacturer specified, 0x11-0xF6 are reserved by VESA
_RESERVED_TAGS = (0x11, 0xF6)


@dataclass(frozen=True)
class DescriptorBlocks:
    """Everything the four 18-byte blocks contribute to the EDID."""

    detailed_timings: tuple[DetailedTiming, ...]
    descriptors: tuple[MonitorDescriptor, ...]
    standard_timings: tuple[StandardTiming, ...]
    white_points: tuple[WhitePoint, ...]


def is_display_descriptor(block: bytes) -> bool:
    return block[0] == 0 and block[1] == 0


def _text_payload(block: bytes) -> bytes:
    return bytes(block[5:5 + DESCRIPTOR_TEXT_LENGTH])


def _rate_limits(low: int, high: int, offset_bits: int) -> tuple[int, int]:
    """Apply the 2-bit offset flag: 0b10 raises max, 0b11 raises min and max."""
    if offset_bits & 0b10:
        high += _RATE_OFFSET
        if offset_bits & 0b01:
            low += _RATE_OFFSET
    return low, high


def parse_secondary_timing(block: bytes) -> SecondaryTiming:
    """Parse the timing support code (byte 10) and its bytes 11-17."""
    code = block[10]
    if code == TimingFormulaCode.DEFAULT_GTF:
        return DefaultGtf()
    if code == TimingFormulaCode.RANGE_LIMITS_ONLY:
        return RangeLimitsOnly()
    if code == TimingFormulaCode.SECONDARY_GTF:
        return SecondaryGtf(
            start_frequency=block[12] * 2000,
            c=block[13] / 2,
            m=float(u16_le(block, 14)),
            k=float(block[16]),
            j=block[17] / 2,
        )
    return TimingFormula(code=code, data=bytes(block[11:18]))


def parse_range_limits(block: bytes, version: Version) -> MonitorRangeLimits:
    """Parse a 0xFD display range limits descriptor.

    Layout:
        Byte 4:  [3:2] horizontal rate offsets, [1:0] vertical rate offsets
                 (EDID 1.4 only, zero before)
        Byte 5-6: min/max vertical rate (Hz)
        Byte 7-8: min/max horizontal rate (kHz)
        Byte 9:   max pixel clock (10 MHz units)
        Byte 10+: timing formula
    """
    offsets = block[4] if version.at_least(1, 4) else 0
    v_min, v_max = _rate_limits(block[5], block[6], bits(offsets, 0, 2))
    h_min, h_max = _rate_limits(block[7], block[8], bits(offsets, 2, 2))
    return MonitorRangeLimits(
        vertical_rate=(v_min, v_max),
        horizontal_rate=(h_min * 1000, h_max * 1000),
        max_pixel_clock=block[9] * 10_000_000,
        secondary_timing=parse_secondary_timing(block),
    )


def parse_white_points(block: bytes) -> tuple[WhitePoint, ...]:
    """Parse a 0xFB color point descriptor (two 5-byte entries at 5 and 10).

    Entry layout: index, [3:2] x LSBs [1:0] y LSBs, x MSBs, y MSBs, gamma.
    Index 0 marks an unused entry.
    """
    points: list[WhitePoint] = []
    for start in (5, 10):
        index, low, x_high, y_high, gamma = block[start:start + 5]
        if index == 0:
            continue
        points.append(WhitePoint(
            index=index,
            x=chromaticity(x_high, bits(low, 2, 2)),
            y=chromaticity(y_high, bits(low, 0, 2)),
            gamma=parse_gamma(gamma),
        ))
    return tuple(points)


def parse_monitor_descriptor(
    block: bytes, version: Version, options: DecodeOptions = DEFAULT_OPTIONS
) -> MonitorDescriptor:
    """Decode one display descriptor block into its tagged variant."""
    tag = block[3]
    if tag == DescriptorTag.SERIAL_NUMBER:
        return MonitorSerialNumber(
            serial=descriptor_text(_text_payload(block), options.text_encoding)
        )
    if tag == DescriptorTag.MONITOR_NAME:
        return MonitorName(
            name=descriptor_text(_text_payload(block), options.text_encoding)
        )
    if tag == DescriptorTag.RANGE_LIMITS:
        return parse_range_limits(block, version)
    if tag == DescriptorTag.DUMMY:
        return Unused()
    if _RESERVED_TAGS[0] <= tag <= _RESERVED_TAGS[1]:
        logger.debug("edid_reserved_descriptor_tag", tag=f"0x{tag:02X}")
    return ManufacturerDefined(tag=tag, data=_text_payload(block))


def parse_descriptor_blocks(
    block: bytes, version: Version, options: DecodeOptions = DEFAULT_OPTIONS
) -> DescriptorBlocks:
    """Walk the four 18-byte blocks at bytes 54-125 in order."""
    detailed: list[DetailedTiming] = []
    descriptors: list[MonitorDescriptor] = []
    standard: list[StandardTiming] = []
    white_points: list[WhitePoint] = []

    for i in range(_DESCRIPTOR_COUNT):
        start = EdidOffset.DESCRIPTORS + i * DESCRIPTOR_BLOCK_SIZE
        data = bytes(block[start:start + DESCRIPTOR_BLOCK_SIZE])

        if not is_display_descriptor(data):
            detailed.append(parse_detailed_timing(data))
            continue

        descriptors.append(parse_monitor_descriptor(data, version, options))
        if data[3] == DescriptorTag.STANDARD_TIMING_IDENTIFIERS:
            standard.extend(parse_standard_timings(data[5:17], version))
        elif data[3] == DescriptorTag.COLOR_POINT_DATA:
            white_points.extend(parse_white_points(data))

    return DescriptorBlocks(
        detailed_timings=tuple(detailed),
        descriptors=tuple(descriptors),
        standard_timings=tuple(standard),
        white_points=tuple(white_points),
    )
