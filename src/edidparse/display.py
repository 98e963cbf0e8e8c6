"""Basic display parameters and color characteristics (bytes 20-34)."""

from __future__ import annotations

from edidparse.fields import bits, fixed_point, flag, join_bits
from edidparse.models import (
    AnalogInput,
    ColorCharacteristics,
    DigitalInput,
    DisplayParameters,
    DPMSFeatures,
    ImageSize,
    ScreenAspectRatio,
    SignalLevel,
    Version,
    VideoInput,
)
from edidparse.types import GAMMA_UNDEFINED, DisplayType, EdidOffset, Orientation

# Analog signal level standard, video input bits 6-5
_SIGNAL_LEVELS: tuple[SignalLevel, ...] = (
    SignalLevel(high=0.700, low=0.300),
    SignalLevel(high=0.714, low=0.286),
    SignalLevel(high=1.000, low=0.400),
    SignalLevel(high=0.700, low=0.000),
)

# Chromaticity coordinates are 10-bit binary fractions
_CHROMA_BITS = 10


def parse_video_input(value: int) -> VideoInput:
    """Parse the video input definition byte (byte 20).

    Bit 7 set: digital, bit 0 = VESA DFP 1.x compatible.
    Bit 7 clear: analog,
        Bits 6-5: signal level standard
        Bit 4:    blank-to-black setup expected
        Bit 3:    separate sync supported
        Bit 2:    composite sync on HSync supported
        Bit 1:    composite sync on green supported
        Bit 0:    VSync serration required
    """
    if flag(value, 7):
        return DigitalInput(dfp_compatible=flag(value, 0))
    return AnalogInput(
        signal_level=_SIGNAL_LEVELS[bits(value, 5, 2)],
        setup_expected=flag(value, 4),
        separate_sync=flag(value, 3),
        composite_sync=flag(value, 2),
        sync_on_green=flag(value, 1),
        serrated_vsync=flag(value, 0),
    )


def parse_max_size(
    horizontal: int, vertical: int, version: Version
) -> ImageSize | ScreenAspectRatio | None:
    """Parse bytes 21-22: physical size in cm, or an aspect ratio (EDID 1.4)."""
    if horizontal and vertical:
        return ImageSize(width=float(horizontal), height=float(vertical))
    if not version.at_least(1, 4) or (horizontal == 0 and vertical == 0):
        return None
    if vertical == 0:
        return ScreenAspectRatio(
            ratio=(horizontal + 99) / 100, orientation=Orientation.LANDSCAPE
        )
    return ScreenAspectRatio(
        ratio=100 / (vertical + 99), orientation=Orientation.PORTRAIT
    )


def parse_gamma(value: int) -> float | None:
    """Gamma is stored as (gamma * 100) - 100; 0xFF means not given."""
    if value == GAMMA_UNDEFINED:
        return None
    return (value + 100) / 100


def parse_dpms_features(value: int) -> DPMSFeatures:
    """Parse the feature support byte (byte 24)."""
    return DPMSFeatures(
        standby_supported=flag(value, 7),
        suspend_supported=flag(value, 6),
        low_power_supported=flag(value, 5),
        display_type=DisplayType(bits(value, 3, 2)),
        default_srgb=flag(value, 2),
        preferred_timing_mode=flag(value, 1),
        default_gtf_supported=flag(value, 0),
    )


def parse_display_parameters(block: bytes, version: Version) -> DisplayParameters:
    return DisplayParameters(
        input=parse_video_input(block[EdidOffset.VIDEO_INPUT]),
        max_size=parse_max_size(
            block[EdidOffset.MAX_HORIZONTAL_SIZE],
            block[EdidOffset.MAX_VERTICAL_SIZE],
            version,
        ),
        gamma=parse_gamma(block[EdidOffset.GAMMA]),
        dpms=parse_dpms_features(block[EdidOffset.FEATURES]),
    )


def chromaticity(high: int, low_bits: int) -> float:
    """Combine an 8-bit MSB byte and its 2 LSBs into a [0, 1) coordinate."""
    return fixed_point(join_bits(high, low_bits, 2), _CHROMA_BITS)


def parse_color_characteristics(block: bytes) -> ColorCharacteristics:
    """Parse bytes 25-34.

    Layout:
        Byte 25: Rx[1:0] Ry[1:0] Gx[1:0] Gy[1:0]   (bits 7-6, 5-4, 3-2, 1-0)
        Byte 26: Bx[1:0] By[1:0] Wx[1:0] Wy[1:0]
        Bytes 27-34: Rx Ry Gx Gy Bx By Wx Wy, bits 9-2 each
    """
    base = EdidOffset.CHROMATICITY
    lows = block[base] << 8 | block[base + 1]
    high = block[base + 2:base + 10]

    coords = [chromaticity(high[i], bits(lows, 14 - 2 * i, 2)) for i in range(8)]
    return ColorCharacteristics(
        red=(coords[0], coords[1]),
        green=(coords[2], coords[3]),
        blue=(coords[4], coords[5]),
        white=(coords[6], coords[7]),
    )
