"""EDID base block layout, constants, and discriminator enums.

References: VESA Enhanced EDID Standard (E-EDID) Release A.2, EDID 1.4
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


# Fixed 8-byte pattern opening every base block
EDID_HEADER = b"\x00\xff\xff\xff\xff\xff\xff\x00"

# Base block and extension block size
EDID_BLOCK_SIZE = 128

# Size of one detailed timing / monitor descriptor block
DESCRIPTOR_BLOCK_SIZE = 18

# Descriptor text payload length (block bytes 5-17)
DESCRIPTOR_TEXT_LENGTH = 13

# Manufacture year is stored as an offset from this year
MANUFACTURE_YEAR_BASE = 1990

# Week byte value flagging byte 17 as a model year (EDID 1.4)
MODEL_YEAR_WEEK = 0xFF

# Raw gamma byte meaning "gamma not given"
GAMMA_UNDEFINED = 0xFF

# Standard timing slot filler (0x01, 0x01)
STANDARD_TIMING_UNUSED = b"\x01\x01"

# Pixel clock unit of a detailed timing descriptor (10 kHz)
PIXEL_CLOCK_UNIT_HZ = 10_000


class EdidOffset(IntEnum):
    """Byte offsets of the fields in the 128-byte base block."""

    HEADER = 0x00              # 8 bytes: fixed pattern
    MANUFACTURER_ID = 0x08     # 2 bytes: big-endian, 3 x 5-bit letters
    PRODUCT_CODE = 0x0A        # 2 bytes: little-endian
    SERIAL_NUMBER = 0x0C       # 4 bytes: little-endian
    MANUFACTURE_WEEK = 0x10
    MANUFACTURE_YEAR = 0x11
    VERSION = 0x12
    REVISION = 0x13
    VIDEO_INPUT = 0x14
    MAX_HORIZONTAL_SIZE = 0x15
    MAX_VERTICAL_SIZE = 0x16
    GAMMA = 0x17
    FEATURES = 0x18
    CHROMATICITY = 0x19        # 10 bytes: LSB pairs + 8 MSB bytes
    ESTABLISHED_TIMINGS = 0x23  # 3 bytes
    STANDARD_TIMINGS = 0x26    # 8 x 2 bytes
    DESCRIPTORS = 0x36         # 4 x 18 bytes
    EXTENSION_COUNT = 0x7E
    CHECKSUM = 0x7F


class DisplayType(IntEnum):
    """Display color type, feature byte bits 4-3."""

    MONOCHROME = 0
    RGB_COLOR = 1
    OTHER_COLOR = 2
    UNDEFINED = 3


class Orientation(StrEnum):
    """Orientation of a max-size field given as an aspect ratio."""
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class EstablishedTiming(StrEnum):
    """Legacy established timing modes, in bit order (byte 35 bit 7 first)."""

    H720_V400_F70 = "720x400@70Hz"
    H720_V400_F88 = "720x400@88Hz"
    H640_V480_F60 = "640x480@60Hz"
    H640_V480_F67 = "640x480@67Hz"
    H640_V480_F72 = "640x480@72Hz"
    H640_V480_F75 = "640x480@75Hz"
    H800_V600_F56 = "800x600@56Hz"
    H800_V600_F60 = "800x600@60Hz"
    H800_V600_F72 = "800x600@72Hz"
    H800_V600_F75 = "800x600@75Hz"
    H832_V624_F75 = "832x624@75Hz"
    H1024_V768_F87 = "1024x768@87Hz(i)"
    H1024_V768_F60 = "1024x768@60Hz"
    H1024_V768_F70 = "1024x768@70Hz"
    H1024_V768_F75 = "1024x768@75Hz"
    H1280_V1024_F75 = "1280x1024@75Hz"
    H1152_V870_F75 = "1152x870@75Hz"


class AspectRatio(StrEnum):
    """Image aspect ratio of a standard timing."""

    RATIO_1_1 = "1:1"
    RATIO_16_10 = "16:10"
    RATIO_4_3 = "4:3"
    RATIO_5_4 = "5:4"
    RATIO_16_9 = "16:9"

    @property
    def terms(self) -> tuple[int, int]:
        num, den = self.value.split(":")
        return int(num), int(den)

    def vertical_for(self, horizontal: int) -> int:
        """Vertical line count implied for a horizontal pixel count."""
        num, den = self.terms
        return horizontal * den // num


class StereoMode(StrEnum):
    """Stereo viewing support, flags byte bits 6-5 plus bit 0."""

    FIELD_SEQUENTIAL_RIGHT = "field_sequential_right"
    FIELD_SEQUENTIAL_LEFT = "field_sequential_left"
    INTERLEAVED_RIGHT_EVEN = "interleaved_right_even"
    INTERLEAVED_LEFT_EVEN = "interleaved_left_even"
    INTERLEAVED_4_WAY = "interleaved_4_way"
    SIDE_BY_SIDE = "side_by_side"


class SyncPolarity(StrEnum):
    """Direction of a sync pulse."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


class DescriptorTag(IntEnum):
    """Display descriptor tags (block byte 3) with a dedicated decoding."""

    DUMMY = 0x10
    STANDARD_TIMING_IDENTIFIERS = 0xFA
    COLOR_POINT_DATA = 0xFB
    MONITOR_NAME = 0xFC
    RANGE_LIMITS = 0xFD
    ALPHANUMERIC_DATA = 0xFE
    SERIAL_NUMBER = 0xFF


class TimingFormulaCode(IntEnum):
    """Video timing support byte of a range limits descriptor (block byte 10)."""

    DEFAULT_GTF = 0x00
    RANGE_LIMITS_ONLY = 0x01
    SECONDARY_GTF = 0x02
