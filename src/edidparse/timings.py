"""Established, standard and detailed timing decoding."""

from __future__ import annotations

from edidparse.fields import bits, flag, join_bits, u16_le
from edidparse.models import (
    AnalogCompositeSync,
    DetailedTiming,
    DigitalCompositeSync,
    ImageSize,
    SeparateSync,
    StandardTiming,
    SyncType,
    Version,
)
from edidparse.types import (
    PIXEL_CLOCK_UNIT_HZ,
    STANDARD_TIMING_UNUSED,
    AspectRatio,
    EdidOffset,
    EstablishedTiming,
    StereoMode,
    SyncPolarity,
)

_ESTABLISHED_ORDER: tuple[EstablishedTiming, ...] = tuple(EstablishedTiming)

# Standard timing aspect codes 1-3; code 0 depends on the EDID version
_ASPECT_RATIOS: dict[int, AspectRatio] = {
    1: AspectRatio.RATIO_4_3,
    2: AspectRatio.RATIO_5_4,
    3: AspectRatio.RATIO_16_9,
}

# (bits 6-5, bit 0) -> stereo mode; bits 6-5 == 0 means no stereo
_STEREO_MODES: dict[tuple[int, int], StereoMode] = {
    (0b01, 0): StereoMode.FIELD_SEQUENTIAL_RIGHT,
    (0b10, 0): StereoMode.FIELD_SEQUENTIAL_LEFT,
    (0b01, 1): StereoMode.INTERLEAVED_RIGHT_EVEN,
    (0b10, 1): StereoMode.INTERLEAVED_LEFT_EVEN,
    (0b11, 0): StereoMode.INTERLEAVED_4_WAY,
    (0b11, 1): StereoMode.SIDE_BY_SIDE,
}


def _polarity(value: int, bit: int) -> SyncPolarity:
    return SyncPolarity.POSITIVE if flag(value, bit) else SyncPolarity.NEGATIVE


def parse_established_timings(data: bytes) -> tuple[EstablishedTiming, ...]:
    """Parse bytes 35-37 into the supported legacy modes.

    The 17 defined bits run MSB-first from byte 35 bit 7 to byte 37 bit 7;
    byte 37 bits 6-0 are manufacturer reserved and ignored.
    """
    bitmap = (data[0] << 16) | (data[1] << 8) | data[2]
    return tuple(
        mode
        for i, mode in enumerate(_ESTABLISHED_ORDER)
        if flag(bitmap, 23 - i)
    )


def aspect_ratio_for(code: int, version: Version) -> AspectRatio:
    if code == 0:
        if version.at_least(1, 4):
            return AspectRatio.RATIO_16_10
        return AspectRatio.RATIO_1_1
    return _ASPECT_RATIOS[code]


def parse_standard_timing(data: bytes, version: Version) -> StandardTiming | None:
    """Parse one 2-byte standard timing code; None for the unused filler.

    Byte 0: (horizontal active / 8) - 31
    Byte 1: [7:6] aspect ratio, [5:0] refresh rate - 60
    """
    if bytes(data[:2]) == STANDARD_TIMING_UNUSED:
        return None
    return StandardTiming(
        horizontal_resolution=(data[0] + 31) * 8,
        aspect_ratio=aspect_ratio_for(bits(data[1], 6, 2), version),
        refresh_rate=bits(data[1], 0, 6) + 60,
    )


def parse_standard_timings(
    data: bytes, version: Version
) -> tuple[StandardTiming, ...]:
    """Parse consecutive 2-byte codes, skipping unused slots."""
    timings = (
        parse_standard_timing(data[i:i + 2], version)
        for i in range(0, len(data) - 1, 2)
    )
    return tuple(t for t in timings if t is not None)


def parse_base_standard_timings(
    block: bytes, version: Version
) -> tuple[StandardTiming, ...]:
    start = EdidOffset.STANDARD_TIMINGS
    return parse_standard_timings(block[start:start + 16], version)


def parse_stereo(flags: int) -> StereoMode | None:
    mode = bits(flags, 5, 2)
    if mode == 0:
        return None
    return _STEREO_MODES[(mode, bits(flags, 0, 1))]


def parse_sync_type(flags: int) -> SyncType:
    """Parse flags byte bits 4-1.

    Bits 4-3:
        00 analog composite, 01 bipolar analog composite:
            bit 2 serrations, bit 1 sync on all RGB lines (else green only)
        10 digital composite:
            bit 2 serrations, bit 1 polarity
        11 digital separate:
            bit 2 vertical polarity, bit 1 horizontal polarity
    """
    kind = bits(flags, 3, 2)
    if kind in (0b00, 0b01):
        return AnalogCompositeSync(
            bipolar=kind == 0b01,
            serrated=flag(flags, 2),
            sync_on_rgb=flag(flags, 1),
        )
    if kind == 0b10:
        return DigitalCompositeSync(
            serrated=flag(flags, 2), polarity=_polarity(flags, 1)
        )
    return SeparateSync(
        horizontal=_polarity(flags, 1), vertical=_polarity(flags, 2)
    )


def parse_detailed_timing(data: bytes) -> DetailedTiming:
    """Parse an 18-byte detailed timing descriptor.

    Layout:
        Bytes 0-1:  pixel clock / 10 kHz (LE16)
        Byte 2:     H active [7:0]      Byte 3: H blanking [7:0]
        Byte 4:     [7:4] H active [11:8], [3:0] H blanking [11:8]
        Bytes 5-7:  same for vertical active / blanking
        Byte 8:     H front porch [7:0] Byte 9: H sync width [7:0]
        Byte 10:    [7:4] V front porch [3:0], [3:0] V sync width [3:0]
        Byte 11:    [7:6] HFP [9:8], [5:4] HSW [9:8], [3:2] VFP [5:4], [1:0] VSW [5:4]
        Bytes 12-14: image size in mm, 8+4 split like active/blanking
        Bytes 15-16: H/V border
        Byte 17:    flags

    Back porch is blanking minus front porch and sync width, floored at 0
    when a malformed block gives a blanking interval shorter than both.
    """
    pixel_clock = u16_le(data, 0) * PIXEL_CLOCK_UNIT_HZ

    h_active = join_bits(bits(data[4], 4, 4), data[2], 8)
    h_blanking = join_bits(bits(data[4], 0, 4), data[3], 8)
    v_active = join_bits(bits(data[7], 4, 4), data[5], 8)
    v_blanking = join_bits(bits(data[7], 0, 4), data[6], 8)

    h_front = join_bits(bits(data[11], 6, 2), data[8], 8)
    h_sync = join_bits(bits(data[11], 4, 2), data[9], 8)
    v_front = join_bits(bits(data[11], 2, 2), bits(data[10], 4, 4), 4)
    v_sync = join_bits(bits(data[11], 0, 2), bits(data[10], 0, 4), 4)

    h_size_mm = join_bits(bits(data[14], 4, 4), data[12], 8)
    v_size_mm = join_bits(bits(data[14], 0, 4), data[13], 8)

    flags = data[17]
    return DetailedTiming(
        pixel_clock=pixel_clock,
        active=(h_active, v_active),
        blanking=(h_blanking, v_blanking),
        front_porch=(h_front, v_front),
        sync_length=(h_sync, v_sync),
        back_porch=(
            max(h_blanking - h_front - h_sync, 0),
            max(v_blanking - v_front - v_sync, 0),
        ),
        image_size=ImageSize(width=h_size_mm / 10, height=v_size_mm / 10),
        border=(data[15], data[16]),
        interlaced=flag(flags, 7),
        stereo=parse_stereo(flags),
        sync_type=parse_sync_type(flags),
    )
