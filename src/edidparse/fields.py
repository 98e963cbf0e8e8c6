"""Primitive field extractors shared by every region decoder.

All EDID fields are unsigned; none of these helpers sign-extend.
"""

from __future__ import annotations


def bits(value: int, offset: int, width: int) -> int:
    """Return ``width`` bits of ``value`` starting at bit ``offset`` (LSB = 0)."""
    return (value >> offset) & ((1 << width) - 1)


def flag(value: int, bit: int) -> bool:
    return bool(value & (1 << bit))


def u16_le(data: bytes, offset: int = 0) -> int:
    return data[offset] | (data[offset + 1] << 8)


def u16_be(data: bytes, offset: int = 0) -> int:
    return (data[offset] << 8) | data[offset + 1]


def u32_le(data: bytes, offset: int = 0) -> int:
    return u16_le(data, offset) | (u16_le(data, offset + 2) << 16)


def join_bits(high: int, low: int, low_width: int) -> int:
    """Reassemble a field whose upper bits live apart from its lower bits.

    Used for the 8+4 (12-bit), 8+2 (10-bit) and 4+2 (6-bit) splits found in
    detailed timing descriptors and chromaticity coordinates.
    """
    return (high << low_width) | low


def fixed_point(value: int, width: int) -> float:
    """Scale an unsigned ``width``-bit binary fraction into [0, 1)."""
    return value / (1 << width)


def letters5(word: int, count: int = 3) -> str:
    """Unpack ``count`` 5-bit letters, most significant first, 1 = 'A'.

    Out-of-range codes are passed through as whatever character they map to.
    """
    base = ord("A") - 1
    return "".join(
        chr(bits(word, 5 * (count - 1 - i), 5) + base) for i in range(count)
    )


def descriptor_text(data: bytes, encoding: str = "cp437") -> str:
    """Decode a 13-byte descriptor string: ends at LF, trailing spaces dropped."""
    end = data.find(b"\x0a")
    if end >= 0:
        data = data[:end]
    return data.decode(encoding, errors="replace").rstrip(" ")
