"""Decode a complete 128-byte EDID base block.

Reads the block once through a ByteSource, then decodes each region in
byte order. Any failure aborts the whole parse; no partial EDID is returned.
"""

from __future__ import annotations

from dataclasses import replace
from typing import BinaryIO

from edidparse.config import DEFAULT_OPTIONS, DecodeOptions
from edidparse.descriptors import parse_descriptor_blocks
from edidparse.display import parse_color_characteristics, parse_display_parameters
from edidparse.exceptions import ChecksumError
from edidparse.models import EDID, Timings
from edidparse.product import check_header, parse_product_information, parse_version
from edidparse.source import BufferSource, ByteSource, StreamSource
from edidparse.timings import parse_base_standard_timings, parse_established_timings
from edidparse.types import EDID_BLOCK_SIZE, EdidOffset
from edidparse.utils.logging import get_logger

logger = get_logger(__name__)


def block_checksum(block: bytes) -> int:
    """Sum of the first 128 bytes modulo 256; 0 for a valid block."""
    return sum(block[:EDID_BLOCK_SIZE]) % 256


def verify_checksum(block: bytes) -> None:
    """Raise ChecksumError unless the block sums to zero modulo 256."""
    total = block_checksum(block)
    if total != 0:
        raise ChecksumError(checksum=block[EdidOffset.CHECKSUM], total=total)


def parse_extension_count(block: bytes) -> int:
    """Number of 128-byte extension blocks declared to follow (byte 126)."""
    return block[EdidOffset.EXTENSION_COUNT]


def decode_block(block: bytes, options: DecodeOptions = DEFAULT_OPTIONS) -> EDID:
    """Decode an in-memory 128-byte base block."""
    check_header(block)

    product = parse_product_information(block)
    version = parse_version(block)
    display = parse_display_parameters(block, version)
    color = parse_color_characteristics(block)
    established = parse_established_timings(
        block[EdidOffset.ESTABLISHED_TIMINGS:EdidOffset.ESTABLISHED_TIMINGS + 3]
    )
    standard = parse_base_standard_timings(block, version)
    blocks = parse_descriptor_blocks(block, version, options)
    extension_count = parse_extension_count(block)

    if options.verify_checksum:
        verify_checksum(block)
    elif block_checksum(block) != 0:
        logger.warning(
            "edid_checksum_mismatch",
            checksum=f"0x{block[EdidOffset.CHECKSUM]:02X}",
            total=block_checksum(block),
        )

    edid = EDID(
        product=product,
        version=version,
        display=display,
        color=replace(color, white_points=blocks.white_points),
        timings=Timings(
            established_timings=established,
            standard_timings=standard + blocks.standard_timings,
            detailed_timings=blocks.detailed_timings,
        ),
        descriptors=blocks.descriptors,
        extension_count=extension_count,
    )
    logger.debug(
        "edid_decoded",
        manufacturer=str(product.manufacturer_id),
        product_code=product.product_code,
        version=str(version),
        extensions=extension_count,
    )
    return edid


def parse(source: ByteSource, *, options: DecodeOptions | None = None) -> EDID:
    """Read exactly one base block from ``source`` and decode it.

    Raises:
        TruncatedError: The source had fewer than 128 bytes.
        SourceReadError: The source itself failed.
        FormatError: The fixed header pattern is missing.
        ChecksumError: The block checksum is wrong (unless disabled in options).
    """
    block = source.read_exact(EDID_BLOCK_SIZE)
    return decode_block(block, options or DEFAULT_OPTIONS)


def parse_bytes(
    data: bytes | bytearray | memoryview, *, options: DecodeOptions | None = None
) -> EDID:
    """Decode the base block at the start of ``data``; extensions are ignored."""
    return parse(BufferSource(data), options=options)


def parse_stream(stream: BinaryIO, *, options: DecodeOptions | None = None) -> EDID:
    """Decode the base block read from a binary file-like object."""
    return parse(StreamSource(stream), options=options)
