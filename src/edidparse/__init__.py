"""EDID (Extended Display Identification Data) base block decoder.

Decodes the 128-byte VESA EDID 1.x base block into immutable structures.
Acquiring the bytes (DDC/I2C, OS APIs, files) is left to the caller, who
hands them over as bytes, a binary stream, or any ByteSource.
"""

from edidparse.config import DecodeOptions
from edidparse.exceptions import (
    ChecksumError,
    EdidError,
    FormatError,
    SourceReadError,
    TruncatedError,
)
from edidparse.models import EDID
from edidparse.parser import (
    block_checksum,
    decode_block,
    parse,
    parse_bytes,
    parse_stream,
    verify_checksum,
)
from edidparse.source import BufferSource, ByteSource, StreamSource

__all__ = [
    "EDID",
    "BufferSource",
    "ByteSource",
    "ChecksumError",
    "DecodeOptions",
    "EdidError",
    "FormatError",
    "SourceReadError",
    "StreamSource",
    "TruncatedError",
    "block_checksum",
    "decode_block",
    "parse",
    "parse_bytes",
    "parse_stream",
    "verify_checksum",
]
