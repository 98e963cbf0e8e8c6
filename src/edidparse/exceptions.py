"""Exception hierarchy for EDID decoding failures."""

from __future__ import annotations


class EdidError(Exception):
    """Base exception for all edidparse errors."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        super().__init__(message)


class SourceReadError(EdidError):
    """The byte source failed to deliver the requested bytes."""


class TruncatedError(SourceReadError):
    """The byte source ran out of data before the block was complete."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} bytes, source ended after {received}",
            offset=received,
        )


class FormatError(EdidError):
    """The fixed 8-byte EDID header pattern did not match."""


class ChecksumError(EdidError):
    """The 128-byte block does not sum to zero modulo 256."""

    def __init__(self, checksum: int, total: int) -> None:
        self.checksum = checksum
        self.total = total
        super().__init__(
            f"Checksum mismatch: block sums to 0x{total:02X} "
            f"(checksum byte 0x{checksum:02X})",
            offset=127,
        )
