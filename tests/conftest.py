"""Pytest configuration and shared fixtures."""

import pytest
import structlog

# Captured from a MacBook Pro 11,3 built-in panel (checksum valid).
SAMPLE_EDID = bytes([
    0, 255, 255, 255, 255, 255, 255, 0,
    6, 16, 34, 160, 0, 0, 0, 0,
    4, 23, 1, 4, 165, 33, 21, 120,
    2, 111, 177, 167, 85, 76, 158, 37,
    12, 80, 84, 0, 0, 0, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 239, 131,
    64, 160, 176, 8, 52, 112, 48, 32,
    54, 0, 75, 207, 16, 0, 0, 26,
    0, 0, 0, 252, 0, 67, 111, 108,
    111, 114, 32, 76, 67, 68, 10, 32,
    32, 32, 0, 0, 0, 16, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 16,
    0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 222,
])


def fix_checksum(block: bytearray) -> bytes:
    """Rewrite byte 127 so the first 128 bytes sum to zero."""
    block[127] = (-sum(block[:127])) % 256
    return bytes(block)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests reconfigure structlog against a temporary stderr."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_edid() -> bytes:
    """Provide the captured 128-byte base block."""
    return SAMPLE_EDID


@pytest.fixture
def build_edid():
    """Return a builder that patches the sample block and fixes its checksum.

    Patches map a byte offset to an int (one byte) or bytes (a run).
    """
    def _build(patches: dict[int, int | bytes] | None = None) -> bytes:
        block = bytearray(SAMPLE_EDID)
        for offset, value in (patches or {}).items():
            if isinstance(value, int):
                block[offset] = value
            else:
                block[offset:offset + len(value)] = value
        return fix_checksum(block)

    return _build
