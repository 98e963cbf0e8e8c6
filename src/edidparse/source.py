"""Byte source capability consumed by the decoder.

The decoder asks for exactly N bytes once; anything that can satisfy
``read_exact`` can feed it (I2C/DDC readers, OS display APIs, files).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from edidparse.exceptions import SourceReadError, TruncatedError


class ByteSource(ABC):
    """Abstract base for everything the decoder can read from."""

    @abstractmethod
    def read_exact(self, size: int) -> bytes:
        """Return exactly ``size`` bytes.

        Raises:
            TruncatedError: If fewer than ``size`` bytes are available.
            SourceReadError: If the underlying source fails.
        """


class BufferSource(ByteSource):
    """Serve bytes from an in-memory buffer, advancing a cursor."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read_exact(self, size: int) -> bytes:
        if self.remaining < size:
            raise TruncatedError(expected=size, received=self.remaining)
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk


class StreamSource(ByteSource):
    """Adapt a binary file-like object (stdin, open file, socket file).

    Short reads are retried until EOF; the stream is never closed here.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read_exact(self, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            try:
                chunk = self._stream.read(size - len(buf))
            except OSError as exc:
                raise SourceReadError(
                    f"Byte source failed after {len(buf)} bytes: {exc}",
                    offset=len(buf),
                ) from exc
            if not chunk:
                raise TruncatedError(expected=size, received=len(buf))
            buf.extend(chunk)
        return bytes(buf)
