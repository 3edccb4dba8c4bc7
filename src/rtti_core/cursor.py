from __future__ import annotations

from typing import BinaryIO

from .errors import TruncatedRead
from .protocol import SCAN_CHUNK_SIZE


class ByteCursor:
    """Forward-only cursor over a binary stream.

    Holds a small read-ahead buffer so the scanner can search whole chunks
    while record readers still see a byte-accurate position.
    ``offset`` is the absolute position of the next unconsumed byte.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = SCAN_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.stream = stream
        self.chunk_size = chunk_size
        self.offset = 0
        self.eof = False
        self._buf = b""
        self._pos = 0

    @property
    def pending(self) -> bytes:
        """Buffered bytes not yet consumed."""
        return self._buf[self._pos:]

    def fill(self) -> bool:
        """Append one chunk to the read-ahead buffer. False once the stream is exhausted."""
        if self.eof:
            return False
        chunk = self.stream.read(self.chunk_size)
        if not chunk:
            self.eof = True
            return False
        self._buf = self._buf[self._pos:] + chunk
        self._pos = 0
        return True

    def advance(self, n: int) -> None:
        """Consume ``n`` already-buffered bytes."""
        if n < 0 or n > len(self._buf) - self._pos:
            raise ValueError(f"Cannot advance {n} bytes past buffered data")
        self._pos += n
        self.offset += n

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes; shorter only at end of stream."""
        available = len(self._buf) - self._pos
        if available >= n:
            data = self._buf[self._pos:self._pos + n]
            self.advance(n)
            return data

        parts = [self._buf[self._pos:]]
        self._buf = b""
        self._pos = 0
        remaining = n - available
        # Large payloads bypass the read-ahead buffer.
        while remaining > 0 and not self.eof:
            chunk = self.stream.read(remaining)
            if not chunk:
                self.eof = True
                break
            parts.append(chunk)
            remaining -= len(chunk)

        data = b"".join(parts)
        self.offset += len(data)
        return data

    def read_exact(self, n: int) -> bytes:
        start = self.offset
        data = self.read(n)
        if len(data) != n:
            raise TruncatedRead(n, len(data), start)
        return data

    def skip(self, n: int) -> None:
        self.read_exact(n)
