from __future__ import annotations

from typing import Iterable

from rtti_core.cursor import ByteCursor
from rtti_core.protocol import MARKERS


class MarkerScanner:
    """Finds the next record marker in a forward-only byte stream.

    Markers may have different lengths. The occurrence whose last byte comes
    first wins, which is what a byte-at-a-time window would report; ties go to
    the earlier marker in the set.
    """

    def __init__(self, markers: Iterable[bytes] = MARKERS):
        self.markers = tuple(bytes(m) for m in markers)
        if not self.markers:
            raise ValueError("At least one marker is required")
        if any(len(m) == 0 for m in self.markers):
            raise ValueError("Markers must be non-empty")
        if len(set(self.markers)) != len(self.markers):
            raise ValueError(f"Duplicate markers in {self.markers!r}")
        self.longest = max(len(m) for m in self.markers)

    def _earliest(self, hay: bytes) -> tuple[bytes, int] | None:
        best: tuple[bytes, int] | None = None
        for marker in self.markers:
            pos = hay.find(marker)
            if pos == -1:
                continue
            end = pos + len(marker)
            if best is None or end < best[1]:
                best = (marker, end)
        return best

    def find(self, cursor: ByteCursor) -> bytes | None:
        """Advance ``cursor`` just past the next marker and return it.

        Returns None, with the cursor at end of stream, if no marker remains.
        """
        # Keep a small overlap so a marker split across chunks can still be found.
        overlap = self.longest - 1

        while True:
            hay = cursor.pending
            hit = self._earliest(hay)
            if hit is not None:
                marker, end = hit
                cursor.advance(end)
                return marker

            keep = min(len(hay), overlap)
            cursor.advance(len(hay) - keep)
            if not cursor.fill():
                cursor.advance(keep)
                return None


def find_next_marker(cursor: ByteCursor, markers: Iterable[bytes] = MARKERS) -> bytes | None:
    return MarkerScanner(markers).find(cursor)
