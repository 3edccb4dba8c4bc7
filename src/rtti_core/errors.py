"""RTTI Extract error types.

Everything derives from ``ValueError``: a bad record is a bad value, not a bad program.
"""
from __future__ import annotations


class ExtractionError(ValueError):
    """Base class for record and output faults."""


class TruncatedRead(ExtractionError):
    """Fewer bytes remained than a declared field or buffer needs."""

    def __init__(self, wanted: int, got: int, offset: int):
        super().__init__(f"Wanted {wanted} bytes at offset {offset}, got {got}")
        self.wanted = wanted
        self.got = got
        self.offset = offset


class DimensionOutOfBounds(ExtractionError):
    def __init__(self, width: int, height: int, max_width: int, max_height: int):
        super().__init__(
            f"Dimensions {width}x{height} outside 1..{max_width} x 1..{max_height}"
        )
        self.width = width
        self.height = height


class SinkWriteFailure(ExtractionError):
    """An output file could not be created or fully written."""

    def __init__(self, path, reason: str):
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason


class SourceUnavailable(ExtractionError):
    """The input file could not be opened."""


class BitmapFormatError(ExtractionError):
    """A bitmap does not have the layout this project produces."""
