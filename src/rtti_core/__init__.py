"""RTTI Core - Shared record layout, readers and bitmap codec."""
from .bitmap import decode_bitmap, encode_bitmap
from .cursor import ByteCursor
from .errors import (
    BitmapFormatError,
    DimensionOutOfBounds,
    ExtractionError,
    SinkWriteFailure,
    SourceUnavailable,
    TruncatedRead,
)
from .records import check_dimensions, read_dimensions, read_pixels, read_u32_le

__all__ = [
    "ByteCursor",
    "encode_bitmap",
    "decode_bitmap",
    "read_u32_le",
    "read_dimensions",
    "read_pixels",
    "check_dimensions",
    "ExtractionError",
    "TruncatedRead",
    "DimensionOutOfBounds",
    "SinkWriteFailure",
    "SourceUnavailable",
    "BitmapFormatError",
]
