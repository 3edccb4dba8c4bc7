"""Embedded record field readers.

Layout after a marker: [Delimiter(1) | Width(4) | Height(4) | Pixels(W*H*3)].
"""
from __future__ import annotations

import struct

from .cursor import ByteCursor
from .errors import DimensionOutOfBounds
from .protocol import CHANNELS, DIM_FMT, DIM_LEN, MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH


def read_u32_le(cursor: ByteCursor) -> int:
    """Read one little-endian unsigned 32-bit integer."""
    (value,) = struct.unpack(DIM_FMT, cursor.read_exact(DIM_LEN))
    return value


def as_int32(value: int) -> int:
    """Reinterpret an unsigned 32-bit bit pattern as signed."""
    return value - (1 << 32) if value & 0x80000000 else value


def read_dimensions(cursor: ByteCursor) -> tuple[int, int]:
    """Read (width, height) as signed 32-bit values. Negative results are possible."""
    width = as_int32(read_u32_le(cursor))
    height = as_int32(read_u32_le(cursor))
    return width, height


def check_dimensions(
    width: int,
    height: int,
    max_width: int = MAX_IMAGE_WIDTH,
    max_height: int = MAX_IMAGE_HEIGHT,
) -> None:
    if not (0 < width <= max_width and 0 < height <= max_height):
        raise DimensionOutOfBounds(width, height, max_width, max_height)


def read_pixels(cursor: ByteCursor, width: int, height: int) -> bytes:
    """Read the raw interleaved pixel buffer. Caller validates the dimensions first."""
    return cursor.read_exact(width * height * CHANNELS)
