"""24-bit uncompressed bitmap encoding.

Source pixels are row-major, top-to-bottom, channel-0-first.
Bitmap rows run bottom-to-top, channel-2-first, each padded to a multiple of 4 bytes.
"""
from __future__ import annotations

import struct
from typing import NamedTuple

from .errors import BitmapFormatError
from .protocol import (
    BMP_BITS_PER_PIXEL,
    BMP_COMPRESSION_NONE,
    BMP_FILE_HEADER_FMT,
    BMP_FILE_HEADER_LEN,
    BMP_HEADER_LEN,
    BMP_INFO_HEADER_FMT,
    BMP_INFO_HEADER_LEN,
    BMP_PLANES,
    BMP_ROW_ALIGN,
    BMP_SIGNATURE,
    CHANNELS,
)


class BitmapHeader(NamedTuple):
    signature: bytes
    file_size: int
    data_offset: int
    info_size: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int


class DecodedBitmap(NamedTuple):
    width: int
    height: int
    pixels: bytes


def row_padding(width: int) -> int:
    return (BMP_ROW_ALIGN - (width * CHANNELS) % BMP_ROW_ALIGN) % BMP_ROW_ALIGN


def bitmap_size(width: int, height: int) -> int:
    """Total encoded file length, header included."""
    return BMP_HEADER_LEN + (width * CHANNELS + row_padding(width)) * height


def swap_channels(row: bytes) -> bytearray:
    """Exchange channels 0 and 2 of every pixel in a row."""
    out = bytearray(row)
    out[0::CHANNELS], out[2::CHANNELS] = row[2::CHANNELS], row[0::CHANNELS]
    return out


def encode_bitmap(pixels: bytes, width: int, height: int) -> bytes:
    """Encode a raw pixel buffer as a standalone bitmap file.

    ``pixels`` must hold exactly ``width * height * 3`` bytes; this is not checked.
    The input is never modified.
    """
    stride = width * CHANNELS
    padding = bytes(row_padding(width))
    file_size = bitmap_size(width, height)

    out = bytearray()
    out += struct.pack(BMP_FILE_HEADER_FMT, BMP_SIGNATURE, file_size, 0, 0, BMP_HEADER_LEN)
    out += struct.pack(
        BMP_INFO_HEADER_FMT,
        BMP_INFO_HEADER_LEN,
        width,
        height,
        BMP_PLANES,
        BMP_BITS_PER_PIXEL,
        BMP_COMPRESSION_NONE,
        0,  # image size, may be zero for uncompressed
        0,
        0,
        0,
        0,
    )

    for row in range(height - 1, -1, -1):
        start = row * stride
        out += swap_channels(pixels[start:start + stride])
        out += padding

    return bytes(out)


def parse_bitmap_header(data: bytes) -> BitmapHeader:
    if len(data) < BMP_HEADER_LEN:
        raise BitmapFormatError(f"Bitmap header needs {BMP_HEADER_LEN} bytes, got {len(data)}")

    signature, file_size, _, _, data_offset = struct.unpack(
        BMP_FILE_HEADER_FMT, data[:BMP_FILE_HEADER_LEN]
    )
    info_size, width, height, planes, bpp, compression, *_ = struct.unpack(
        BMP_INFO_HEADER_FMT, data[BMP_FILE_HEADER_LEN:BMP_HEADER_LEN]
    )
    return BitmapHeader(
        signature=signature,
        file_size=file_size,
        data_offset=data_offset,
        info_size=info_size,
        width=width,
        height=height,
        planes=planes,
        bits_per_pixel=bpp,
        compression=compression,
    )


def decode_bitmap(data: bytes) -> DecodedBitmap:
    """Undo ``encode_bitmap``: returns top-to-bottom, channel-0-first pixels.

    Only bottom-up 24-bit uncompressed bitmaps are accepted.
    """
    hdr = parse_bitmap_header(data)

    if hdr.signature != BMP_SIGNATURE:
        raise BitmapFormatError(f"Bad bitmap signature {hdr.signature!r}")
    if hdr.bits_per_pixel != BMP_BITS_PER_PIXEL:
        raise BitmapFormatError(f"Unsupported bit depth {hdr.bits_per_pixel}")
    if hdr.compression != BMP_COMPRESSION_NONE:
        raise BitmapFormatError(f"Unsupported compression {hdr.compression}")
    if hdr.width <= 0 or hdr.height <= 0:
        raise BitmapFormatError(f"Unsupported dimensions {hdr.width}x{hdr.height}")

    stride = hdr.width * CHANNELS
    padded = stride + row_padding(hdr.width)
    end = hdr.data_offset + padded * hdr.height
    if hdr.data_offset < BMP_HEADER_LEN or len(data) < end:
        raise BitmapFormatError(
            f"Pixel region [{hdr.data_offset}, {end}) exceeds file length {len(data)}"
        )

    rows = []
    for row in range(hdr.height - 1, -1, -1):
        start = hdr.data_offset + row * padded
        rows.append(bytes(swap_channels(data[start:start + stride])))

    return DecodedBitmap(hdr.width, hdr.height, b"".join(rows))
