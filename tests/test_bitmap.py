import os
import struct

import pytest

from rtti_core.bitmap import (
    bitmap_size,
    decode_bitmap,
    encode_bitmap,
    parse_bitmap_header,
    row_padding,
)
from rtti_core.errors import BitmapFormatError


def test_two_by_one_scenario():
    pixels = bytes([10, 20, 30, 40, 50, 60])
    out = encode_bitmap(pixels, 2, 1)

    assert len(out) == 62
    assert out[:2] == b"BM"
    assert struct.unpack("<I", out[2:6])[0] == 62
    assert out[6:10] == b"\x00\x00\x00\x00"
    assert struct.unpack("<I", out[10:14])[0] == 54
    assert out[54:] == bytes([30, 20, 10, 60, 50, 40, 0, 0])


def test_info_header_fields():
    out = encode_bitmap(bytes(5 * 3 * 3), 5, 3)
    size, w, h, planes, bpp, comp = struct.unpack("<IiiHHI", out[14:34])
    assert (size, w, h, planes, bpp, comp) == (40, 5, 3, 1, 24, 0)
    assert out[34:54] == bytes(20)


@pytest.mark.parametrize("width", range(1, 9))
def test_row_padding_aligns_rows(width):
    pad = row_padding(width)
    assert 0 <= pad < 4
    assert (width * 3 + pad) % 4 == 0


@pytest.mark.parametrize("width,height", [(1, 1), (2, 3), (3, 2), (4, 4), (7, 5)])
def test_size_field_matches_length(width, height):
    out = encode_bitmap(os.urandom(width * height * 3), width, height)
    assert len(out) == bitmap_size(width, height)
    assert parse_bitmap_header(out).file_size == len(out)


def test_rows_written_bottom_up():
    # 1x3 image, rows distinguishable by value.
    pixels = bytes([1, 1, 1, 2, 2, 2, 3, 3, 3])
    out = encode_bitmap(pixels, 1, 3)
    rows = [out[54 + i * 4:54 + i * 4 + 3] for i in range(3)]
    assert rows == [b"\x03\x03\x03", b"\x02\x02\x02", b"\x01\x01\x01"]


def test_encode_does_not_mutate_input():
    pixels = bytearray(range(12))
    encode_bitmap(pixels, 2, 2)
    assert pixels == bytearray(range(12))


def test_decode_undoes_encode():
    pixels = os.urandom(7 * 5 * 3)
    decoded = decode_bitmap(encode_bitmap(pixels, 7, 5))
    assert (decoded.width, decoded.height) == (7, 5)
    assert decoded.pixels == pixels


def test_decode_rejects_bad_signature():
    out = bytearray(encode_bitmap(bytes(3), 1, 1))
    out[:2] = b"XX"
    with pytest.raises(BitmapFormatError):
        decode_bitmap(bytes(out))


def test_decode_rejects_truncated_pixels():
    out = encode_bitmap(bytes(4 * 4 * 3), 4, 4)
    with pytest.raises(BitmapFormatError):
        decode_bitmap(out[:-1])


def test_decode_rejects_short_header():
    with pytest.raises(BitmapFormatError):
        decode_bitmap(b"BM" + bytes(10))
