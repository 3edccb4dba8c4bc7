from pathlib import Path
from rtti_core.bitmap import bitmap_size, decode_bitmap, parse_bitmap_header
from rtti_core.errors import BitmapFormatError
from rtti_core.protocol import (
    BMP_BITS_PER_PIXEL,
    BMP_COMPRESSION_NONE,
    BMP_HEADER_LEN,
    BMP_INFO_HEADER_LEN,
    BMP_PLANES,
    BMP_SIGNATURE,
)
from .const import ERRORS

def _fail(code: str, **detail) -> dict:
    err = {"code": code, "message": ERRORS[code], **detail}
    return {"status": "FAIL", "error_count": 1, "errors": [err]}

def verify_bitmap(path: Path) -> dict:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        return _fail("E_FILE_MISSING", path=str(path), detail=str(e))

    if len(data) < BMP_HEADER_LEN:
        return _fail("E_HEADER_SHORT", length=len(data))

    hdr = parse_bitmap_header(data)
    if hdr.signature != BMP_SIGNATURE:
        return _fail("E_SIGNATURE", found=hdr.signature.hex())
    if hdr.file_size != len(data):
        return _fail("E_SIZE_MISMATCH", declared=hdr.file_size, actual=len(data))
    if hdr.data_offset != BMP_HEADER_LEN:
        return _fail("E_DATA_OFFSET", found=hdr.data_offset)
    if hdr.info_size != BMP_INFO_HEADER_LEN:
        return _fail("E_INFO_HEADER", found=hdr.info_size)
    if (hdr.planes, hdr.bits_per_pixel, hdr.compression) != (BMP_PLANES, BMP_BITS_PER_PIXEL, BMP_COMPRESSION_NONE):
        return _fail("E_FORMAT", planes=hdr.planes, bits_per_pixel=hdr.bits_per_pixel, compression=hdr.compression)
    if hdr.width <= 0 or hdr.height <= 0:
        return _fail("E_DIMENSIONS", width=hdr.width, height=hdr.height)

    # Header is self-consistent; now the row layout must account for every byte.
    expected = bitmap_size(hdr.width, hdr.height)
    if expected != len(data):
        return _fail("E_SIZE_MISMATCH", declared=expected, actual=len(data))
    try:
        decode_bitmap(data)
    except BitmapFormatError as e:
        return _fail("E_PIXELS", detail=str(e))

    return {"status": "PASS", "error_count": 0, "errors": [], "width": hdr.width, "height": hdr.height}
