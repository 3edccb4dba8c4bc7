"""RTTI Extract protocol constants.

Single source of truth for the embedded record layout and the bitmap output layout.
Keep this file stable. Scanner, parsers and encoder must remain synchronized.
"""

# Record markers, in priority order for matches ending at the same offset
MARKERS = (b"Image8",)

# Record: [Marker | Delimiter(1) | Width(4) | Height(4) | Pixels(W*H*3)]
DELIMITER_LEN = 1
DIM_FMT = "<I"
DIM_LEN = 4
CHANNELS = 3

# Default safety bounds (2000 x 2000 x 3 ~= 11.4 MiB per pixel buffer)
MAX_IMAGE_WIDTH = 2000
MAX_IMAGE_HEIGHT = 2000

# Scanner read-ahead
SCAN_CHUNK_SIZE = 64 * 1024  # 64KB

# Bitmap file header: [Signature(2) | FileSize(4) | Reserved(2) | Reserved(2) | DataOffset(4)]
BMP_SIGNATURE = b"BM"
BMP_FILE_HEADER_FMT = "<2sIHHI"
BMP_FILE_HEADER_LEN = 14

# Bitmap info header (BITMAPINFOHEADER):
# [Size(4) | Width(4) | Height(4) | Planes(2) | BPP(2) | Compression(4) |
#  ImageSize(4) | XPelsPerMeter(4) | YPelsPerMeter(4) | ColorsUsed(4) | ColorsImportant(4)]
BMP_INFO_HEADER_FMT = "<IiiHHIIiiII"
BMP_INFO_HEADER_LEN = 40

BMP_HEADER_LEN = BMP_FILE_HEADER_LEN + BMP_INFO_HEADER_LEN
BMP_PLANES = 1
BMP_BITS_PER_PIXEL = 24
BMP_COMPRESSION_NONE = 0
BMP_ROW_ALIGN = 4

OUTPUT_EXT = "bmp"
