from __future__ import annotations

from typing import BinaryIO, Callable, Iterable, Iterator, NamedTuple
from warnings import warn

from rtti_core.bitmap import encode_bitmap
from rtti_core.cursor import ByteCursor
from rtti_core.errors import DimensionOutOfBounds, SinkWriteFailure, TruncatedRead
from rtti_core.protocol import (
    DELIMITER_LEN,
    MARKERS,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    SCAN_CHUNK_SIZE,
)
from rtti_core.records import check_dimensions, read_dimensions, read_pixels

from .scanner import MarkerScanner


class ExtractedImage(NamedTuple):
    index: int  # 1-based, per run
    marker: bytes
    offset: int  # absolute offset of the marker's first byte
    width: int
    height: int
    bitmap: bytes


class ImageExtractor:
    """Extraction driver: marker -> delimiter -> dimensions -> pixels -> bitmap.

    A damaged record never stops the run. Scanning resumes from wherever the
    cursor stopped; the declared pixel region of a rejected record is not skipped,
    so its bytes are searched like any other content.
    """

    def __init__(
        self,
        markers: Iterable[bytes] = MARKERS,
        max_width: int = MAX_IMAGE_WIDTH,
        max_height: int = MAX_IMAGE_HEIGHT,
        chunk_size: int = SCAN_CHUNK_SIZE,
    ):
        self.scanner = MarkerScanner(markers)
        self.max_width = max_width
        self.max_height = max_height
        self.chunk_size = chunk_size
        self.image_counter = 0
        self.scan_stats = {
            "markers": 0,
            "records": 0,
            "truncated": 0,
            "out_of_bounds": 0,
            "write_failures": 0,
        }

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

    def iter_images(self, stream: BinaryIO) -> Iterator[ExtractedImage]:
        cursor = ByteCursor(stream, self.chunk_size)

        while True:
            marker = self.scanner.find(cursor)
            if marker is None:
                return
            self.scan_stats["markers"] += 1
            marker_off = cursor.offset - len(marker)

            try:
                cursor.skip(DELIMITER_LEN)
                width, height = read_dimensions(cursor)
                check_dimensions(width, height, self.max_width, self.max_height)
                pixels = read_pixels(cursor, width, height)
            except TruncatedRead as e:
                self.scan_stats["truncated"] += 1
                warn(f"Truncated record at offset {marker_off}: {e}")
                continue
            except DimensionOutOfBounds as e:
                self.scan_stats["out_of_bounds"] += 1
                warn(f"Skipping record at offset {marker_off}: {e}")
                continue

            self.image_counter += 1
            self.scan_stats["records"] += 1
            yield ExtractedImage(
                index=self.image_counter,
                marker=marker,
                offset=marker_off,
                width=width,
                height=height,
                bitmap=encode_bitmap(pixels, width, height),
            )

    def run(self, stream: BinaryIO, sink: Callable[[ExtractedImage], object]) -> int:
        """Extract every record in ``stream`` and hand each one to ``sink``.

        Returns the number of records extracted, including those whose write failed.
        """
        extracted = 0
        for image in self.iter_images(stream):
            extracted += 1
            try:
                sink(image)
            except SinkWriteFailure as e:
                self.scan_stats["write_failures"] += 1
                warn(str(e))
        return extracted
