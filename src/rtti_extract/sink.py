from __future__ import annotations

import hashlib
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from rtti_core.errors import SinkWriteFailure, SourceUnavailable
from rtti_core.protocol import OUTPUT_EXT

from .extractor import ExtractedImage

INDEX_SCHEMA = pa.schema(
    [
        ("image_index", pa.int32()),
        ("marker", pa.string()),
        ("offset", pa.int64()),
        ("width", pa.int32()),
        ("height", pa.int32()),
        ("file", pa.string()),
        ("length", pa.int64()),
        ("status", pa.string()),
        ("content_hash", pa.string()),
    ]
)


def open_source(file_path: Path):
    try:
        return open(file_path, "rb")
    except OSError as e:
        raise SourceUnavailable(f"Cannot open {file_path}: {e.strerror or e}") from e


def output_name(stem: str, index: int, ext: str = OUTPUT_EXT) -> str:
    return f"{stem}_extracted_{index}.{ext}"


class FileSink:
    """Writes each extracted bitmap to ``<stem>_extracted_<N>.bmp`` and remembers what happened."""

    def __init__(self, source_path: Path, out_dir: Path = Path(".")):
        self.stem = Path(source_path).stem
        self.out_dir = Path(out_dir)
        self.entries: list[dict] = []

    def path_for(self, image: ExtractedImage) -> Path:
        return self.out_dir / output_name(self.stem, image.index)

    def __call__(self, image: ExtractedImage) -> Path:
        path = self.path_for(image)
        entry = {
            "image_index": image.index,
            "marker": image.marker.decode("latin-1"),
            "offset": image.offset,
            "width": image.width,
            "height": image.height,
            "file": path.name,
            "length": len(image.bitmap),
            "status": "WRITTEN",
            "content_hash": hashlib.sha256(image.bitmap).hexdigest(),
        }
        self.entries.append(entry)

        try:
            with open(path, "wb") as f:
                f.write(image.bitmap)
        except OSError as e:
            entry["status"] = "WRITE_FAILED"
            raise SinkWriteFailure(path, e.strerror or str(e)) from e
        return path


def write_index(entries: list[dict], index_path: Path) -> bool:
    """Write the extraction index as Parquet. Returns False when there is nothing to write."""
    df = pd.DataFrame(entries)
    if df.empty:
        return False

    df = df.sort_values("image_index")
    Path(index_path).parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, schema=INDEX_SCHEMA, preserve_index=False)
    pq.write_table(table, index_path)
    return True
