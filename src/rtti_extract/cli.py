"""RTTI Extract - Embedded image record to bitmap extractor."""
from __future__ import annotations

from pathlib import Path

import click

from rtti_core.errors import SourceUnavailable
from rtti_core.protocol import MARKERS, MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from rtti_extract.extractor import ExtractedImage, ImageExtractor
from rtti_extract.sink import FileSink, open_source, write_index


def extract_file(
    file_path: Path,
    out_dir: Path = Path("."),
    markers: tuple[bytes, ...] = MARKERS,
    max_width: int = MAX_IMAGE_WIDTH,
    max_height: int = MAX_IMAGE_HEIGHT,
    index_path: Path | None = None,
    quiet: bool = False,
) -> dict:
    """Extract every embedded image in ``file_path`` into ``out_dir``.

    Raises SourceUnavailable if the input cannot be opened.
    Returns the driver's scan statistics.
    """
    extractor = ImageExtractor(markers=markers, max_width=max_width, max_height=max_height)
    file_sink = FileSink(file_path, out_dir)

    def sink(image: ExtractedImage) -> None:
        path = file_sink(image)
        if not quiet:
            click.echo(f"EXTRACTED: {path} ({image.width}x{image.height})")

    with open_source(file_path) as src:
        out_dir.mkdir(parents=True, exist_ok=True)
        extractor.run(src, sink)

    if index_path is not None and write_index(file_sink.entries, index_path):
        if not quiet:
            click.echo(f"INDEX: {index_path}")

    stats = extractor.get_scan_stats()
    if not quiet:
        click.echo(f"DONE: {stats['records']} image(s) from {file_path}")
        click.echo(f"  Markers: {stats['markers']}")
        click.echo(f"  Truncated: {stats['truncated']}")
        click.echo(f"  Out of bounds: {stats['out_of_bounds']}")
        click.echo(f"  Write failures: {stats['write_failures']}")
    return stats


@click.command()
@click.argument("file_path", type=click.Path(path_type=Path))
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for extracted bitmaps",
)
@click.option("--marker", "markers", multiple=True, help="Record marker (repeatable); default Image8")
@click.option("--max-width", type=click.IntRange(min=1), default=MAX_IMAGE_WIDTH, show_default=True)
@click.option("--max-height", type=click.IntRange(min=1), default=MAX_IMAGE_HEIGHT, show_default=True)
@click.option(
    "--index",
    "index_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a Parquet index of extracted images",
)
@click.option("--quiet", is_flag=True, help="Suppress status lines")
def extract_cmd(
    file_path: Path,
    out_dir: Path,
    markers: tuple[str, ...],
    max_width: int,
    max_height: int,
    index_path: Path | None,
    quiet: bool,
) -> None:
    """Extract embedded images from FILE_PATH as bitmap files."""
    marker_set = tuple(m.encode("utf-8") for m in markers) or MARKERS
    try:
        extract_file(
            file_path,
            out_dir,
            markers=marker_set,
            max_width=max_width,
            max_height=max_height,
            index_path=index_path,
            quiet=quiet,
        )
    except SourceUnavailable:
        # Unreadable input is a silent no-op.
        return
    except Exception as e:
        # Fail closed, with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    """Console entry point. Usage errors exit with status 1."""
    try:
        rc = extract_cmd.main(args=argv, standalone_mode=False)
    except click.UsageError as e:
        e.show()
        raise SystemExit(1)
    except click.ClickException as e:
        e.show()
        raise SystemExit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        raise SystemExit(1)
    raise SystemExit(rc or 0)


if __name__ == "__main__":
    main()
