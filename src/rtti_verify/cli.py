import json
from pathlib import Path
import click
from .logic import verify_bitmap

@click.group()
def main():
    pass

@main.command("bitmap")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def bitmap_cmd(path: Path):
    result = verify_bitmap(path)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
