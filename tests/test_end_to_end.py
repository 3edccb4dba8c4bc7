import subprocess
import sys
from pathlib import Path

def run(args, cwd):
    return subprocess.run([sys.executable, *args], cwd=cwd, check=False, capture_output=True, text=True)

def test_damaged_container_end_to_end(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    container = tmp_path / "sample.bin"
    out = tmp_path / "out"

    r = run(["tools/sim_container.py", str(container), "--images", "3", "--damaged", "--seed", "7"], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(["-m", "rtti_extract.cli", str(container), "--out-dir", str(out)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    # Oversize record skipped, trailing record truncated, both reported.
    assert "Skipping record" in r.stderr
    assert "Truncated record" in r.stderr

    bitmaps = sorted(out.glob("sample_extracted_*.bmp"))
    assert [p.name for p in bitmaps] == [f"sample_extracted_{i}.bmp" for i in (1, 2, 3)]

    for bmp in bitmaps:
        r = run(["-m", "rtti_verify.cli", "bitmap", str(bmp)], cwd=repo)
        assert r.returncode == 0, r.stderr + r.stdout

    # Corrupt one byte and ensure verification fails
    b = bytearray(bitmaps[0].read_bytes())
    b[0] ^= 0x01
    bitmaps[0].write_bytes(bytes(b))
    r = run(["-m", "rtti_verify.cli", "bitmap", str(bitmaps[0])], cwd=repo)
    assert r.returncode != 0

def test_missing_argument_exit_code(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    r = run(["-m", "rtti_extract.cli"], cwd=repo)
    assert r.returncode == 1
    assert "Usage" in r.stderr
