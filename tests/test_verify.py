import json
import struct

from click.testing import CliRunner

from rtti_core.bitmap import encode_bitmap
from rtti_verify.cli import main
from rtti_verify.logic import verify_bitmap


def write_bmp(path, width=3, height=2, mutate=None):
    data = bytearray(encode_bitmap(bytes(range(width * height * 3)), width, height))
    if mutate:
        mutate(data)
    path.write_bytes(bytes(data))
    return path


def codes(result):
    return [e["code"] for e in result["errors"]]


def test_pass(tmp_path):
    result = verify_bitmap(write_bmp(tmp_path / "ok.bmp"))
    assert result["status"] == "PASS"
    assert (result["width"], result["height"]) == (3, 2)


def test_missing_file(tmp_path):
    assert codes(verify_bitmap(tmp_path / "gone.bmp")) == ["E_FILE_MISSING"]


def test_short_header(tmp_path):
    p = tmp_path / "short.bmp"
    p.write_bytes(b"BM" + bytes(20))
    assert codes(verify_bitmap(p)) == ["E_HEADER_SHORT"]


def test_bad_signature(tmp_path):
    p = write_bmp(tmp_path / "sig.bmp", mutate=lambda d: d.__setitem__(slice(0, 2), b"MB"))
    assert codes(verify_bitmap(p)) == ["E_SIGNATURE"]


def test_truncated_file(tmp_path):
    p = write_bmp(tmp_path / "cut.bmp", mutate=lambda d: d.__delitem__(slice(-1, None)))
    assert codes(verify_bitmap(p)) == ["E_SIZE_MISMATCH"]


def test_wrong_bit_depth(tmp_path):
    p = write_bmp(tmp_path / "bpp.bmp", mutate=lambda d: d.__setitem__(slice(28, 30), struct.pack("<H", 32)))
    assert codes(verify_bitmap(p)) == ["E_FORMAT"]


def test_negative_height(tmp_path):
    p = write_bmp(tmp_path / "neg.bmp", mutate=lambda d: d.__setitem__(slice(22, 26), struct.pack("<i", -2)))
    assert codes(verify_bitmap(p)) == ["E_DIMENSIONS"]


def test_cli_pass_and_fail(tmp_path):
    runner = CliRunner()
    ok = runner.invoke(main, ["bitmap", str(write_bmp(tmp_path / "ok.bmp"))])
    assert ok.exit_code == 0
    assert json.loads(ok.output)["status"] == "PASS"

    bad = write_bmp(tmp_path / "bad.bmp", mutate=lambda d: d.__setitem__(slice(10, 14), struct.pack("<I", 60)))
    res = runner.invoke(main, ["bitmap", str(bad)])
    assert res.exit_code == 1
    assert json.loads(res.output)["errors"][0]["code"] == "E_DATA_OFFSET"
