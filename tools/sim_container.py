import os, random, struct
from pathlib import Path

from rtti_core.protocol import (
    CHANNELS,
    DELIMITER_LEN,
    DIM_FMT,
    MARKERS,
    MAX_IMAGE_WIDTH,
)

# --- CONFIGURATION ---
MARKER = MARKERS[0]
DELIMITER = b"\n" * DELIMITER_LEN
FILLER_RANGE = (64, 4096)  # random bytes between records
SIZE_RANGE = (1, 48)


def build_record(width, height, pixels=None, delimiter=DELIMITER):
    """Marker + delimiter + dimensions + pixels. Random pixels unless given."""
    if pixels is None:
        pixels = os.urandom(width * height * CHANNELS)
    return (
        MARKER
        + delimiter
        + struct.pack(DIM_FMT, width & 0xFFFFFFFF)
        + struct.pack(DIM_FMT, height & 0xFFFFFFFF)
        + pixels
    )


def filler(rng):
    # Random filler must not contain the marker by accident.
    while True:
        blob = bytes(rng.getrandbits(8) for _ in range(rng.randint(*FILLER_RANGE)))
        if MARKER not in blob:
            return blob


def generate_container(out_path, images=3, damaged=False, seed=None):
    """Write a synthetic container and return the (width, height) of each valid record.

    With ``damaged`` an oversize record is placed after the first image and a
    truncated record closes the file.
    """
    rng = random.Random(seed)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    dims = []
    with open(out_path, "wb") as f:
        for i in range(images):
            f.write(filler(rng))
            w, h = rng.randint(*SIZE_RANGE), rng.randint(*SIZE_RANGE)
            f.write(build_record(w, h, pixels=bytes(rng.getrandbits(8) for _ in range(w * h * CHANNELS))))
            dims.append((w, h))

            if damaged and i == 0:
                f.write(filler(rng))
                # Declares a huge image; the extractor must skip it and keep scanning.
                f.write(build_record(MAX_IMAGE_WIDTH + 1, 10, pixels=b""))

        f.write(filler(rng))
        if damaged:
            f.write(build_record(16, 16, pixels=b"\x00" * 10))

    print(f"GENERATED: {out_path} ({len(dims)} images, damaged={damaged})")
    return dims


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_container.py OUT_FILE [--images N] [--damaged] [--seed N]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_int(arg_list: list[str], flag: str, default):
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    damaged, args = pop_flag(args, "--damaged")
    images, args = pop_int(args, "--images", 3)
    seed, args = pop_int(args, "--seed", None)

    out = args[0] if len(args) > 0 else "sample_container.bin"
    generate_container(out, images=images, damaged=damaged, seed=seed)
