"""Report the dimensions of a simple PNG and any chunk CRC mismatches."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .png import PNG_SIG_SIZE, PngError, get_png_chunks, get_png_data_ihdr


def describe(data: bytes) -> list[str]:
    """Return report lines: the image size, then one line per bad chunk CRC.

    Raises :class:`PngError` if the chunks cannot be read.
    """
    png = get_png_chunks(data, PNG_SIG_SIZE)
    header = get_png_data_ihdr(data, PNG_SIG_SIZE)
    lines = [f"Image dimensions: {header.width} x {header.height}"]
    for name, chunk in zip(("IHDR", "IDAT", "IEND"), png.chunks):
        computed = chunk.calculate_crc()
        if computed != chunk.crc:
            lines.append(
                f"{name} chunk CRC error: computed {computed:x}, expected {chunk.crc:x}"
            )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Print information about the PNG file named by the first argument."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print("No file passed.")
        return 1
    try:
        with open(argv[0], "rb") as fp:
            data = fp.read()
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    try:
        lines = describe(data)
    except PngError:
        print("Failed to extract PNG chunks.")
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())