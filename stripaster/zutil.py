"""In-memory zlib deflation and inflation."""

from __future__ import annotations

import zlib

Z_OK = 0
Z_STREAM_END = 1
Z_NEED_DICT = 2
Z_STREAM_ERROR = -2
Z_DATA_ERROR = -3
Z_MEM_ERROR = -4
Z_VERSION_ERROR = -6

Z_NO_COMPRESSION = 0
Z_BEST_SPEED = 1
Z_BEST_COMPRESSION = 9
Z_DEFAULT_COMPRESSION = -1

_MESSAGES = {
    Z_STREAM_ERROR: "invalid compression level",
    Z_DATA_ERROR: "invalid or incomplete deflate data",
    Z_MEM_ERROR: "out of memory",
    Z_VERSION_ERROR: "zlib version mismatch!",
}


class ZlibError(Exception):
    """A zlib operation failed; ``code`` holds the zlib return code."""

    def __init__(self, code: int, detail: str | None = None) -> None:
        self.code = code
        message = _MESSAGES.get(code, f"zlib returns err {code}!")
        if detail:
            message = f"{message}: {detail}"
        super().__init__(f"zutil: {message}")


def mem_def(data: bytes, level: int = Z_DEFAULT_COMPRESSION) -> bytes:
    """Deflate ``data`` into a complete zlib stream at the given level."""
    if not (Z_DEFAULT_COMPRESSION <= level <= Z_BEST_COMPRESSION):
        raise ZlibError(Z_STREAM_ERROR, f"level {level}")
    try:
        return zlib.compress(bytes(data), level)
    except zlib.error as exc:
        raise ZlibError(Z_STREAM_ERROR, str(exc)) from exc


def mem_inf(data: bytes) -> bytes:
    """Inflate a zlib stream; raise :class:`ZlibError` if it is bad or incomplete."""
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(bytes(data))
    except zlib.error as exc:
        raise ZlibError(Z_DATA_ERROR, str(exc)) from exc
    if not inflater.eof:
        raise ZlibError(Z_DATA_ERROR, "stream ended early")
    return out