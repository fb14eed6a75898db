"""Download one image fragment over HTTP and save it to a file."""

from __future__ import annotations

import os
import re
import sys
import urllib.error
import urllib.request
from collections.abc import Iterable, Sequence

IMG_URL = "http://ece252-1.uwaterloo.ca:2530/image?img=1&part=20"
FRAGMENT_HEADER = "X-Ece252-Fragment: "
BUF_SIZE = 10240
USER_AGENT = "libcurl-agent/1.0"
DEFAULT_TIMEOUT = 30.0

_READ_SIZE = 16384
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class BufferTooSmallError(OverflowError):
    """Received data does not fit in the fragment's buffer."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _as_text(line: bytes | str) -> str:
    return line.decode("latin-1") if isinstance(line, (bytes, bytearray)) else line


def parse_fragment_seq(line: bytes | str) -> int | None:
    """Return the sequence number carried by a fragment header line, or None.

    The line must start with the header name (case-sensitive) and have
    something after it; the number is read like ``atoi``, so text that is
    not a number gives 0.
    """
    text = _as_text(line)
    if len(text) > len(FRAGMENT_HEADER) and text.startswith(FRAGMENT_HEADER):
        return _atoi(text[len(FRAGMENT_HEADER):])
    return None


class Fragment:
    """Bytes received for one fragment, with the sequence number from its headers.

    ``seq`` is -1 until a fragment header has been seen.
    """

    def __init__(self, max_size: int = BUF_SIZE) -> None:
        self.max_size = max_size
        self.seq = -1
        self._buf = bytearray()

    @property
    def data(self) -> bytes:
        return bytes(self._buf)

    @property
    def size(self) -> int:
        return len(self._buf)

    def append(self, chunk: bytes) -> int:
        """Add received body bytes; return how many were taken.

        One byte of the capacity is kept in reserve, so the data may hold
        at most ``max_size - 1`` bytes.
        """
        if len(self._buf) + len(chunk) + 1 > self.max_size:
            raise BufferTooSmallError("User buffer is too small, abort...")
        self._buf += chunk
        return len(chunk)

    def handle_header(self, line: bytes | str) -> int:
        """Look at one header line; record its sequence number if it has one."""
        seq = parse_fragment_seq(line)
        if seq is not None:
            self.seq = seq
        return len(line)


def _header_lines(headers: Iterable[tuple[str, str]]) -> list[str]:
    return [f"{name}: {value}\r\n" for name, value in headers]


def fetch_fragment(
    url: str, max_size: int = BUF_SIZE, timeout: float = DEFAULT_TIMEOUT
) -> Fragment:
    """GET ``url`` and return the received fragment.

    HTTP error statuses still deliver their body, as a plain transfer
    would; network failures raise :class:`OSError`, and a body too large
    for ``max_size`` raises :class:`BufferTooSmallError`.
    """
    fragment = Fragment(max_size)
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        response = urllib.request.urlopen(request, timeout=timeout)
    except urllib.error.HTTPError as exc:
        response = exc
    with response:
        for line in _header_lines(response.headers.items()):
            fragment.handle_header(line)
        while chunk := response.read(_READ_SIZE):
            fragment.append(chunk)
    return fragment


def output_name(seq: int, pid: int) -> str:
    """File name under which a fragment is saved."""
    return f"./output_{seq}_{pid}.png"


def write_file(path: str | os.PathLike[str], data: bytes) -> None:
    """Write ``data`` to ``path``, replacing any existing file."""
    if data is None:
        raise ValueError("write_file: input data is null!")
    with open(path, "wb") as fp:
        fp.write(data)


def main(argv: Sequence[str] | None = None) -> int:
    """Fetch the fragment at the given URL (or the default) and save it."""
    if argv is None:
        argv = sys.argv[1:]
    url = argv[0] if argv else IMG_URL
    pid = os.getpid()
    print(f"fetch: URL is {url}")

    fragment = Fragment(BUF_SIZE)
    try:
        fragment = fetch_fragment(url, BUF_SIZE)
    except BufferTooSmallError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"fetch failed: {exc}", file=sys.stderr)
    else:
        print(f"{fragment.size} bytes received in memory, seq={fragment.seq}.")

    write_file(output_name(fragment.seq, pid), fragment.data)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())