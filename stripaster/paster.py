"""Fetch the 50 strips of an image concurrently and paste them into one PNG."""

from __future__ import annotations

import queue
import re
import sys
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from .fetch import BufferTooSmallError, Fragment, fetch_fragment
from .png import PNG_SIG_SIZE, IHDR, Chunk, PngError, SimplePNG, get_png_chunks
from .zutil import Z_DEFAULT_COMPRESSION, ZlibError, mem_def, mem_inf

STRIP_SIZE = 10000
NUM_STRIPS = 50
STRIP_WIDTH = 400
STRIP_HEIGHT = 6
INF_IDAT_SIZE = STRIP_HEIGHT * (STRIP_WIDTH * 4 + 1)
OUTPUT_PATH = "all.png"
URL_TEMPLATE = "http://ece252-1.uwaterloo.ca:2530/image?img={image}&part={part}"

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

Fetcher = Callable[[str], Fragment]


class UsageError(ValueError):
    """The command-line arguments are missing or out of range."""


@dataclass(frozen=True)
class PasterConfig:
    """Run settings: buffer slots, producers, consumers, delay and image number."""

    buffer_size: int
    producers: int
    consumers: int
    sleep_ms: int
    image: int


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> PasterConfig:
    """Build a config from ``B P C X N``; raise :class:`UsageError` if invalid."""
    if len(argv) < 5:
        raise UsageError("Not enough arguments.")
    b, p, c, x, n = (_atoi(arg) for arg in argv[:5])
    if not (
        1 <= b <= 50
        and 1 <= p <= 20
        and 1 <= c <= 20
        and 0 <= x <= 1000
        and 1 <= n <= 3
    ):
        raise UsageError("Invalid arguments.")
    return PasterConfig(buffer_size=b, producers=p, consumers=c, sleep_ms=x, image=n)


def strip_url(image: int, part: int) -> str:
    """URL of one strip of an image on the strip server."""
    return URL_TEMPLATE.format(image=image, part=part)


def decode_strip(data: bytes) -> bytes:
    """Return the inflated IDAT data of a received strip PNG.

    Raises :class:`PngError` if the chunks cannot be read and
    :class:`ZlibError` if the IDAT data does not inflate.
    """
    png = get_png_chunks(data, PNG_SIG_SIZE)
    return mem_inf(png.idat.data)


def assemble_png(strips: Mapping[int, bytes]) -> SimplePNG:
    """Paste inflated strips, keyed by sequence number, into one PNG.

    Missing strips are left as zero bytes.
    """
    raw = bytearray(NUM_STRIPS * INF_IDAT_SIZE)
    for seq, strip in strips.items():
        if not 0 <= seq < NUM_STRIPS:
            raise ValueError(f"strip sequence number {seq} out of range")
        if len(strip) > INF_IDAT_SIZE:
            raise ValueError(
                f"strip {seq} holds {len(strip)} bytes, more than {INF_IDAT_SIZE}"
            )
        start = seq * INF_IDAT_SIZE
        raw[start : start + len(strip)] = strip

    header = IHDR(width=STRIP_WIDTH, height=NUM_STRIPS * STRIP_HEIGHT)
    return SimplePNG(
        Chunk.build("IHDR", header.to_bytes()),
        Chunk.build("IDAT", mem_def(bytes(raw), Z_DEFAULT_COMPRESSION)),
        Chunk.build("IEND"),
    )


def _default_fetcher(url: str) -> Fragment:
    return fetch_fragment(url, STRIP_SIZE)


def run(config: PasterConfig, fetcher: Fetcher | None = None) -> SimplePNG:
    """Fetch every strip with producer threads, decode with consumer threads.

    Producers share a bounded last-in, first-out buffer of
    ``config.buffer_size`` slots with consumers. A failed fetch is retried;
    a strip that cannot be decoded is left blank.
    """
    fetch = fetcher or _default_fetcher
    parts: queue.Queue[int] = queue.Queue()
    for part in range(NUM_STRIPS):
        parts.put(part)
    ring: queue.LifoQueue[tuple[int, Fragment] | None] = queue.LifoQueue(
        maxsize=config.buffer_size
    )
    strips: dict[int, bytes] = {}
    strips_lock = threading.Lock()
    delay = config.sleep_ms / 1000

    def produce() -> None:
        while True:
            try:
                part = parts.get_nowait()
            except queue.Empty:
                return
            try:
                fragment = fetch(strip_url(config.image, part))
            except (OSError, BufferTooSmallError):
                parts.put(part)
                continue
            ring.put((part, fragment))

    def consume() -> None:
        while True:
            item = ring.get()
            try:
                if item is None:
                    return
                part, fragment = item
                if delay:
                    time.sleep(delay)
                try:
                    inflated = decode_strip(fragment.data)
                except (PngError, ZlibError):
                    continue
                seq = fragment.seq if 0 <= fragment.seq < NUM_STRIPS else part
                with strips_lock:
                    strips[seq] = inflated[:INF_IDAT_SIZE]
            finally:
                ring.task_done()

    producers = [threading.Thread(target=produce) for _ in range(config.producers)]
    consumers = [threading.Thread(target=consume) for _ in range(config.consumers)]
    for thread in producers + consumers:
        thread.start()
    for thread in producers:
        thread.join()
    ring.join()
    for _ in consumers:
        ring.put(None)
    for thread in consumers:
        thread.join()

    return assemble_png(strips)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the paster with ``B P C X N`` and write the result to all.png."""
    if argv is None:
        argv = sys.argv[1:]
    started = time.time()
    try:
        config = parse_args(argv)
    except UsageError as exc:
        print(f"Usage: paster {exc}", file=sys.stderr)
        return 1
    png = run(config)
    png.write(OUTPUT_PATH)
    print(f"paster2 execution time: {time.time() - started:.2f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())