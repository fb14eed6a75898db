import threading

import pytest

from stripaster.fetch import Fragment
from stripaster.paster import (
    INF_IDAT_SIZE,
    NUM_STRIPS,
    PasterConfig,
    UsageError,
    assemble_png,
    decode_strip,
    main,
    parse_args,
    run,
    strip_url,
)
from stripaster.png import IHDR, Chunk, PngError, SimplePNG
from stripaster.zutil import mem_def, mem_inf


def _strip_png(payload: bytes) -> bytes:
    header = IHDR(width=400, height=6)
    png = SimplePNG(
        Chunk.build("IHDR", header.to_bytes()),
        Chunk.build("IDAT", mem_def(payload)),
        Chunk.build("IEND"),
    )
    return png.to_bytes()


def _payload(part: int) -> bytes:
    return bytes([part + 1]) * INF_IDAT_SIZE


def _fragment(data: bytes, seq: int) -> Fragment:
    fragment = Fragment(len(data) + 16)
    fragment.append(data)
    fragment.handle_header(f"X-Ece252-Fragment: {seq}\r\n")
    return fragment


def _part_of(url: str) -> int:
    return int(url.rsplit("part=", 1)[1])


def _expected_image() -> bytes:
    return b"".join(_payload(part) for part in range(NUM_STRIPS))


def test_parse_args_valid():
    config = parse_args(["5", "2", "3", "10", "1"])
    assert config == PasterConfig(
        buffer_size=5, producers=2, consumers=3, sleep_ms=10, image=1
    )


def test_parse_args_too_few():
    with pytest.raises(UsageError):
        parse_args(["5", "2", "3"])


@pytest.mark.parametrize(
    "argv",
    [
        ["0", "1", "1", "0", "1"],
        ["51", "1", "1", "0", "1"],
        ["1", "0", "1", "0", "1"],
        ["1", "21", "1", "0", "1"],
        ["1", "1", "0", "0", "1"],
        ["1", "1", "21", "0", "1"],
        ["1", "1", "1", "-1", "1"],
        ["1", "1", "1", "1001", "1"],
        ["1", "1", "1", "0", "0"],
        ["1", "1", "1", "0", "4"],
    ],
)
def test_parse_args_out_of_range(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


def test_parse_args_non_numeric_delay_reads_as_zero():
    assert parse_args(["1", "1", "1", "abc", "1"]).sleep_ms == 0


def test_strip_url():
    assert strip_url(2, 7) == "http://ece252-1.uwaterloo.ca:2530/image?img=2&part=7"


def test_decode_strip_round_trip():
    payload = _payload(4)
    assert decode_strip(_strip_png(payload)) == payload


def test_decode_strip_rejects_truncated_data():
    with pytest.raises(PngError):
        decode_strip(_strip_png(_payload(0))[:20])


def test_assemble_png_places_strips():
    png = assemble_png({0: b"\x01\x02", 49: b"\x03"})
    assert png.width == 400
    assert png.height == 300
    raw = mem_inf(png.idat.data)
    assert len(raw) == NUM_STRIPS * INF_IDAT_SIZE
    assert raw[:2] == b"\x01\x02"
    assert raw[49 * INF_IDAT_SIZE] == 3
    assert all(chunk.is_crc_valid() for chunk in png.chunks)
    assert png.iend.data == b""


def test_assemble_png_rejects_bad_seq():
    with pytest.raises(ValueError):
        assemble_png({NUM_STRIPS: b"\x00"})


def test_assemble_png_rejects_oversized_strip():
    with pytest.raises(ValueError):
        assemble_png({0: bytes(INF_IDAT_SIZE + 1)})


def test_run_collects_every_strip():
    def fetcher(url):
        part = _part_of(url)
        return _fragment(_strip_png(_payload(part)), part)

    png = run(PasterConfig(3, 4, 2, 0, 1), fetcher)
    assert mem_inf(png.idat.data) == _expected_image()


def test_run_places_by_header_sequence():
    def fetcher(url):
        part = _part_of(url)
        seq = NUM_STRIPS - 1 - part
        return _fragment(_strip_png(_payload(seq)), seq)

    png = run(PasterConfig(1, 1, 1, 0, 2), fetcher)
    assert mem_inf(png.idat.data) == _expected_image()


def test_run_retries_failed_fetches():
    failed = set()
    lock = threading.Lock()

    def fetcher(url):
        part = _part_of(url)
        with lock:
            first = part not in failed
            failed.add(part)
        if first:
            raise OSError("connection refused")
        return _fragment(_strip_png(_payload(part)), part)

    png = run(PasterConfig(2, 3, 3, 0, 3), fetcher)
    assert failed == set(range(NUM_STRIPS))
    assert mem_inf(png.idat.data) == _expected_image()


def test_run_leaves_undecodable_strip_blank():
    def fetcher(url):
        part = _part_of(url)
        data = b"garbage" if part == 5 else _strip_png(_payload(part))
        return _fragment(data, part)

    png = run(PasterConfig(4, 2, 2, 0, 1), fetcher)
    raw = mem_inf(png.idat.data)
    assert raw[5 * INF_IDAT_SIZE : 6 * INF_IDAT_SIZE] == bytes(INF_IDAT_SIZE)
    assert raw[:INF_IDAT_SIZE] == _payload(0)


def test_main_rejects_bad_arguments(capsys):
    assert main(["1", "1"]) == 1
    assert "Not enough arguments." in capsys.readouterr().err