"""A simple PNG model: signature, one IHDR, one IDAT and one IEND chunk."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

from .crc import crc

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_SIG_SIZE = 8
CHUNK_LEN_SIZE = 4
CHUNK_TYPE_SIZE = 4
CHUNK_CRC_SIZE = 4
DATA_IHDR_SIZE = 13

_IHDR_FORMAT = ">IIBBBBB"


class PngError(ValueError):
    """The data is not a well-formed simple PNG."""


def _chunk_type(value: bytes | str) -> bytes:
    raw = value.encode("ascii") if isinstance(value, str) else bytes(value)
    if len(raw) != CHUNK_TYPE_SIZE:
        raise PngError(f"chunk type must be {CHUNK_TYPE_SIZE} bytes, got {raw!r}")
    return raw


@dataclass
class Chunk:
    """One PNG chunk; ``crc`` is the value as stored or received."""

    type: bytes
    data: bytes
    crc: int

    @property
    def length(self) -> int:
        return len(self.data)

    def calculate_crc(self) -> int:
        """CRC over the chunk type and data."""
        return crc(self.type + self.data)

    def is_crc_valid(self) -> bool:
        return self.crc == self.calculate_crc()

    def to_bytes(self) -> bytes:
        return (
            struct.pack(">I", len(self.data))
            + self.type
            + self.data
            + struct.pack(">I", self.crc & 0xFFFFFFFF)
        )

    @classmethod
    def build(cls, chunk_type: bytes | str, data: bytes = b"") -> Chunk:
        """Make a chunk with a freshly computed CRC."""
        raw_type = _chunk_type(chunk_type)
        payload = bytes(data)
        return cls(raw_type, payload, crc(raw_type + payload))


@dataclass
class IHDR:
    """The data field of an IHDR chunk."""

    width: int
    height: int
    bit_depth: int = 8
    color_type: int = 6
    compression: int = 0
    filter: int = 0
    interlace: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> IHDR:
        if len(data) < DATA_IHDR_SIZE:
            raise PngError(f"IHDR data needs {DATA_IHDR_SIZE} bytes, got {len(data)}")
        return cls(*struct.unpack_from(_IHDR_FORMAT, data))

    def to_bytes(self) -> bytes:
        return struct.pack(
            _IHDR_FORMAT,
            self.width,
            self.height,
            self.bit_depth,
            self.color_type,
            self.compression,
            self.filter,
            self.interlace,
        )


@dataclass
class SimplePNG:
    """A PNG made of exactly three chunks."""

    ihdr: Chunk
    idat: Chunk
    iend: Chunk

    @property
    def chunks(self) -> tuple[Chunk, Chunk, Chunk]:
        return (self.ihdr, self.idat, self.iend)

    @property
    def header(self) -> IHDR:
        return IHDR.from_bytes(self.ihdr.data)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    @classmethod
    def from_bytes(cls, data: bytes) -> SimplePNG:
        """Parse a whole file, signature included."""
        if not is_png(data):
            raise PngError("missing PNG signature")
        return get_png_chunks(data, PNG_SIG_SIZE)

    def to_bytes(self) -> bytes:
        return PNG_SIGNATURE + b"".join(chunk.to_bytes() for chunk in self.chunks)

    def write(self, path: str | os.PathLike[str]) -> None:
        with open(path, "wb") as fp:
            fp.write(self.to_bytes())


def is_png(data: bytes) -> bool:
    """True if ``data`` starts with the PNG signature."""
    return bytes(data[:PNG_SIG_SIZE]) == PNG_SIGNATURE


def read_chunk(data: bytes, offset: int) -> tuple[Chunk, int]:
    """Read the chunk at ``offset``; return it and the offset just past it."""
    header_end = offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE
    if offset < 0 or header_end > len(data):
        raise PngError(f"truncated chunk header at offset {offset}")
    (length,) = struct.unpack_from(">I", data, offset)
    chunk_type = bytes(data[offset + CHUNK_LEN_SIZE : header_end])
    data_end = header_end + length
    end = data_end + CHUNK_CRC_SIZE
    if end > len(data):
        raise PngError(f"truncated {chunk_type!r} chunk at offset {offset}")
    (stored_crc,) = struct.unpack_from(">I", data, data_end)
    return Chunk(chunk_type, bytes(data[header_end:data_end]), stored_crc), end


def get_png_data_ihdr(data: bytes, offset: int) -> IHDR:
    """Parse IHDR data from the chunk starting at ``offset``."""
    start = offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE
    if offset < 0:
        raise PngError("negative offset")
    return IHDR.from_bytes(bytes(data[start : start + DATA_IHDR_SIZE]))


def get_png_chunks(data: bytes, offset: int) -> SimplePNG:
    """Read IHDR, IDAT and IEND chunks in order, starting at ``offset``."""
    chunks = []
    position = offset
    for name in ("IHDR", "IDAT", "IEND"):
        try:
            chunk, position = read_chunk(data, position)
        except PngError as exc:
            raise PngError(f"failed to get {name} chunk: {exc}") from exc
        chunks.append(chunk)
    return SimplePNG(*chunks)


def write_png(path: str | os.PathLike[str], png: SimplePNG) -> None:
    """Write ``png`` to ``path``."""
    png.write(path)