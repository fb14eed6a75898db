"""CRC-32 as used by PNG chunks (polynomial 0xEDB88320, reflected)."""

from __future__ import annotations

_POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def make_crc_table() -> list[int]:
    """Return the table of CRCs of all 8-bit messages."""
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = _POLYNOMIAL ^ (c >> 1) if c & 1 else c >> 1
        table.append(c)
    return table


_TABLE = tuple(make_crc_table())


def update_crc(crc: int, data: bytes) -> int:
    """Update a running CRC with ``data``.

    The running CRC should start as all ones; the final value is its
    ones' complement (see :func:`crc`).
    """
    c = crc & _MASK
    for byte in data:
        c = _TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c


def crc(data: bytes) -> int:
    """Return the CRC-32 of ``data``."""
    return update_crc(_MASK, data) ^ _MASK