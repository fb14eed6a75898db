"""Fetch PNG image strips concurrently and paste them into one PNG, with CRC, zlib, PNG and stack helpers."""

__version__ = "0.1.0"
__all__ = ["crc", "zutil", "png", "stack", "pnginfo", "fetch", "paster"]