"""Writing a rendered frame as an uncompressed 24-bit BMP file."""

from __future__ import annotations

import struct
from pathlib import Path

from .render import Frame

HEADER_SIZE = 54
"""Combined size of the file header and the DIB header, in bytes."""
_DIB_SIZE = 0x28
_PLANES = 1
_BITS_PER_PIXEL = 0x18


def _le32(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "little")


def bmp_header(size: int) -> bytes:
    """Return the 14-byte file header of a BMP file of ``size`` bytes."""
    return b"BM" + _le32(size) + bytes(4) + _le32(HEADER_SIZE)


def dib_header(width: int, height: int, size: int) -> bytes:
    """Return the 40-byte DIB header for a ``width`` x ``height`` 24-bit image.

    ``size`` is the size of the whole file; the pixel data takes what is
    left after the headers.
    """
    header = bytearray(_DIB_SIZE)
    header[0:4] = _le32(_DIB_SIZE)
    header[4:8] = _le32(width)
    header[8:12] = _le32(height)
    header[12] = _PLANES
    header[14] = _BITS_PER_PIXEL
    header[20:24] = _le32(size - HEADER_SIZE)
    return bytes(header)


def _bgr(frame: Frame) -> bytearray:
    count = frame.width * frame.height
    raw = struct.pack(f"<{count}I", *(p & 0xFFFFFFFF for p in frame.pixels))
    bgr = bytearray(count * 3)
    bgr[0::3] = raw[0::4]
    bgr[1::3] = raw[1::4]
    bgr[2::3] = raw[2::4]
    return bgr


def bmp_bytes(frame: Frame) -> bytes:
    """Encode ``frame`` as a BMP file, bottom row first, rows padded to 4 bytes."""
    width, height = frame.width, frame.height
    padding = width % 4
    size = width * height * 3 + HEADER_SIZE + padding * height
    bgr = _bgr(frame)
    row_len = width * 3
    pad = bytes(padding)
    body = b"".join(
        bytes(bgr[y * row_len:(y + 1) * row_len]) + pad
        for y in reversed(range(height))
    )
    return bmp_header(size) + dib_header(width, height, size) + body


def save_bmp(frame: Frame, path: str | Path) -> None:
    """Write ``frame`` to ``path`` as a BMP file."""
    Path(path).write_bytes(bmp_bytes(frame))