"""Reader for XPM images, decoded to 0xAARRGGBB pixel values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .colors import NONE_COLOR, lookup_color
from .errors import TextureError
from .text import find, find_unquoted, split_words

TRANSPARENT = 0xFF000000
"""Pixel value given to the colour ``none``."""

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")


@dataclass(frozen=True)
class Image:
    """A decoded image: ``pixels`` holds ``width * height`` values row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[x + y * self.width]


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def strip_comments(text: str) -> str:
    """Blank out C comments outside quoted strings, keeping the text's length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = find(text[begin + 2:], "*/")
        stop = len(text) if end == -1 else begin + end + 4
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := find_unquoted(text, "//")) != -1:
        end = find(text[begin + 2:], "\n")
        stop = len(text) if end == -1 else begin + end + 3
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``, in order."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def parse_color(name: str, extra: str | None) -> int:
    """Return the colour a colour-table entry names.

    ``#RRGGBB`` is read as hexadecimal; otherwise ``name`` (joined to
    ``extra`` with a space when given) is looked up by name.
    """
    if name.startswith("#"):
        digits = _HEX_PREFIX.match(name[1:]).group(0)
        return int(digits, 16) if digits else 0
    if extra is not None:
        name = f"{name} {extra}"
    return lookup_color(name)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Decode an image from the string values of an XPM file."""
    rows = iter(lines)

    def next_row(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise TextureError(f"XPM data ends before the {what}") from None

    header = split_words(next_row("header"))
    values = [_atoi(word) for word in header[:4]]
    if len(values) < 4 or not all(values):
        raise TextureError("invalid XPM header")
    width, height, ncolors, cpp = values

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        row = next_row("colour table")
        words = split_words(row[cpp:])
        try:
            at = words.index("c") + 1
        except ValueError:
            raise TextureError(f"XPM colour without a 'c' key: {row!r}") from None
        if at >= len(words):
            raise TextureError(f"XPM colour without a value: {row!r}")
        color = parse_color(words[at], words[at + 1] if at + 1 < len(words) else None)
        key = row[:cpp]
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    pixels: list[int] = []
    for _ in range(height):
        row = next_row("pixel rows")
        if len(row) < width * cpp:
            raise TextureError(f"XPM pixel row too short: {row!r}")
        for x in range(width):
            color = palette.get(row[cpp * x:cpp * (x + 1)], 0)
            pixels.append(TRANSPARENT if color == NONE_COLOR else color & 0xFFFFFFFF)
    return Image(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> Image:
    """Decode an image from the full text of an XPM file."""
    return parse_xpm(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> Image:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise TextureError(f"cannot read texture {path}: {exc}") from exc
    return parse_xpm_text(text)