"""Reading and checking the ``.cub`` scene description."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator

from .errors import ConfigError
from .mapgrid import GameMap

log = logging.getLogger(__name__)

MAX_WIDTH = 2560
MAX_HEIGHT = 1395
RECOMMENDED_MIN = 500

_DIGITS = frozenset("0123456789")
_MAP_START = ("0", "1", "2")

# Line prefix, Config field, and the name used in error messages.
_TEXTURE_KEYS = (
    ("NO ", "north", "no_texture"),
    ("SO ", "south", "so_texture"),
    ("WE ", "west", "we_texture"),
    ("EA ", "east", "ea_texture"),
    ("S ", "sprite", "s_texture"),
)

_MISSING = "Parameter NULL or no valid ID (Too hight res)"


@dataclass
class Config:
    """Everything a scene file describes; unset values keep their defaults."""

    width: int = -1
    height: int = -1
    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    sprite: str | None = None
    floor: int = -1
    ceiling: int = -1
    grid: GameMap | None = None


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack three colour components into a 0xRRGGBB value."""
    if r > 255 or g > 255 or b > 255:
        raise ConfigError("Couleur superieur a 255")
    return (((r << 8) + g) << 8) + b


def remove_spaces(text: str) -> str:
    """Return ``text`` with every space removed."""
    return text.replace(" ", "")


def check_config_name(name: str) -> bool:
    """Tell whether ``name`` looks like a scene file: ``<something>.cub``."""
    return len(name) - 4 > 0 and name[-4:] == ".cub"


def _is_number(word: str) -> bool:
    return bool(word) and all(ch in _DIGITS for ch in word)


def _words(text: str, separator: str) -> list[str]:
    return [word for word in text.strip(" ").split(separator) if word]


def _parse_resolution(config: Config, line: str, count: int) -> None:
    message = "Parsing resolution (arg count or arg ID)"
    if config.height != -1:
        raise ConfigError(message, count)
    words = _words(line[1:], " ")
    if len(words) != 2:
        raise ConfigError(message, count)
    if not all(_is_number(word) for word in words):
        raise ConfigError("Parsing resolution (no digit resolution or neg)", count)
    config.width, config.height = (int(word) for word in words)


def _parse_texture(config: Config, line: str, count: int,
                   prefix: str, attr: str, label: str) -> None:
    duplicate = f"Parsing {label} (check arg count or arg ID)"
    if getattr(config, attr) is not None:
        raise ConfigError(duplicate, count)
    words = _words(line[len(prefix) - 1:], " ")
    if len(words) != 1:
        if attr == "north":
            raise ConfigError(f"Parsing {label} (arg count or arg ID)", count)
        raise ConfigError(duplicate, count)
    setattr(config, attr, words[0])


def _parse_color(config: Config, line: str, count: int, attr: str, letter: str) -> None:
    message = f"Parsing {letter} color (check arg count or arg ID)"
    if getattr(config, attr) != -1:
        raise ConfigError(message, count)
    body = line[1:]
    parts = _words(body, ",")
    if body.count(",") != 2 or len(parts) != 3:
        raise ConfigError(message, count)
    values = [part.strip(" ") for part in parts]
    if not all(_is_number(value) for value in values):
        raise ConfigError(f"Parsing {letter} color (no digit color or negative)", count)
    setattr(config, attr, rgb_to_int(*(int(value) for value in values)))


def _parse_line(config: Config, line: str, count: int) -> None:
    if line.startswith("R"):
        _parse_resolution(config, line, count)
        return
    for prefix, attr, label in _TEXTURE_KEYS:
        if line.startswith(prefix):
            _parse_texture(config, line, count, prefix, attr, label)
            return
    if line.startswith("F "):
        _parse_color(config, line, count, "floor", "F")
    elif line.startswith("C "):
        _parse_color(config, line, count, "ceiling", "C")
    elif line:
        raise ConfigError("ID invalid", count)


def _parse_map(first: str, rest: Iterator[str]) -> GameMap:
    grid = GameMap.from_rows([first, *rest])
    grid.validate()
    return grid


def parse_config(lines: Iterable[str]) -> Config:
    """Parse the lines of a scene file; the map runs from its first row to the end."""
    config = Config()
    rows = iter(lines)
    for count, line in enumerate(rows, start=1):
        if line[:1] in _MAP_START and line:
            config.grid = _parse_map(line, rows)
            break
        _parse_line(config, line, count)
    return config


def load_config(path: str | Path) -> Config:
    """Read and parse the scene file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    return parse_config(text.splitlines())


def validate_config(config: Config) -> None:
    """Raise ConfigError unless every required parameter has been given."""
    textures = (config.north, config.south, config.west, config.east, config.sprite)
    if (
        not config.width
        or not config.height
        or any(texture is None for texture in textures)
        or config.floor == -1
        or config.ceiling == -1
        or config.grid is None
    ):
        raise ConfigError(_MISSING)


def fit_resolution(config: Config) -> Config:
    """Return ``config`` with its resolution clamped to the largest display."""
    width, height = config.width, config.height
    if width > MAX_WIDTH or width < 0:
        width = MAX_WIDTH
    if height > MAX_HEIGHT or height < 0:
        height = MAX_HEIGHT
    elif width < RECOMMENDED_MIN or height < RECOMMENDED_MIN:
        log.warning("Resolution actuelle %dx%d", width, height)
        log.warning("Resolution recommande superieure a %dx%d",
                    RECOMMENDED_MIN, RECOMMENDED_MIN)
    return replace(config, width=width, height=height)