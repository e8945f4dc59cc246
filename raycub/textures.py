"""Loading the wall and sprite textures named by a scene."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import TextureError
from .xpm import Image, load_xpm

if TYPE_CHECKING:
    from .config import Config

_FIELDS = ("north", "south", "west", "east", "sprite")


@dataclass(frozen=True)
class Textures:
    """The decoded images for the four wall faces and the sprite."""

    north: Image
    south: Image
    west: Image
    east: Image
    sprite: Image


def load_textures(config: Config) -> Textures:
    """Load every texture the scene names, in north, south, west, east, sprite order.

    Raises TextureError when a path is missing, unreadable or not valid XPM.
    """
    images: dict[str, Image] = {}
    for name in _FIELDS:
        path = getattr(config, name)
        if path is None:
            raise TextureError(f"Invalid texture path: no {name} texture")
        images[name] = load_xpm(path)
    return Textures(**images)