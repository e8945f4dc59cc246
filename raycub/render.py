"""Ray casting of walls and sprites into a frame of 0xRRGGBB pixels."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from .mapgrid import Camera, GameMap
from .textures import Textures
from .xpm import Image

if TYPE_CHECKING:
    from .config import Config

WALL = "1"
SPRITE = "2"
SPRITE_KEY = 0xFF0000
"""Sprite pixels of this colour are not drawn."""


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Side(IntEnum):
    """The face of a wall block that a ray hit."""

    EAST = 0
    WEST = 1
    SOUTH = 2
    NORTH = 3


@dataclass
class Frame:
    """A screen image of ``width * height`` pixels, stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        return self.pixels[x + y * self.width]

    def fill_background(self, ceiling: int, floor: int, shift: int) -> None:
        """Paint the ceiling above the horizon, moved by ``shift``, and the floor below."""
        horizon = self.height // 2 + shift
        for y in range(self.height):
            color = ceiling if y < horizon else floor
            row = y * self.width
            self.pixels[row:row + self.width] = [color] * self.width

    def draw_column(self, texture: Image, x: int, start: int, end: int,
                    tex_x: int, transparent: bool) -> None:
        """Stretch texture column ``tex_x`` over rows ``start`` to ``end`` of column ``x``.

        Row 0 is never drawn. With ``transparent``, texels equal to
        SPRITE_KEY are skipped.
        """
        if end <= start:
            return
        step = texture.height / (end - start)
        tex_x = int(math.fmod(int(tex_x), texture.width))
        offset = 0.0
        if start < 0:
            offset += step * -start
            start = 0
        for y in range(start, min(end, self.height)):
            if y > 0:
                row = min(int(offset), texture.height - 1)
                color = texture.pixels[tex_x + row * texture.width]
                if not (transparent and color == SPRITE_KEY):
                    self.pixels[x + y * self.width] = color
            offset += step


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall."""

    side: Side
    map_x: int
    map_y: int
    distance: float
    wall_x: float


def _delta(main: float, other: float) -> float:
    if main == 0:
        return 1.0 if other != 0 else math.inf
    return abs(1 / main)


def cast_ray(camera: Camera, grid: GameMap, column: int, screen_width: int,
             sprites: list[tuple[int, int]]) -> RayHit:
    """Cast the ray for screen ``column`` until it hits a wall.

    Sprite cells the ray crosses are appended to ``sprites`` unless already there.
    """
    camera_x = 2 * column / screen_width - 1
    ray_x = camera.dir_x + camera.plane_x * camera_x
    ray_y = camera.dir_y + camera.plane_y * camera_x
    map_x, map_y = int(camera.pos_x), int(camera.pos_y)
    delta_x = _delta(ray_x, ray_y)
    delta_y = _delta(ray_y, ray_x)

    if ray_x < 0:
        step_x, side_x = -1, (camera.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - camera.pos_x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (camera.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - camera.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = Side.EAST if step_x == 1 else Side.WEST
        else:
            side_y += delta_y
            map_y += step_y
            side = Side.SOUTH if step_y == 1 else Side.NORTH
        cell = grid.cell(map_x, map_y)
        if cell == SPRITE and (map_x, map_y) not in sprites:
            sprites.append((map_x, map_y))
        if cell == WALL:
            break

    if side in (Side.EAST, Side.WEST):
        distance = (map_x - camera.pos_x + (1 - step_x) // 2) / ray_x
        wall_x = camera.pos_y + distance * ray_y
    else:
        distance = (map_y - camera.pos_y + (1 - step_y) // 2) / ray_y
        wall_x = camera.pos_x + distance * ray_x
    wall_x -= math.floor(wall_x)
    return RayHit(side, map_x, map_y, distance, wall_x)


def sort_sprites(sprites: list[tuple[int, int]], pos_x: float,
                 pos_y: float) -> list[tuple[int, int]]:
    """Return the sprite cells nearest first; equally distant ones keep their order."""
    return sorted(sprites, key=lambda s: (s[0] - pos_x) ** 2 + (s[1] - pos_y) ** 2)


def _wall_texture(textures: Textures, side: Side) -> Image:
    return {
        Side.EAST: textures.east,
        Side.WEST: textures.west,
        Side.SOUTH: textures.south,
        Side.NORTH: textures.north,
    }[side]


def _draw_sprite(frame: Frame, camera: Camera, sprite: tuple[int, int],
                 texture: Image, zbuffer: list[float], shift: int) -> None:
    rel_x = sprite[0] - camera.pos_x + 0.5
    rel_y = sprite[1] - camera.pos_y + 0.5
    inv_det = 1.0 / (camera.plane_x * camera.dir_y - camera.dir_x * camera.plane_y)
    transform_x = inv_det * (camera.dir_y * rel_x - camera.dir_x * rel_y)
    transform_y = inv_det * (-camera.plane_y * rel_x + camera.plane_x * rel_y)
    if transform_y <= 0:
        return
    width, height = frame.width, frame.height
    screen_x = int((width // 2) * (1 + transform_x / transform_y))
    size = abs(int(height / transform_y))
    left = _cdiv(-size, 2) + screen_x
    top = _cdiv(-size, 2) + _cdiv(height, 2)
    bottom = _cdiv(size, 2) + _cdiv(height, 2)
    start = max(left, 0)
    stop = min(_cdiv(size, 2) + screen_x, width - 1)
    for x in range(start + 1, stop):
        tex_x = _cdiv(_cdiv(256 * (x - left) * texture.width, size), 256)
        if 0 < x < width and transform_y < zbuffer[x]:
            frame.draw_column(texture, x, top + shift, bottom + shift, tex_x, True)


def render_frame(config: Config, grid: GameMap, camera: Camera,
                 textures: Textures, shift: int) -> Frame:
    """Render the view from ``camera``: background, walls, then sprites far to near."""
    frame = Frame(config.width, config.height)
    frame.fill_background(config.ceiling, config.floor, shift)
    half = _cdiv(frame.height, 2)
    zbuffer: list[float] = []
    sprites: list[tuple[int, int]] = []
    for x in range(frame.width):
        hit = cast_ray(camera, grid, x, frame.width, sprites)
        zbuffer.append(hit.distance)
        line_height = int(frame.height / hit.distance) if hit.distance > 0 else frame.height
        start = _cdiv(-line_height, 2) + half + shift
        end = _cdiv(line_height, 2) + half + shift
        texture = _wall_texture(textures, hit.side)
        tex_x = texture.width - int(hit.wall_x * texture.width) - 1
        frame.draw_column(texture, x, start, end, tex_x, False)
    for sprite in reversed(sort_sprites(sprites, camera.pos_x, camera.pos_y)):
        _draw_sprite(frame, camera, sprite, textures.sprite, zbuffer, shift)
    return frame