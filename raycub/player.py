"""Player input state and movement through the map."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

from .mapgrid import Camera, GameMap

WALL = "1"
CROUCH_SHIFT = -100
"""Vertical view offset, in pixels, while crouching."""
CROUCH_FACTOR = 0.3
"""Fraction of the normal speed used while crouching."""
_NUDGE = 0.001


class Action(Enum):
    """Things the player can hold down."""

    MOVE_FRONT = auto()
    MOVE_BACK = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    ROTATE_LEFT = auto()
    ROTATE_RIGHT = auto()
    CROUCH = auto()


@dataclass
class Player:
    """The camera together with the actions currently held."""

    camera: Camera
    speed_move: float = 0.05
    speed_rotate: float = 2.0
    held: set[Action] = field(default_factory=set)

    @property
    def shift(self) -> int:
        """Vertical view offset in pixels: negative while crouching."""
        return CROUCH_SHIFT if Action.CROUCH in self.held else 0

    def press(self, action: Action) -> None:
        """Start holding ``action``."""
        self.held.add(action)

    def release(self, action: Action) -> None:
        """Stop holding ``action``."""
        self.held.discard(action)

    def _rotate(self, degrees: float, old_dir_x: float, old_plane_x: float) -> None:
        cam = self.camera
        angle = degrees / 180 * math.pi
        cos, sin = math.cos(angle), math.sin(angle)
        cam.dir_x = cam.dir_x * cos - cam.dir_y * sin
        cam.dir_y = old_dir_x * sin + cam.dir_y * cos
        cam.plane_x = cam.plane_x * cos - cam.plane_y * sin
        cam.plane_y = old_plane_x * sin + cam.plane_y * cos

    def rotate(self, degrees: float) -> None:
        """Turn the view direction and camera plane by ``degrees``."""
        self._rotate(degrees, self.camera.dir_x, self.camera.plane_x)

    def _step(self, grid: GameMap, dx: float, dy: float) -> None:
        cam = self.camera
        factor = CROUCH_FACTOR if self.shift else 1.0
        if grid.cell(int(cam.pos_x + dx * self.speed_move * 2), int(cam.pos_y)) != WALL:
            cam.pos_x += dx * self.speed_move * factor
        if grid.cell(int(cam.pos_x), int(cam.pos_y + dy * self.speed_move * 2)) != WALL:
            cam.pos_y += dy * self.speed_move * factor

    def move_front(self, grid: GameMap) -> None:
        """Step along the view direction unless a wall is in the way."""
        self._step(grid, self.camera.dir_x, self.camera.dir_y)

    def move_back(self, grid: GameMap) -> None:
        """Step against the view direction unless a wall is in the way."""
        self._step(grid, -self.camera.dir_x, -self.camera.dir_y)

    def move_left(self, grid: GameMap) -> None:
        """Strafe against the camera plane unless a wall is in the way."""
        self._step(grid, -self.camera.plane_x, -self.camera.plane_y)

    def move_right(self, grid: GameMap) -> None:
        """Strafe along the camera plane unless a wall is in the way."""
        self._step(grid, self.camera.plane_x, self.camera.plane_y)

    def update(self, grid: GameMap) -> None:
        """Apply one frame of every held action."""
        cam = self.camera
        old_plane_x = cam.plane_x
        old_dir_x = cam.dir_x
        if cam.dir_x == 0.0:
            cam.dir_x = _NUDGE
        if cam.dir_y == 0.0:
            cam.dir_y = _NUDGE
        if Action.ROTATE_LEFT in self.held:
            self._rotate(-self.speed_rotate, old_dir_x, old_plane_x)
        if Action.ROTATE_RIGHT in self.held:
            self._rotate(self.speed_rotate, old_dir_x, old_plane_x)
        if Action.MOVE_FRONT in self.held:
            self.move_front(grid)
        if Action.MOVE_BACK in self.held:
            self.move_back(grid)
        if Action.MOVE_LEFT in self.held:
            self.move_left(grid)
        if Action.MOVE_RIGHT in self.held:
            self.move_right(grid)