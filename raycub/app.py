"""The game window, its input handling and the command-line entry point."""

from __future__ import annotations

import os
import struct
import sys
from pathlib import Path
from typing import Sequence

from .bitmap import save_bmp
from .config import Config, check_config_name, fit_resolution, load_config, validate_config
from .errors import ConfigError, CubError, TextureError
from .player import Action, Player
from .render import Frame, render_frame
from .textures import Textures, load_textures

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

TITLE = "CUB3D"
SAVE_PATH = "save.bmp"
_FPS = 60

_KEY_ACTIONS = {
    pygame.K_a: Action.MOVE_LEFT,
    pygame.K_d: Action.MOVE_RIGHT,
    pygame.K_w: Action.MOVE_FRONT,
    pygame.K_s: Action.MOVE_BACK,
    pygame.K_LEFT: Action.ROTATE_LEFT,
    pygame.K_RIGHT: Action.ROTATE_RIGHT,
    pygame.K_LSHIFT: Action.CROUCH,
}


def _to_surface(frame: Frame) -> pygame.Surface:
    count = frame.width * frame.height
    raw = struct.pack(f"<{count}I", *(p & 0xFFFFFFFF for p in frame.pixels))
    rgb = bytearray(count * 3)
    rgb[0::3] = raw[2::4]
    rgb[1::3] = raw[1::4]
    rgb[2::3] = raw[0::4]
    return pygame.image.frombuffer(bytes(rgb), (frame.width, frame.height), "RGB")


class Game:
    """A running scene: the player, the map and the textures it is drawn with."""

    def __init__(self, config: Config, textures: Textures, save: bool = False,
                 save_path: str | Path = SAVE_PATH) -> None:
        if config.grid is None:
            raise ConfigError("Parameter NULL or no valid ID (Too hight res)")
        self.config = config
        self.grid = config.grid
        self.textures = textures
        self.player = Player(self.grid.initial_camera())
        self.save = save
        self.save_path = Path(save_path)
        self.running = True

    def press(self, key: int) -> None:
        """Handle a key going down; Escape ends the game."""
        action = _KEY_ACTIONS.get(key)
        if action is not None:
            self.player.press(action)
        if key == pygame.K_ESCAPE:
            self.running = False

    def release(self, key: int) -> None:
        """Handle a key going up."""
        action = _KEY_ACTIONS.get(key)
        if action is not None:
            self.player.release(action)

    def step(self) -> Frame:
        """Advance one frame and render it; in save mode, write it out and stop."""
        self.player.update(self.grid)
        frame = render_frame(self.config, self.grid, self.player.camera,
                             self.textures, self.player.shift)
        if self.save:
            save_bmp(frame, self.save_path)
            print("Saved")
            self.running = False
        return frame

    def run(self) -> None:
        """Play until the window is closed or Escape is pressed."""
        if self.save:
            self.step()
            return
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.config.width, self.config.height))
            pygame.display.set_caption(TITLE)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.KEYDOWN:
                        self.press(event.key)
                    elif event.type == pygame.KEYUP:
                        self.release(event.key)
                    elif event.type == pygame.QUIT:
                        self.running = False
                if not self.running:
                    break
                screen.blit(_to_surface(self.step()), (0, 0))
                pygame.display.flip()
                clock.tick(_FPS)
        finally:
            pygame.quit()


def _fail(message: str) -> int:
    print(f"Error\n{message}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on a ``.cub`` scene; ``--save`` writes the first frame to save.bmp."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _fail("Config file is missing !")
    if not check_config_name(args[0]):
        return _fail("Config file invalid !")
    try:
        config = load_config(args[0])
        validate_config(config)
        config = fit_resolution(config)
    except CubError as exc:
        return _fail(str(exc))
    save = len(args) == 2 and args[1] == "--save"
    if not save and len(args) > 1:
        return _fail("Invalid args or too many args")
    try:
        textures = load_textures(config)
    except TextureError:
        return _fail("Invalid texture path")
    try:
        Game(config, textures, save=save).run()
    except pygame.error as exc:
        return _fail(f"Window creation error: {exc}")
    return 0


if __name__ == "__main__":
    sys.exit(main())