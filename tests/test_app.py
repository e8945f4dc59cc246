import pygame
import pytest

from raycub.app import Game, main
from raycub.bitmap import bmp_bytes
from raycub.config import parse_config
from raycub.player import CROUCH_SHIFT, Action
from raycub.textures import load_textures

XPM = """/* XPM */
static char *tex[] = {
"2 2 2 1",
"a c #FF0000",
"b c #00FF00",
"ab",
"ba"
};
"""

MAP_ROWS = ["11111", "10001", "10N01", "10001", "11111"]


def _scene_lines(texture):
    return [
        "R 8 6",
        f"NO {texture}",
        f"SO {texture}",
        f"WE {texture}",
        f"EA {texture}",
        f"S {texture}",
        "F 10,20,30",
        "C 40,50,60",
        "",
        *MAP_ROWS,
    ]


@pytest.fixture
def texture(tmp_path):
    path = tmp_path / "tex.xpm"
    path.write_text(XPM)
    return path


@pytest.fixture
def scene(tmp_path, texture):
    path = tmp_path / "scene.cub"
    path.write_text("\n".join(_scene_lines(texture)) + "\n")
    return path


@pytest.fixture
def game(texture):
    config = parse_config(_scene_lines(texture))
    return Game(config, load_textures(config))


def test_press_and_release_movement_key(game):
    game.press(pygame.K_w)
    assert Action.MOVE_FRONT in game.player.held
    game.release(pygame.K_w)
    assert Action.MOVE_FRONT not in game.player.held


def test_crouch_key_sets_shift(game):
    game.press(pygame.K_LSHIFT)
    assert game.player.shift == CROUCH_SHIFT
    game.release(pygame.K_LSHIFT)
    assert game.player.shift == 0


def test_escape_stops_the_game(game):
    assert game.running
    game.press(pygame.K_ESCAPE)
    assert game.running is False


def test_step_renders_frame_of_configured_size(game):
    frame = game.step()
    assert (frame.width, frame.height) == (game.config.width, game.config.height)
    assert frame.pixel(0, 0) == game.config.ceiling


def test_step_moves_player_forward(game):
    start_y = game.player.camera.pos_y
    game.press(pygame.K_w)
    game.step()
    assert game.player.camera.pos_y < start_y


def test_step_in_save_mode_writes_frame(texture, tmp_path):
    config = parse_config(_scene_lines(texture))
    out = tmp_path / "out.bmp"
    game = Game(config, load_textures(config), save=True, save_path=out)
    frame = game.step()
    assert out.read_bytes() == bmp_bytes(frame)
    assert game.running is False


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "Error\nConfig file is missing !" in capsys.readouterr().out


def test_main_rejects_bad_file_name(capsys, tmp_path):
    assert main([str(tmp_path / "scene.txt")]) == 1
    assert "Config file invalid !" in capsys.readouterr().out


def test_main_rejects_extra_arguments(capsys, scene):
    assert main([str(scene), "--other"]) == 1
    assert "Invalid args or too many args" in capsys.readouterr().out


def test_main_reports_config_error_with_line(capsys, tmp_path):
    path = tmp_path / "bad.cub"
    path.write_text("X something\n")
    assert main([str(path)]) == 1
    assert "ID invalid : line 1" in capsys.readouterr().out


def test_main_reports_bad_texture(capsys, tmp_path):
    missing = tmp_path / "missing.xpm"
    path = tmp_path / "scene.cub"
    path.write_text("\n".join(_scene_lines(missing)) + "\n")
    assert main([str(path)]) == 1
    assert "Invalid texture path" in capsys.readouterr().out


def test_main_save_writes_bitmap(capsys, scene, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([str(scene), "--save"]) == 0
    data = (tmp_path / "save.bmp").read_bytes()
    assert data[:2] == b"BM"
    assert int.from_bytes(data[2:6], "little") == len(data)
    assert int.from_bytes(data[18:22], "little") == 8
    assert "Saved" in capsys.readouterr().out