import math

import pytest

from raycub.mapgrid import Camera, GameMap
from raycub.player import Action, Player

GRID = GameMap.from_rows(["11111", "10001", "10N01", "10001", "11111"])


def make_player(x=2.5, y=2.5):
    return Player(Camera(pos_x=x, pos_y=y, dir_x=1.0, dir_y=0.0, plane_x=0.0, plane_y=0.66))


def test_default_speeds():
    player = make_player()
    assert player.speed_move == 0.05
    assert player.speed_rotate == 2.0


def test_press_and_release():
    player = make_player()
    player.press(Action.MOVE_FRONT)
    assert Action.MOVE_FRONT in player.held
    player.release(Action.MOVE_FRONT)
    assert Action.MOVE_FRONT not in player.held


def test_crouch_shift():
    player = make_player()
    assert player.shift == 0
    player.press(Action.CROUCH)
    assert player.shift == -100


def test_rotate_quarter_turn():
    player = make_player()
    player.rotate(90)
    assert player.camera.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.camera.dir_y == pytest.approx(1.0)
    assert player.camera.plane_x == pytest.approx(-0.66)


def test_rotate_preserves_lengths():
    player = make_player()
    for _ in range(17):
        player.rotate(23)
    cam = player.camera
    assert math.hypot(cam.dir_x, cam.dir_y) == pytest.approx(1.0)
    assert math.hypot(cam.plane_x, cam.plane_y) == pytest.approx(0.66)


def test_full_turn_returns_to_start():
    player = make_player()
    player.rotate(180)
    player.rotate(180)
    assert player.camera.dir_x == pytest.approx(1.0)
    assert player.camera.dir_y == pytest.approx(0.0, abs=1e-12)


def test_move_front_in_open_space():
    player = make_player()
    player.move_front(GRID)
    assert player.camera.pos_x == pytest.approx(2.5 + player.speed_move)
    assert player.camera.pos_y == 2.5


def test_move_back_reverses_move_front():
    player = make_player()
    player.move_front(GRID)
    player.move_back(GRID)
    assert player.camera.pos_x == pytest.approx(2.5)


def test_strafe_left_and_right():
    player = make_player()
    player.move_left(GRID)
    assert player.camera.pos_y < 2.5
    assert player.camera.pos_x == 2.5
    player.move_right(GRID)
    player.move_right(GRID)
    assert player.camera.pos_y > 2.5


def test_wall_blocks_movement():
    player = make_player(x=3.95)
    player.move_front(GRID)
    assert player.camera.pos_x == 3.95


def test_crouch_slows_movement():
    walking = make_player()
    walking.move_front(GRID)
    crouching = make_player()
    crouching.press(Action.CROUCH)
    crouching.move_front(GRID)
    walked = walking.camera.pos_x - 2.5
    crouched = crouching.camera.pos_x - 2.5
    assert crouched == pytest.approx(walked * 0.3)


def test_update_without_actions_nudges_zero_direction():
    player = make_player()
    player.update(GRID)
    assert player.camera.dir_y == 0.001
    assert (player.camera.pos_x, player.camera.pos_y) == (2.5, 2.5)


def test_update_rotate_left_turns_negative():
    player = make_player()
    player.press(Action.ROTATE_LEFT)
    player.update(GRID)
    assert player.camera.dir_y < 0
    assert player.camera.plane_x > 0


def test_update_rotate_right_turns_positive():
    player = make_player()
    player.press(Action.ROTATE_RIGHT)
    player.update(GRID)
    assert player.camera.dir_y > 0.001
    assert player.camera.plane_x < 0


def test_update_moves_forward():
    player = make_player()
    player.press(Action.MOVE_FRONT)
    player.update(GRID)
    player.update(GRID)
    assert player.camera.pos_x > 2.5
    assert player.camera.pos_x < 3.95


def test_update_never_walks_into_wall():
    player = make_player()
    player.press(Action.MOVE_FRONT)
    for _ in range(100):
        player.update(GRID)
    cam = player.camera
    assert int(cam.pos_x) == 3
    assert 3.85 < cam.pos_x < 4.0
    assert int(cam.pos_y) == 2