import pytest

from raycub.colors import lookup_color
from raycub.errors import TextureError
from raycub.xpm import (
    TRANSPARENT,
    Image,
    load_xpm,
    parse_color,
    parse_xpm,
    parse_xpm_text,
    quoted_strings,
    strip_comments,
)

XPM = """/* XPM */
static char *img[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
". c #FF0000",
"x c None",
".x",
"x."
};
"""


def test_parse_xpm_text_worked_example():
    image = parse_xpm_text(XPM)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == TRANSPARENT
    assert image.pixel(0, 1) == TRANSPARENT
    assert image.pixel(1, 1) == 0xFF0000


def test_pixel_out_of_range():
    image = parse_xpm_text(XPM)
    with pytest.raises(IndexError):
        image.pixel(2, 0)


def test_two_chars_per_pixel_with_two_word_name():
    image = parse_xpm(["1 1 1 2", "ab c dark red", "ab"])
    assert image.pixels == (lookup_color("dark red"),)


def test_later_definition_wins_for_short_keys():
    image = parse_xpm(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixel(0, 0) == 0x000002


def test_first_definition_wins_for_long_keys():
    image = parse_xpm(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.pixel(0, 0) == 0x000001


def test_unknown_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c #123456", "z"])
    assert image.pixel(0, 0) == 0


@pytest.mark.parametrize("header", ["0 1 1 1", "1 1 1", "x 1 1 1"])
def test_bad_header(header):
    with pytest.raises(TextureError):
        parse_xpm([header, "a c #000000", "a"])


def test_colour_without_c_key():
    with pytest.raises(TextureError):
        parse_xpm(["1 1 1 1", "a m white", "a"])


def test_missing_pixel_rows():
    with pytest.raises(TextureError):
        parse_xpm(["1 2 1 1", "a c #000000", "a"])


def test_parse_color_hex_and_names():
    assert parse_color("#00ff00", None) == 0x00FF00
    assert parse_color("dark", "red") == lookup_color("dark red")
    assert parse_color("NONE", None) == -1


def test_strip_comments_keeps_length_and_quotes():
    text = '"/* kept */" /* gone */ x // tail\n"y"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "gone" not in stripped
    assert "tail" not in stripped
    assert list(quoted_strings(stripped)) == ["/* kept */", "y"]


def test_quoted_strings_ignores_unclosed():
    assert list(quoted_strings('"a" x "b" "c')) == ["a", "b"]


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(XPM)
    assert load_xpm(path) == parse_xpm_text(XPM)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(TextureError):
        load_xpm(tmp_path / "absent.xpm")


def test_image_is_row_major():
    image = Image(2, 1, (5, 7))
    assert image.pixel(1, 0) == image.pixels[1]