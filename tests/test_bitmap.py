import pytest

from raycub.bitmap import HEADER_SIZE, bmp_bytes, bmp_header, dib_header, save_bmp
from raycub.render import Frame


def _frame(width, height, pixels):
    frame = Frame(width, height)
    frame.pixels[:] = pixels
    return frame


def test_bmp_header_layout():
    header = bmp_header(1234)
    assert len(header) == 14
    assert header[:2] == b"BM"
    assert int.from_bytes(header[2:6], "little") == 1234
    assert header[6:10] == bytes(4)
    assert header[10] == 54


def test_bmp_header_pinned_bytes():
    assert bmp_header(54) == b"BM6\x00\x00\x00\x00\x00\x00\x006\x00\x00\x00"


def test_dib_header_layout():
    header = dib_header(640, 480, 1000)
    assert len(header) == 40
    assert int.from_bytes(header[0:4], "little") == 0x28
    assert int.from_bytes(header[4:8], "little") == 640
    assert int.from_bytes(header[8:12], "little") == 480
    assert header[12] == 1
    assert header[14] == 0x18
    assert int.from_bytes(header[20:24], "little") == 1000 - HEADER_SIZE


def test_bmp_bytes_size_matches_header():
    frame = _frame(3, 2, [0] * 6)
    data = bmp_bytes(frame)
    assert int.from_bytes(data[2:6], "little") == len(data)
    assert len(data) == HEADER_SIZE + 2 * (3 * 3 + 3 % 4)


def test_bmp_bytes_rows_bottom_up_and_bgr():
    pixels = [0x000001, 0x000002, 0x000003, 0x112233, 0x445566, 0x778899]
    data = bmp_bytes(_frame(3, 2, pixels))
    first_row = data[HEADER_SIZE:HEADER_SIZE + 9]
    assert first_row[0:3] == b"\x33\x22\x11"
    assert first_row[3:6] == b"\x66\x55\x44"
    assert first_row[6:9] == b"\x99\x88\x77"


def test_bmp_bytes_pads_rows_with_zeros():
    data = bmp_bytes(_frame(3, 2, [0xFFFFFF] * 6))
    row = data[HEADER_SIZE:HEADER_SIZE + 12]
    assert row[:9] == b"\xff" * 9
    assert row[9:] == b"\x00\x00\x00"


def test_bmp_bytes_drops_alpha():
    data = bmp_bytes(_frame(4, 1, [0xFF000000] * 4))
    assert data[HEADER_SIZE:] == bytes(12)


@pytest.mark.parametrize("width", [1, 2, 3, 4, 5])
def test_row_length_multiple_of_four(width):
    data = bmp_bytes(_frame(width, 3, [0] * (width * 3)))
    assert (len(data) - HEADER_SIZE) % 4 == 0
    assert int.from_bytes(data[18:22], "little") == width


def test_save_bmp_writes_encoded_frame(tmp_path):
    frame = _frame(2, 2, [0x102030, 0x405060, 0x708090, 0xA0B0C0])
    path = tmp_path / "out.bmp"
    save_bmp(frame, path)
    assert path.read_bytes() == bmp_bytes(frame)