import pytest
from PIL import Image

from rpimonitor.buffer import ON
from rpimonitor.compose import FrameComposer
from rpimonitor.geometry import Rect

BOUNDS = Rect(0, 0, 128, 32)


def on_columns(frame):
    return sorted({x for y in range(frame.height) for x in range(frame.width)
                   if frame.get_pixel(x, y) == ON})


def test_status_over_black_source():
    frame = FrameComposer().compose(BOUNDS, Image.new("RGB", (64, 64)), "host (1.2.3.4)")
    assert frame.size == (128, 32)
    cols = on_columns(frame)
    # x = 128 - 14 * 7 = 30, plus the one column of left padding in the cell
    assert cols[0] == 128 - 14 * 7 + 1 == 31


def test_compose_is_deterministic():
    src = Image.new("L", (50, 20), 0)
    src.putpixel((10, 5), 255)
    composer = FrameComposer()
    a = composer.compose(BOUNDS, src, "pi (10.0.0.2)")
    b = composer.compose(BOUNDS, src, "pi (10.0.0.2)")
    assert a.to_bytes() == b.to_bytes()


def test_empty_status_still_composes():
    frame = FrameComposer().compose(BOUNDS, Image.new("1", (128, 32)), "")
    assert frame.to_bytes() == bytes(512)


def test_source_is_scaled_to_panel():
    src = Image.new("L", (2, 2), 0)
    src.putpixel((0, 0), 255)
    frame = FrameComposer().compose(Rect(0, 0, 8, 8), src, "")
    assert frame.get_pixel(0, 0) == ON
    assert frame.get_pixel(3, 3) == ON
    assert frame.get_pixel(4, 4) != ON


def test_zero_bounds_rejected():
    with pytest.raises(ValueError):
        FrameComposer().compose(Rect(0, 0, 0, 32), Image.new("1", (4, 4)), "x")


def test_custom_anchor():
    frame = FrameComposer(anchor="top-left").compose(
        Rect(0, 0, 32, 16), Image.new("1", (32, 16)), "l")
    assert on_columns(frame)[0] < 7
