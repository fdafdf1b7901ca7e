"""Tests for the drawing primitives."""
import pytest

from bitmapkit.buffer import BIG, LITTLE, DrawBuffer, PixelBuffer
from bitmapkit.buffer.draw import (draw_bitmap, draw_ellipse, draw_gradient_rect,
                                   draw_rect, gradient_value, invert)
from bitmapkit.errors import IncompatibleFormat

FOREGROUND = 10
BACKGROUND = 100


def _set_pixels(fb):
    return {(x, y): fb.get_pixel(x, y)
            for y in range(fb.height) for x in range(fb.width) if fb.get_pixel(x, y)}


@pytest.fixture
def image():
    return PixelBuffer(20, 20, 1)


# ---------------------------------------------------------------------------
# Rectangle
# ---------------------------------------------------------------------------

def test_filled_rect_border_and_fill(image):
    draw_rect(image, 1, 1, 3, 3, FOREGROUND, BACKGROUND)
    border = [(1, 1), (2, 1), (3, 1), (1, 2), (3, 2), (1, 3), (2, 3), (3, 3)]
    expected = {p: FOREGROUND for p in border}
    expected[(2, 2)] = BACKGROUND
    assert _set_pixels(image) == expected


def test_rect_calls_set_pixel_for_each_cell(image):
    calls = []
    image.set_pixel = lambda x, y, c: calls.append((x, y, c))
    draw_rect(image, 1, 1, 3, 3, FOREGROUND, BACKGROUND)
    assert (2, 2, BACKGROUND) in calls
    assert (1, 1, FOREGROUND) in calls and (3, 3, FOREGROUND) in calls
    assert len(set(calls)) == 9


def test_rect_without_border_fills_whole_area(image):
    draw_rect(image, 2, 3, 4, 2, None, 5)
    assert _set_pixels(image) == {(x, y): 5 for x in range(2, 6) for y in range(3, 5)}


def test_rect_without_fill_leaves_interior(image):
    draw_rect(image, 0, 0, 4, 4, FOREGROUND, None)
    pixels = _set_pixels(image)
    assert len(pixels) == 12
    assert (1, 1) not in pixels and (2, 2) not in pixels


def test_rect_wide_border(image):
    draw_rect(image, 0, 0, 6, 6, FOREGROUND, BACKGROUND, border_width=2)
    pixels = _set_pixels(image)
    assert [p for p, c in pixels.items() if c == BACKGROUND] == [
        (2, 2), (3, 2), (2, 3), (3, 3)]
    assert sum(1 for c in pixels.values() if c == FOREGROUND) == 32


def test_rect_border_wider_than_rect(image):
    draw_rect(image, 0, 0, 3, 3, FOREGROUND, BACKGROUND, border_width=5)
    assert _set_pixels(image) == {(x, y): FOREGROUND for x in range(3) for y in range(3)}


def test_rect_clipped_at_edges(image):
    draw_rect(image, -2, -2, 5, 5, None, 7)
    draw_rect(image, 18, 18, 5, 5, None, 8)
    pixels = _set_pixels(image)
    assert pixels == {**{(x, y): 7 for x in range(3) for y in range(3)},
                      **{(x, y): 8 for x in range(18, 20) for y in range(18, 20)}}


# ---------------------------------------------------------------------------
# Gradient
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("right,expected", [
    (10, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]),
    (5, [1, 1, 2, 2, 3, 3, 4, 4, 5, 5]),
    (15, [1, 2, 4, 5, 7, 8, 10, 11, 13, 15]),
])
def test_gradient_columns(image, right, expected):
    draw_gradient_rect(image, 1, 5, 10, 1, 1, right)
    assert [image.get_pixel(x, 5) for x in range(1, 11)] == expected
    assert image.get_pixel(0, 5) == 0
    assert image.get_pixel(11, 5) == 0


def test_gradient_fills_each_column(image):
    draw_gradient_rect(image, 0, 0, 4, 3, 0, 30)
    for x in range(4):
        column = {image.get_pixel(x, y) for y in range(3)}
        assert len(column) == 1
    assert image.get_pixel(0, 2) == 0 and image.get_pixel(3, 2) == 30


def test_gradient_decreasing():
    assert gradient_value(0, 5, 10, 0) == 10
    assert gradient_value(4, 5, 10, 0) == 0
    assert 0 < gradient_value(2, 5, 10, 0) < 10


# ---------------------------------------------------------------------------
# Ellipse
# ---------------------------------------------------------------------------

def test_filled_circle(image):
    draw_ellipse(image, 0, 0, 10, 10, FOREGROUND, BACKGROUND)
    assert image.get_pixel(5, 5) == BACKGROUND
    assert image.get_pixel(0, 5) == FOREGROUND
    assert image.get_pixel(5, 0) == FOREGROUND
    assert image.get_pixel(0, 0) == 0
    assert image.get_pixel(9, 9) == 0


def test_circle_border_only(image):
    draw_ellipse(image, 0, 0, 10, 10, FOREGROUND, None)
    assert image.get_pixel(5, 5) == 0
    assert image.get_pixel(0, 5) == FOREGROUND


def test_circle_without_border_is_all_fill(image):
    draw_ellipse(image, 0, 0, 10, 10, None, BACKGROUND)
    assert image.get_pixel(0, 5) == BACKGROUND
    assert set(_set_pixels(image).values()) == {BACKGROUND}


def test_ellipse_stays_in_bounding_box(image):
    draw_ellipse(image, 2, 4, 12, 6, FOREGROUND, BACKGROUND)
    pixels = _set_pixels(image)
    assert pixels
    assert all(2 <= x < 14 and 4 <= y < 10 for x, y in pixels)
    assert image.get_pixel(8, 7) == BACKGROUND


def test_ellipse_outline_symmetric(image):
    draw_ellipse(image, 0, 0, 12, 8, FOREGROUND, BACKGROUND, border_width=2)
    painted = set(_set_pixels(image))
    assert painted == {(11 - x, y) for x, y in painted}
    assert painted == {(x, 7 - y) for x, y in painted}


def test_empty_ellipse_draws_nothing(image):
    draw_ellipse(image, 0, 0, 0, 5, FOREGROUND, BACKGROUND)
    draw_ellipse(image, 0, 0, 5, 0, FOREGROUND, BACKGROUND)
    assert not _set_pixels(image)


# ---------------------------------------------------------------------------
# Bitmap blit
# ---------------------------------------------------------------------------

def _source():
    src = PixelBuffer(4, 4)
    for y in range(4):
        for x in range(4):
            src.set_pixel(x, y, 10 * y + x + 1)
    return src


def test_blit_whole_bitmap():
    dst = PixelBuffer(6, 6)
    draw_bitmap(dst, _source(), 1, 2)
    assert dst.get_pixel(1, 2) == 1
    assert dst.get_pixel(4, 5) == 34
    assert len(_set_pixels(dst)) == 16


def test_blit_clips_negative_destination_and_skips_transparent():
    dst = PixelBuffer(6, 6)
    draw_bitmap(dst, _source(), -1, -1, transparent_color=23)
    assert dst.get_pixel(0, 0) == 12
    assert dst.get_pixel(2, 2) == 34
    assert dst.get_pixel(1, 1) == 0  # Transparent
    assert dst.get_pixel(3, 3) == 0
    assert len(_set_pixels(dst)) == 8


def test_blit_clips_against_source_and_destination():
    dst = PixelBuffer(6, 6)
    draw_bitmap(dst, _source(), 4, 4, None, -1, -1, 4, 4)
    assert _set_pixels(dst) == {(4, 4): 1, (5, 4): 2, (4, 5): 11, (5, 5): 12}


def test_blit_source_portion():
    dst = PixelBuffer(6, 6)
    draw_bitmap(dst, _source(), 0, 0, None, 2, 1, 2, 2)
    assert _set_pixels(dst) == {(0, 0): 13, (1, 0): 14, (0, 1): 23, (1, 1): 24}


@pytest.mark.parametrize("args", [
    (6, 0), (0, 6), (-4, 0), (0, 0, None, 4, 0), (0, 0, None, 0, 0, 0, 3),
])
def test_blit_fully_clipped(args):
    dst = PixelBuffer(6, 6)
    draw_bitmap(dst, _source(), *args)
    assert not _set_pixels(dst)


def test_blit_never_writes_transparent_colour():
    src = PixelBuffer(3, 3, 2)
    src.clear(0xFF)
    src.set_pixel(1, 1, 0x1234)
    dst = PixelBuffer(3, 3, 2)
    dst.clear(0x11)
    draw_bitmap(dst, src, 0, 0, transparent_color=0xFFFF)
    assert dst.get_pixel(1, 1) == 0x1234
    assert all(dst.get_pixel(x, y) == 0x1111
               for x in range(3) for y in range(3) if (x, y) != (1, 1))


def test_blit_between_byte_orders():
    src = PixelBuffer(1, 1, 2, LITTLE)
    src.set_pixel(0, 0, 0x0102)
    dst = PixelBuffer(1, 1, 2, BIG)
    draw_bitmap(dst, src, 0, 0)
    assert dst.get_pixel(0, 0) == 0x0102


def test_blit_incompatible_depth():
    with pytest.raises(IncompatibleFormat) as exc:
        draw_bitmap(PixelBuffer(2, 2, 1), PixelBuffer(2, 2, 2), 0, 0)
    assert exc.value.expected == 1
    assert exc.value.actual == 2


# ---------------------------------------------------------------------------
# Invert & DrawBuffer
# ---------------------------------------------------------------------------

def test_invert_complements_bytes():
    fb = PixelBuffer(3, 1)
    fb.data[:] = bytes([0x00, 0xFF, 0x0F])
    invert(fb)
    assert list(fb.data) == [0xFF, 0x00, 0xF0]


def test_invert_is_raw_byte_level():
    fb = PixelBuffer(1, 1, 2, BIG)
    fb.set_pixel(0, 0, 0x00FF)
    invert(fb)
    assert fb.get_pixel(0, 0) == 0xFF00


def test_draw_buffer_methods():
    fb = DrawBuffer(20, 20)
    fb.draw_rect(1, 1, 3, 3, FOREGROUND, BACKGROUND)
    fb.draw_gradient_rect(1, 5, 10, 1, 1, 10)
    fb.draw_ellipse(10, 10, 6, 6, None, 3)
    assert fb.get_pixel(2, 2) == BACKGROUND
    assert fb.get_pixel(10, 5) == 10
    assert fb.get_pixel(13, 13) == 3

    sprite = DrawBuffer(2, 2, fill=9)
    fb.draw_bitmap(sprite, 18, 0)
    assert fb.get_pixel(19, 1) == 9

    fb.invert()
    assert fb.get_pixel(19, 1) == 0xFF - 9
    assert isinstance(fb.copy(), DrawBuffer)
