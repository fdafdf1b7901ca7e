"""
Drawing Primitives
==================
Stateless shape algorithms that mutate a PixelBuffer in place, plus
DrawBuffer, a PixelBuffer exposing the same primitives as methods.

Colours are raw pixel values for the buffer's depth. Shapes are written
through set_pixel, so anything falling off the bitmap is dropped.
"""

import math

from ..errors import IncompatibleFormat
from .pixelbuffer import PixelBuffer

__all__ = [
    "DrawBuffer",
    "draw_rect",
    "draw_gradient_rect",
    "draw_ellipse",
    "draw_bitmap",
    "invert",
]

# Byte value -> its bitwise complement
_INVERT_LUT = bytes(range(0xFF, -1, -1))


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


# =============================================================================
# Rectangle
# =============================================================================

def draw_rect(buf: PixelBuffer, left: int, top: int, width: int, height: int,
              border_color=None, fill_color=None, border_width: int = 1) -> None:
    """
    Draw a rectangle with an optional border and an optional filling.

    The border is drawn inside the rectangle; the filling covers what's
    left once the border is taken away. Pass None to skip either part.
    """
    set_pixel = buf.set_pixel
    right = left + width
    bottom = top + height

    if border_color is not None:
        # Left and right columns, leaving the corners to the rows below
        for y in range(top + border_width, bottom - border_width):
            for x in range(left, min(left + border_width, right)):
                set_pixel(x, y, border_color)
            for x in range(max(right - border_width, left), right):
                set_pixel(x, y, border_color)

        # Top and bottom rows
        for x in range(left, right):
            for y in range(top, min(top + border_width, bottom)):
                set_pixel(x, y, border_color)
            for y in range(max(bottom - border_width, top), bottom):
                set_pixel(x, y, border_color)

        left += border_width
        top += border_width
        width = max(width - border_width * 2, 0)
        height = max(height - border_width * 2, 0)

    if fill_color is not None:
        for y in range(top, top + height):
            for x in range(left, left + width):
                set_pixel(x, y, fill_color)


def gradient_value(step: int, steps: int, left_color: int, right_color: int) -> int:
    """Value of column `step` in a gradient `steps` columns wide."""
    if step == 0:
        return left_color
    if step == steps - 1:
        return right_color
    change_per_step = (right_color - left_color + 0.5) / steps
    return math.floor(step * change_per_step + 0.5) + left_color


def draw_gradient_rect(buf: PixelBuffer, left: int, top: int, width: int, height: int,
                       left_color: int, right_color: int) -> None:
    """Fill a rectangle with a horizontal gradient, one value per column."""
    set_pixel = buf.set_pixel
    for x in range(left, left + width):
        value = gradient_value(x - left, width, left_color, right_color)
        for y in range(top, top + height):
            set_pixel(x, y, value)


# =============================================================================
# Ellipse
# =============================================================================

def draw_ellipse(buf: PixelBuffer, left: int, top: int, width: int, height: int,
                 border_color=None, fill_color=None, border_width: int = 1) -> None:
    """
    Draw a circle or ellipse inscribed in the given rectangle.

    The ellipse is scaled to a circle of diameter `width` along y. Pixels
    within `border_width` of the outline get border_color, those further
    inside get fill_color. None leaves the respective pixels untouched.
    """
    if width <= 0 or height <= 0:
        return
    if border_color is None:
        border_width = 0
    elif not border_width:
        border_width = 1

    set_pixel = buf.set_pixel
    center_x = width / 2
    center_y = height / 2
    factor_y = width / height
    radius_sq = center_x ** 2

    for y in range(top, top + height):
        dy = y - top - center_y
        outer_y_sq = ((dy + 0.5) * factor_y) ** 2
        inner_y_sq = ((dy + _sign(dy) * border_width + 0.5) * factor_y) ** 2
        for x in range(left, left + width):
            dx = x - left - center_x
            if (dx + 0.5) ** 2 + outer_y_sq > radius_sq:
                continue
            if (dx + _sign(dx) * border_width + 0.5) ** 2 + inner_y_sq <= radius_sq:
                if fill_color is not None:
                    set_pixel(x, y, fill_color)
            else:
                set_pixel(x, y, border_color)


# =============================================================================
# Bitmap Blit
# =============================================================================

def draw_bitmap(dst: PixelBuffer, src: PixelBuffer, x: int, y: int,
                transparent_color=None, source_x: int = 0, source_y: int = 0,
                width=None, height=None) -> None:
    """
    Copy a rectangle of `src` onto `dst` at (x, y).

    The rectangle is clipped against both bitmaps. Source pixels equal to
    transparent_color leave the destination unchanged.

    Raises:
        IncompatibleFormat: If the bitmaps' bytes per pixel differ
    """
    bpp = dst.bytes_per_pixel
    if src.bytes_per_pixel != bpp:
        raise IncompatibleFormat(bpp, src.bytes_per_pixel)

    if width is None: width = src.width
    if height is None: height = src.height

    # Clip against source
    if source_x < 0: width += source_x; source_x = 0
    if source_y < 0: height += source_y; source_y = 0
    width = min(width, src.width - source_x)
    height = min(height, src.height - source_y)

    # Clip against destination
    if x < 0: source_x -= x; width += x; x = 0
    if y < 0: source_y -= y; height += y; y = 0
    width = min(width, dst.width - x)
    height = min(height, dst.height - y)

    if width <= 0 or height <= 0:
        return

    dst_buf, src_buf = dst.data, src.data
    dst_stride, src_stride = dst.row_bytes, src.row_bytes
    span = width * bpp
    dst_off = (y * dst.width + x) * bpp
    src_off = (source_y * src.width + source_x) * bpp

    if transparent_color is None and src.byte_order == dst.byte_order:
        for _ in range(height):
            dst_buf[dst_off:dst_off + span] = src_buf[src_off:src_off + span]
            dst_off += dst_stride
            src_off += src_stride
        return

    read, write = src.read_at, dst.write_at
    for _ in range(height):
        for i in range(0, span, bpp):
            color = read(src_off + i)
            if color != transparent_color:
                write(dst_off + i, color)
        dst_off += dst_stride
        src_off += src_stride


def invert(buf: PixelBuffer) -> None:
    """Complement every storage byte (not a per-channel colour inversion)."""
    data = buf.data
    data[:] = data.translate(_INVERT_LUT)


class DrawBuffer(PixelBuffer):
    """
    PixelBuffer with shape drawing capabilities.
    """

    def draw_rect(self, left: int, top: int, width: int, height: int,
                  border_color=None, fill_color=None, border_width: int = 1) -> None:
        draw_rect(self, left, top, width, height, border_color, fill_color, border_width)

    def draw_gradient_rect(self, left: int, top: int, width: int, height: int,
                           left_color: int, right_color: int) -> None:
        draw_gradient_rect(self, left, top, width, height, left_color, right_color)

    def draw_ellipse(self, left: int, top: int, width: int, height: int,
                     border_color=None, fill_color=None, border_width: int = 1) -> None:
        draw_ellipse(self, left, top, width, height, border_color, fill_color, border_width)

    def draw_bitmap(self, src: PixelBuffer, x: int, y: int, transparent_color=None,
                    source_x: int = 0, source_y: int = 0, width=None, height=None) -> None:
        draw_bitmap(self, src, x, y, transparent_color, source_x, source_y, width, height)

    def invert(self) -> None:
        invert(self)
