"""
Buffer subsystem - pixel storage, palettes and drawing primitives.

Modules:
    pixelbuffer: Raw pixel storage with 1/2/4 bytes per pixel
    palette: Colour table for 1-byte pixels
    convert: Colour depth conversion
    draw: Shape drawing primitives (rectangles, gradients, ellipses, blits)
"""
from .pixelbuffer import PixelBuffer, BIG, LITTLE, SUPPORTED_DEPTHS
from .palette import Palette, DEFAULT_PALETTE, CAPACITY
from .convert import convert_depth
from .draw import (DrawBuffer, draw_rect, draw_gradient_rect, draw_ellipse,
                   draw_bitmap, invert)

__all__ = [
    "PixelBuffer",
    "DrawBuffer",
    "Palette",
    "DEFAULT_PALETTE",
    "CAPACITY",
    "SUPPORTED_DEPTHS",
    "BIG",
    "LITTLE",
    "convert_depth",
    "draw_rect",
    "draw_gradient_rect",
    "draw_ellipse",
    "draw_bitmap",
    "invert",
]
