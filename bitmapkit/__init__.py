"""
bitmapkit
=========
In-memory raster images with a BMP file codec and a small 2D drawing engine.

Architecture
------------
The library is organized into layers:

    DrawBuffer      Drawing primitives (rectangles, gradients, ellipses, blits)
       │
       └── PixelBuffer   Raw pixel storage (1/2/4 bytes per pixel)
              │
              └── Palette    Colour table for 1-byte pixels

    convert_depth   Colour depth conversion between representations

    codec.bmp       .bmp encoder/decoder

    TextRenderer    Text layout via bitmap blits
       │
       └── BitmapFont    BMFont glyph metrics + glyph sheets

Quick Start
-----------
    from bitmapkit import DrawBuffer, codec

    fb = DrawBuffer(400, 300, fill=0xFF)
    fb.draw_rect(10, 10, 100, 50, 0x00, 0xFF)
    fb.draw_ellipse(50, 100, 200, 100, 0xFF, 0xFF)
    codec.save(fb, "example.bmp")

Module Structure
----------------
    bitmapkit/
    ├── errors.py            Exception classes
    ├── buffer/
    │   ├── pixelbuffer.py   Core pixel buffer
    │   ├── palette.py       Palette and default colour table
    │   ├── convert.py       Colour depth conversion
    │   └── draw.py          Shape drawing primitives
    ├── codec/
    │   └── bmp.py           BMP file format
    └── text/
        ├── font.py          Bitmap font loader
        └── renderer.py      Text rendering
"""

# Core buffer classes
from .buffer import (PixelBuffer, DrawBuffer, Palette, DEFAULT_PALETTE, BIG, LITTLE,
                     convert_depth, draw_rect, draw_gradient_rect, draw_ellipse,
                     draw_bitmap, invert)

# File format
from . import codec
from .codec import encode, decode, load, save

# Text rendering
from .text import BitmapFont, FontFace, TextRenderer

# Errors
from .errors import (BitmapError, InvalidArgument, MalformedBitmap, IncompatibleFormat,
                     MalformedFont)

__all__ = [
    # Buffers
    "PixelBuffer",
    "DrawBuffer",
    "Palette",
    "DEFAULT_PALETTE",
    "BIG",
    "LITTLE",
    # Operations
    "convert_depth",
    "draw_rect",
    "draw_gradient_rect",
    "draw_ellipse",
    "draw_bitmap",
    "invert",
    # Codec
    "codec",
    "encode",
    "decode",
    "load",
    "save",
    # Text
    "BitmapFont",
    "FontFace",
    "TextRenderer",
    # Errors
    "BitmapError",
    "InvalidArgument",
    "MalformedBitmap",
    "IncompatibleFormat",
    "MalformedFont",
]

__version__ = "1.0.0"
