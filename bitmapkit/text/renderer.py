"""
TextRenderer - Bitmap Font Text Layout
======================================
Renders text onto a PixelBuffer by blitting glyph rectangles from a
BitmapFont's glyph sheet.

Features:
- Multi-line text (\\n, \\r\\n or \\r)
- Kerning between character pairs
- Glyph offsets and advance widths from the font metrics

Usage:
    from bitmapkit.buffer import DrawBuffer
    from bitmapkit.text import BitmapFont, TextRenderer

    fb = DrawBuffer(400, 300)
    font = BitmapFont.load("fonts/arial.json")
    text = TextRenderer(fb)

    text.draw(font, "Hello World!", 10, 10)

    # Measure before drawing for layout
    w, h = font.measure("Hello")
"""

from ..buffer.draw import draw_bitmap
from .font import split_lines


class TextRenderer:
    """
    Draws BitmapFont text onto a buffer.

    The buffer must use 1 byte per pixel like the font's glyph sheets, and
    the sheet's ink index is copied as-is, so it should match a palette
    entry of the target.

    Args:
        fb: PixelBuffer instance to render onto
    """

    def __init__(self, fb):
        self._fb = fb

    def draw(self, font, text: str, x: int, y: int) -> None:
        """
        Draw text with its top-left corner at (x, y).

        A character missing from the font ends its line.

        Raises:
            IncompatibleFormat: If buffer and glyph sheet depths differ
        """
        face = font.face
        sheet = face.sheet
        transparent = face.transparent_color

        for line in split_lines(text):
            cx = x
            previous = None
            for ch in line:
                glyph = face.chars.get(ch)
                if glyph is None:
                    break
                cx += face.kerning(previous, ch)
                draw_bitmap(self._fb, sheet, cx + glyph["xoffset"], y + glyph["yoffset"],
                            transparent, glyph["x"], glyph["y"],
                            glyph["width"], glyph["height"])
                cx += glyph["xadvance"]
                previous = ch
            y += face.line_height
