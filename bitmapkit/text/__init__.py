"""
Text rendering subsystem.

Modules:
    font: Bitmap font (BMFont/bmfont2json) loader and metrics
    renderer: Text layout onto a PixelBuffer via bitmap blits
"""
from .font import BitmapFont, FontFace
from .renderer import TextRenderer

__all__ = ["BitmapFont", "FontFace", "TextRenderer"]
