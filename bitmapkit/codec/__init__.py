"""
Codec subsystem - bitmap file reading and writing.

Modules:
    bmp: Uncompressed Windows bitmap (.bmp) encoder/decoder
"""
from .bmp import encode, decode, load, save, BitmapFileHeader, padded_row_size

__all__ = [
    "encode",
    "decode",
    "load",
    "save",
    "BitmapFileHeader",
    "padded_row_size",
]
