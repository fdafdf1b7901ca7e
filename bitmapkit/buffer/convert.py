"""
Colour Depth Conversion
=======================
Remaps every pixel of a PixelBuffer to another bytes-per-pixel
representation through its 24-bit RGB value.

    1 byte  -> palette lookup (missing entries are black)
    2 bytes -> RGB565, each channel rescaled to 8 bits
    4 bytes -> 0x00RRGGBB, top byte ignored

Converting to 1 byte builds a fresh palette in order of first appearance and
tops it up with DEFAULT_PALETTE colours that aren't already present.
"""

import logging

from ..errors import InvalidArgument
from .palette import CAPACITY, DEFAULT_PALETTE, Palette
from .pixelbuffer import PixelBuffer, SUPPORTED_DEPTHS

log = logging.getLogger(__name__)

# =============================================================================
# RGB565 Constants
# =============================================================================

_RED_MAX = 0x1F
_GREEN_MAX = 0x3F
_BLUE_MAX = 0x1F
_CHANNEL_MAX = 0xFF
_RGB_MASK = 0xFFFFFF


def _round(value: float) -> int:
    """Round half up (never to even) so results don't depend on parity."""
    return int(value + 0.5)


def rgb565_to_rgb(value: int) -> int:
    return (
        _round((value >> 11 & _RED_MAX) / _RED_MAX * _CHANNEL_MAX) << 16 |
        _round((value >> 5 & _GREEN_MAX) / _GREEN_MAX * _CHANNEL_MAX) << 8 |
        _round((value & _BLUE_MAX) / _BLUE_MAX * _CHANNEL_MAX)
    )


def rgb_to_rgb565(color: int) -> int:
    return (
        _round((color >> 16 & _CHANNEL_MAX) / _CHANNEL_MAX * _RED_MAX) << 11 |
        _round((color >> 8 & _CHANNEL_MAX) / _CHANNEL_MAX * _GREEN_MAX) << 5 |
        _round((color & _CHANNEL_MAX) / _CHANNEL_MAX * _BLUE_MAX)
    )


def convert_depth(buffer: PixelBuffer, bytes_per_pixel: int) -> PixelBuffer:
    """
    Return a new buffer holding `buffer`'s pixels at another depth.

    Width, height and byte order are kept. The source isn't modified.

    Raises:
        InvalidArgument: If bytes_per_pixel isn't 1, 2 or 4
    """
    if bytes_per_pixel not in SUPPORTED_DEPTHS or isinstance(bytes_per_pixel, bool):
        raise InvalidArgument("bytes per pixel", bytes_per_pixel,
                              f"Invalid number of bytes per pixel: {bytes_per_pixel!r}")

    src_bpp = buffer.bytes_per_pixel
    dst = PixelBuffer(buffer.width, buffer.height, bytes_per_pixel, buffer.byte_order)

    # --- Source: raw value -> RGB ---
    if src_bpp == 1:
        src_palette = buffer.palette if buffer.palette is not None else Palette()
        to_rgb = src_palette.color_at
    elif src_bpp == 2:
        to_rgb = rgb565_to_rgb
    else:
        def to_rgb(value): return value & _RGB_MASK

    # --- Destination: RGB -> raw value ---
    if bytes_per_pixel == 1:
        palette = Palette()
        dst.palette = palette
        saturated = []

        def from_rgb(color):
            index = palette.index_of(color)
            if index is None:
                if palette.is_full and not saturated:
                    log.warning("Palette full after %d colours, mapping %06x and later "
                                "new colours to index 0", CAPACITY, color)
                    saturated.append(color)
                index = palette.append(color)
            return index
    elif bytes_per_pixel == 2:
        from_rgb = rgb_to_rgb565
    else:
        def from_rgb(color): return color

    read = buffer.read_at
    write = dst.write_at
    # Raw value -> converted value
    cache = {}
    for index in range(buffer.width * buffer.height):
        raw = read(index * src_bpp)
        value = cache.get(raw)
        if value is None:
            value = from_rgb(to_rgb(raw))
            cache[raw] = value
        write(index * bytes_per_pixel, value)

    if bytes_per_pixel == 1:
        _pad_with_defaults(dst.palette)

    log.debug("Converted %dx%d buffer from %d to %d bytes per pixel",
              buffer.width, buffer.height, src_bpp, bytes_per_pixel)
    return dst


def _pad_with_defaults(palette: Palette) -> None:
    """Top up to CAPACITY entries with default colours not yet present."""
    for color in DEFAULT_PALETTE:
        if palette.is_full:
            break
        if color not in palette:
            palette.append(color)
