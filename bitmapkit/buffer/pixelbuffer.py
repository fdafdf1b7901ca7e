"""
PixelBuffer - Raw Pixel Storage with Depth Support
==================================================
Owns the bytes of a width x height image at a fixed number of bytes per pixel.

Supports:
- 1 byte per pixel: palette indices (see Palette)
- 2 bytes per pixel: RGB565 values
- 4 bytes per pixel: 0x00RRGGBB values

Multi-byte pixels are stored big- or little-endian. The read/write strategy
is picked once from (bytes_per_pixel, byte_order) when storage is allocated.
"""

import struct

from ..errors import InvalidArgument
from .palette import Palette

# =============================================================================
# Byte Order Constants
# =============================================================================

BIG = "big"
LITTLE = "little"

# =============================================================================
# Depth Constants
# =============================================================================

SUPPORTED_DEPTHS = (1, 2, 4)

_PIXEL_MASKS = {1: 0xFF, 2: 0xFFFF, 4: 0xFFFFFFFF}

# One packer per storage layout; 1-byte pixels have no byte order.
_PIXEL_FORMATS = {
    (1, BIG): struct.Struct(">B"),
    (1, LITTLE): struct.Struct("<B"),
    (2, BIG): struct.Struct(">H"),
    (2, LITTLE): struct.Struct("<H"),
    (4, BIG): struct.Struct(">I"),
    (4, LITTLE): struct.Struct("<I"),
}


def _check_format(bytes_per_pixel, byte_order):
    if bytes_per_pixel not in SUPPORTED_DEPTHS or isinstance(bytes_per_pixel, bool):
        raise InvalidArgument("bytes per pixel", bytes_per_pixel,
                              f"Invalid number of bytes per pixel: {bytes_per_pixel!r}")
    if byte_order not in (BIG, LITTLE):
        raise InvalidArgument("byte order", byte_order)


class PixelBuffer:
    """
    Pixel storage with bounds-checked single pixel access.

    Raw values are plain integers; their meaning depends on the depth
    (palette index, RGB565 or 24-bit RGB).
    """

    def __init__(self, width: int, height: int, bytes_per_pixel: int = 1,
                 byte_order: str = BIG, fill: int = 0):
        _check_format(bytes_per_pixel, byte_order)
        if not isinstance(width, int) or width < 1:
            raise InvalidArgument("width", width)
        if not isinstance(height, int) or height < 1:
            raise InvalidArgument("height", height)

        self._width = width
        self._height = height
        self._byte_order = byte_order
        self._palette = None
        self._allocate(bytes_per_pixel)

        if bytes_per_pixel == 1:
            self._palette = Palette.default()
        if fill:
            self.clear(fill)

    def _allocate(self, bytes_per_pixel: int) -> None:
        self._bpp = bytes_per_pixel
        self._format = _PIXEL_FORMATS[(bytes_per_pixel, self._byte_order)]
        self._mask = _PIXEL_MASKS[bytes_per_pixel]
        self._row_bytes = self._width * bytes_per_pixel
        self._buffer_size = self._row_bytes * self._height
        self._buffer = bytearray(self._buffer_size)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int: return self._width

    @property
    def height(self) -> int: return self._height

    @property
    def bytes_per_pixel(self) -> int: return self._bpp

    @property
    def byte_order(self) -> str: return self._byte_order

    @property
    def row_bytes(self) -> int: return self._row_bytes

    @property
    def size(self) -> int: return self._buffer_size

    @property
    def data(self) -> bytearray: return self._buffer

    @property
    def palette(self):
        """Palette for 1-byte pixels, None for direct colour depths."""
        return self._palette

    @palette.setter
    def palette(self, value) -> None:
        if self._bpp != 1:
            raise InvalidArgument("palette", value, "Only 1-byte pixels use a palette")
        self._palette = value if isinstance(value, Palette) else Palette(value)

    # =========================================================================
    # Raw Access
    # =========================================================================

    def read_at(self, offset: int) -> int:
        """Read the raw pixel value stored at a byte offset (no bounds check)."""
        return self._format.unpack_from(self._buffer, offset)[0]

    def write_at(self, offset: int, value: int) -> None:
        """Write a raw pixel value truncated to the pixel width (no bounds check)."""
        self._format.pack_into(self._buffer, offset, value & self._mask)

    def _offset(self, x: int, y: int):
        if not (0 <= x < self._width): return None
        off = (y * self._width + x) * self._bpp
        # y isn't checked on its own; anything outside storage is off the bitmap
        if off < 0 or off + self._bpp > self._buffer_size: return None
        return off

    # =========================================================================
    # Pixel Ops
    # =========================================================================

    def get_pixel(self, x: int, y: int):
        """Raw value at (x, y), or None when the coordinates are off the bitmap."""
        off = self._offset(x, y)
        if off is None: return None
        return self._format.unpack_from(self._buffer, off)[0]

    def set_pixel(self, x: int, y: int, value: int) -> None:
        off = self._offset(x, y)
        if off is None: return
        self._format.pack_into(self._buffer, off, value & self._mask)

    def replace_color(self, old_value: int, new_value: int) -> None:
        """Set every pixel whose raw value equals old_value to new_value."""
        fmt = self._format
        buf = self._buffer
        new_value &= self._mask
        for off in range(0, self._buffer_size, self._bpp):
            if fmt.unpack_from(buf, off)[0] == old_value:
                fmt.pack_into(buf, off, new_value)

    def clear(self, byte_value: int = 0) -> None:
        """Set every storage byte (not pixel) to byte_value."""
        self._buffer[:] = bytes((byte_value & 0xFF,)) * self._buffer_size

    # =========================================================================
    # Format Conversion
    # =========================================================================

    def change_color_depth(self, bytes_per_pixel: int) -> None:
        """
        Convert every pixel to another depth in place.

        Storage and palette are replaced together; on error the buffer is
        left untouched.
        """
        from .convert import convert_depth

        converted = convert_depth(self, bytes_per_pixel)
        self._adopt(converted)

    def _adopt(self, other: "PixelBuffer") -> None:
        self._byte_order = other._byte_order
        self._bpp = other._bpp
        self._format = other._format
        self._mask = other._mask
        self._row_bytes = other._row_bytes
        self._buffer_size = other._buffer_size
        self._buffer = other._buffer
        self._palette = other._palette

    def copy(self) -> "PixelBuffer":
        clone = type(self)(self._width, self._height, self._bpp, self._byte_order)
        clone._buffer[:] = self._buffer
        clone._palette = self._palette.copy() if self._palette is not None else None
        return clone

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self._width == other._width and self._height == other._height
                and self._bpp == other._bpp and self._byte_order == other._byte_order
                and self._buffer == other._buffer)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self._width}x{self._height}, "
                f"{self._bpp} bpp, {self._byte_order})")
