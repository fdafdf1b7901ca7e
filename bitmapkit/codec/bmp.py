"""
BMP File Codec
==============
Encodes PixelBuffers as uncompressed Windows bitmap files and decodes 8-bit
bitmap files back into PixelBuffers.

Format Layout:
    [File header: 14 bytes]
    [Info header: 40 bytes]
    [Palette / bit-field masks: 4 bytes per entry]
    [Pixel rows: bottom row first, each padded to a multiple of 4 bytes]

Header Structure (54 bytes, little-endian):
    - Signature: "BM" (2 bytes)
    - File size, reserved, data offset: 4 bytes each
    - Info header size: 4 bytes
    - Width, height: signed 4 bytes each
    - Planes (=1), bits per pixel: 2 bytes each
    - Compression, data byte count: 4 bytes each
    - Pixels per meter X/Y: signed 4 bytes each
    - Used colours, important colours: 4 bytes each

Encoding supports 1, 2 and 4 bytes per pixel (8, 16 and 32 bits). Decoding
supports 8-bit palette files only.
"""

import io
import logging
import os
import struct
from collections import namedtuple

from ..buffer.palette import BLACK_RGB, CAPACITY, Palette
from ..buffer.pixelbuffer import LITTLE, PixelBuffer
from ..errors import MalformedBitmap

log = logging.getLogger(__name__)

# =============================================================================
# Format Constants
# =============================================================================

BMP_SIGNATURE = b"BM"

_HEADER = struct.Struct("<2sIIIIiiHHIIiiII")
HEADER_SIZE = _HEADER.size  # 54
FILE_HEADER_SIZE = 14  # Everything before the info header size field
INFO_HEADER_SIZE = HEADER_SIZE - FILE_HEADER_SIZE

RGB_COMPRESSION = 0
BITFIELDS_COMPRESSION = 3

VALID_BITS_PER_PIXEL = (1, 4, 8, 16, 24, 32)
DECODABLE_BITS_PER_PIXEL = 8

# Bit-field masks written in place of a palette for 16-bit files
RGB565_MASKS = (0x1F << 11, 0x3F << 5, 0x1F)

# 96 DPI
DEFAULT_PIXELS_PER_METER = round(96 / 2.54 * 100)

_PALETTE_ENTRY = struct.Struct("<I")
_ENTRY_SIZE = _PALETTE_ENTRY.size
_RGB_MASK = 0xFFFFFF
_LITTLE_ENDIAN_PIXEL = {2: struct.Struct("<H"), 4: struct.Struct("<I")}

BitmapFileHeader = namedtuple("BitmapFileHeader", (
    "signature", "size", "reserved", "data_offset", "info_header_size",
    "width", "height", "planes", "bits_per_pixel", "compression",
    "data_byte_count", "pixels_per_meter_x", "pixels_per_meter_y",
    "used_colors", "important_colors",
))


def padded_row_size(width: int, bits_per_pixel: int) -> int:
    """Bytes per stored row, rounded up to a multiple of 4."""
    return (width * bits_per_pixel + 31) // 32 * 4


# =============================================================================
# Encoding
# =============================================================================

def _palette_block(buffer: PixelBuffer, palette):
    bpp = buffer.bytes_per_pixel
    if bpp == 2:
        return BITFIELDS_COMPRESSION, list(RGB565_MASKS)
    if bpp == 4:
        return RGB_COMPRESSION, []

    if palette is None:
        palette = buffer.palette
    if not palette:
        return RGB_COMPRESSION, []
    # Exactly 256 entries
    entries = [color & _RGB_MASK for color in list(palette)[:CAPACITY]]
    entries.extend([BLACK_RGB] * (CAPACITY - len(entries)))
    return RGB_COMPRESSION, entries


def encode(buffer: PixelBuffer, palette=None,
           pixels_per_meter: int = DEFAULT_PIXELS_PER_METER) -> bytes:
    """
    Serialize a buffer to BMP file bytes.

    Args:
        buffer: Pixels to write
        palette: Colours for 1-byte pixels; defaults to the buffer's palette
        pixels_per_meter: Resolution written to both axes

    Returns:
        Complete file contents
    """
    bpp = buffer.bytes_per_pixel
    width, height = buffer.width, buffer.height
    compression, entries = _palette_block(buffer, palette)

    data_offset = HEADER_SIZE + len(entries) * _ENTRY_SIZE
    src_row = buffer.row_bytes
    dst_row = padded_row_size(width, bpp * 8)
    data_bytes = dst_row * height
    size = data_offset + data_bytes

    out = bytearray(size)  # Zero-filled, padding included
    _HEADER.pack_into(
        out, 0, BMP_SIGNATURE, size, 0, data_offset, INFO_HEADER_SIZE,
        width, height, 1, bpp * 8, compression, data_bytes,
        pixels_per_meter, pixels_per_meter, 0, 0)

    pos = HEADER_SIZE
    for color in entries:
        _PALETTE_ENTRY.pack_into(out, pos, color)
        pos += _ENTRY_SIZE

    src = buffer.data
    swap = bpp > 1 and buffer.byte_order != LITTLE
    for y in range(height - 1, -1, -1):
        src_off = y * src_row
        if not swap:
            out[pos:pos + src_row] = src[src_off:src_off + src_row]
        else:
            # Files always store multi-byte pixels little-endian
            packer = _LITTLE_ENDIAN_PIXEL[bpp]
            for i in range(0, src_row, bpp):
                packer.pack_into(out, pos + i, buffer.read_at(src_off + i))
        pos += dst_row

    log.debug("Encoded %dx%d bitmap at %d bits per pixel (%d bytes, %d palette entries)",
              width, height, bpp * 8, size, len(entries))
    return bytes(out)


def save(buffer: PixelBuffer, path, palette=None) -> None:
    """Write a buffer to a .bmp file."""
    data = encode(buffer, palette)
    with open(path, "wb") as f:
        f.write(data)
    log.debug("Saved %s (%d bytes)", path, len(data))


# =============================================================================
# Decoding
# =============================================================================

def _check(condition: bool, message: str) -> None:
    if not condition:
        raise MalformedBitmap(message)


def _validate(header: BitmapFileHeader, size: int, allow_top_down: bool):
    """
    Check every header field against the actual file size.

    Returns:
        (width, height, top_down, palette_start)
    """
    width, height = header.width, header.height
    top_down = False
    if allow_top_down:
        width = abs(width)
        if height < 0:
            height, top_down = -height, True

    palette_start = FILE_HEADER_SIZE + header.info_header_size

    _check(header.signature == BMP_SIGNATURE, "Invalid BMP signature")
    _check(header.size == size,
           f"Declared file size {header.size} doesn't match actual size {size}")
    _check(palette_start >= HEADER_SIZE,
           f"Info header too small: {header.info_header_size} bytes")
    _check(palette_start <= size, "Info header extends past the end of the data")
    _check(palette_start <= header.data_offset < size,
           f"Pixel data offset out of range: {header.data_offset}")
    _check(width >= 1 and height >= 1, f"Invalid dimensions: {width} x {height}")
    _check(header.planes == 1, f"Invalid BMP: planes = {header.planes} (must be 1)")
    _check(header.bits_per_pixel in VALID_BITS_PER_PIXEL,
           f"Invalid bit depth: {header.bits_per_pixel}")
    _check(header.compression == RGB_COMPRESSION,
           "Compressed bitmaps aren't supported")
    _check(header.data_byte_count <= size - palette_start,
           f"Declared data size {header.data_byte_count} exceeds the file")
    _check(header.bits_per_pixel == DECODABLE_BITS_PER_PIXEL,
           f"Unsupported bit depth: {header.bits_per_pixel}")
    return width, height, top_down, palette_start


def _read_bitmap(stream, size: int, allow_top_down: bool) -> PixelBuffer:
    raw = stream.read(HEADER_SIZE)
    _check(len(raw) == HEADER_SIZE and size > HEADER_SIZE, "Data too small to be a BMP")
    header = BitmapFileHeader._make(_HEADER.unpack(raw))
    width, height, top_down, palette_start = _validate(header, size, allow_top_down)

    # Palette runs up to the pixel data
    palette_bytes = header.data_offset - palette_start
    _check(palette_bytes % _ENTRY_SIZE == 0, "Palette size isn't a multiple of 4 bytes")
    row_size = padded_row_size(width, header.bits_per_pixel)
    _check(header.data_offset + row_size * height <= size,
           "Pixel data is shorter than the header declares")

    stream.seek(palette_start)
    block = stream.read(palette_bytes)
    colors = [entry & _RGB_MASK for (entry,) in _PALETTE_ENTRY.iter_unpack(block)]
    if len(colors) > CAPACITY:
        log.warning("Palette has %d entries, only the first %d are addressable",
                    len(colors), CAPACITY)

    buffer = PixelBuffer(width, height, 1)
    buffer.palette = Palette(colors)
    data = buffer.data
    stream.seek(header.data_offset)
    for i in range(height):
        row = stream.read(row_size)
        _check(len(row) == row_size, "Unexpected end of pixel data")
        y = i if top_down else height - 1 - i
        data[y * width:(y + 1) * width] = row[:width]

    log.debug("Decoded %dx%d bitmap (%d palette entries%s)",
              width, height, len(colors), ", top-down" if top_down else "")
    return buffer


def decode(data) -> PixelBuffer:
    """
    Parse 8-bit BMP file bytes into a PixelBuffer.

    The buffer's palette is replaced by the file's palette. Nothing is
    returned unless every structural check passes.

    Raises:
        MalformedBitmap: If the data isn't a valid, supported bitmap
    """
    data = bytes(data)
    return _read_bitmap(io.BytesIO(data), len(data), allow_top_down=False)


def load(path) -> PixelBuffer:
    """
    Read an 8-bit .bmp file.

    Unlike decode(), a negative height is accepted and means rows are
    stored top row first.

    Raises:
        MalformedBitmap: If the file isn't a valid, supported bitmap
        OSError: If the file can't be read
    """
    with open(path, "rb") as f:
        size = os.fstat(f.fileno()).st_size
        buffer = _read_bitmap(f, size, allow_top_down=True)
    log.debug("Loaded %s", path)
    return buffer
