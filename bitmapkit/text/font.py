"""
Bitmap Font Loader
==================
Glyph metrics and glyph sheets produced by BMFont and converted with
bmfont2json.

A font is described by a main JSON file listing one details file per size:

    [{"size": 16, "filename": "arial-16.json"}, ...]

Each details file follows the bmfont2json layout:

    info:      {"face", "bold", "italic", ...}
    common:    {"lineHeight", "base", ...}
    chars:     [{"id", "x", "y", "width", "height",
                 "xoffset", "yoffset", "xadvance"}, ...]
    kernings:  [{"first", "second", "amount"}, ...]
    pages:     ["arial-16.bmp"]

The first page must be an 8-bit BMP with black background and white glyphs.
"""

import json
import logging
import os

from ..codec import bmp
from ..errors import InvalidArgument, MalformedFont

log = logging.getLogger(__name__)

# =============================================================================
# Glyph Sheet Colours
# =============================================================================

BACKGROUND_RGB = 0x000000
INK_RGB = 0xFFFFFF
TRANSPARENT_RGB = 0xFF00FF
FALLBACK_TRANSPARENT_INDEX = 0x80

_LINE_BREAKS = ("\r\n", "\r")


def split_lines(text: str):
    """Split on \\r\\n, \\n or \\r."""
    for sep in _LINE_BREAKS:
        text = text.replace(sep, "\n")
    return text.split("\n")


class FontFace:
    """
    One size of a bitmap font.

    Attributes:
        face: Font family name
        bold, italic: Style flags
        line_height: Distance between baselines in pixels
        base: Baseline y offset from the top of a line
        chars: Character -> glyph metrics dict
        kernings: Second character -> {first character: amount}
        sheet: Glyph sheet PixelBuffer (1 byte per pixel)
        transparent_color: Sheet index skipped when blitting
        color: Sheet index of glyph ink
    """

    def __init__(self, face, bold, italic, line_height, base, chars, kernings,
                 sheet, transparent_color, color):
        self.face = face
        self.bold = bold
        self.italic = italic
        self.line_height = line_height
        self.base = base
        self.chars = chars
        self.kernings = kernings
        self.sheet = sheet
        self.transparent_color = transparent_color
        self.color = color

    @classmethod
    def from_details(cls, details: dict, sheet) -> "FontFace":
        """
        Build a face from a bmfont2json dict and its glyph sheet.

        The sheet is modified: background pixels become transparent.

        Raises:
            MalformedFont: If a key is missing or the sheet lacks black/white
        """
        try:
            info = details["info"]
            common = details["common"]
            chars = {chr(c["id"]): {k: v for k, v in c.items() if k != "id"}
                     for c in details["chars"]}
            kernings = {}
            for k in details.get("kernings", ()):
                kernings.setdefault(chr(k["second"]), {})[chr(k["first"])] = k["amount"]
            line_height = common["lineHeight"]
            base = common.get("base", 0)
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedFont(f"Invalid font details: {e!r}") from e

        if sheet.bytes_per_pixel != 1 or sheet.palette is None:
            raise MalformedFont("Glyph sheet must use 1 byte per pixel")
        palette = sheet.palette
        background = palette.index_of(BACKGROUND_RGB)
        color = palette.index_of(INK_RGB)
        if background is None or color is None:
            raise MalformedFont("Glyph sheet palette needs black and white entries")

        transparent = palette.index_of(TRANSPARENT_RGB)
        if transparent is None:
            transparent = FALLBACK_TRANSPARENT_INDEX
        sheet.replace_color(background, transparent)

        return cls(info.get("face", ""), bool(info.get("bold")), bool(info.get("italic")),
                   line_height, base, chars, kernings, sheet, transparent, color)

    def kerning(self, previous, current) -> int:
        if previous is None:
            return 0
        return self.kernings.get(current, {}).get(previous, 0)


class BitmapFont:
    """
    A bitmap font available in one or more pixel sizes.

    All faces must share family name and style. The smallest size is
    selected initially.

    Args:
        faces: Mapping of pixel size -> FontFace
    """

    def __init__(self, faces: dict):
        if not faces:
            raise MalformedFont("A font needs at least one size")
        first = None
        for size in sorted(faces):
            face = faces[size]
            if first is not None and (face.face, face.bold, face.italic) != (
                    first.face, first.bold, first.italic):
                raise MalformedFont(f"Size {size} belongs to a different font")
            first = first or face
        self._faces = dict(faces)
        self._first_size = min(faces)
        self._size = self._first_size

    @classmethod
    def load(cls, path) -> "BitmapFont":
        """
        Load a font from its main JSON file.

        Raises:
            MalformedFont: If a JSON file is invalid
            MalformedBitmap: If a glyph sheet is invalid
            OSError: If a file can't be read
        """
        folder = os.path.dirname(path)
        entries = _read_json(path)
        if not isinstance(entries, list) or not entries:
            raise MalformedFont(f"{path}: expected a non-empty list of sizes")

        faces = {}
        for entry in entries:
            try:
                size, filename = entry["size"], entry["filename"]
            except (KeyError, TypeError) as e:
                raise MalformedFont(f"{path}: invalid size entry {entry!r}") from e
            details = _read_json(os.path.join(folder, filename))
            pages = details.get("pages") if isinstance(details, dict) else None
            if not pages:
                raise MalformedFont(f"{filename}: no glyph sheet page")
            sheet = bmp.load(os.path.join(folder, pages[0]))
            faces[size] = FontFace.from_details(details, sheet)
            log.debug("Loaded font size %s from %s", size, filename)
        return cls(faces)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def _current(self) -> FontFace: return self._faces[self._size]

    @property
    def name(self) -> str: return self._faces[self._first_size].face

    @property
    def bold(self) -> bool: return self._faces[self._first_size].bold

    @property
    def italic(self) -> bool: return self._faces[self._first_size].italic

    @property
    def sizes(self) -> list: return sorted(self._faces)

    @property
    def size(self) -> int: return self._size

    @size.setter
    def size(self, value: int) -> None:
        if value not in self._faces:
            raise InvalidArgument("font size", value, f"The size {value!r} doesn't exist")
        self._size = value

    @property
    def face(self) -> FontFace: return self._current

    @property
    def bitmap(self): return self._current.sheet

    @property
    def transparent_color(self) -> int: return self._current.transparent_color

    @property
    def color(self) -> int: return self._current.color

    def set_color(self, value: int) -> None:
        """Recolour the ink of the current size's glyph sheet (raw pixel value)."""
        face = self._current
        face.sheet.replace_color(face.color, value)
        face.color = value

    @property
    def line_height(self) -> int: return self._current.line_height

    @line_height.setter
    def line_height(self, value: int) -> None:
        self._current.line_height = value

    @property
    def base_line_y(self) -> int: return self._current.base

    # =========================================================================
    # Measurement
    # =========================================================================

    def measure(self, text: str):
        """
        Size of the text block drawn at the current size.

        Returns:
            (width, height) in pixels
        """
        face = self._current
        width = height = 0
        for line in split_lines(text):
            line_width = 0
            previous = None
            for ch in line:
                glyph = face.chars.get(ch)
                if glyph is None:
                    break
                line_width += face.kerning(previous, ch) + glyph["xadvance"]
                previous = ch
            width = max(width, line_width)
            height += face.line_height
        return width, height


def _read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except ValueError as e:
            raise MalformedFont(f"{path}: {e}") from e
