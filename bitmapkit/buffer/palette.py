"""
Palette - Colour Table for 1-Byte Pixels
========================================
Maps raw pixel values (indices) of a 1-byte-per-pixel buffer to 24-bit RGB
colours (0xRRGGBB).

The table tolerates duplicates and holds at most CAPACITY entries. Appending a
new colour to a full palette doesn't grow it or fail: index 0 is reused.
"""

# =============================================================================
# Constants
# =============================================================================

CAPACITY = 256
BLACK_RGB = 0x000000

# Standard 256-colour table seeding every new 1-byte-per-pixel buffer.
DEFAULT_PALETTE = (
    0x000000, 0x800000, 0x008000, 0x808000, 0x000080, 0x800080, 0x008080, 0xc0c0c0,
    0xc0dcc0, 0xa6caf0, 0x402000, 0x602000, 0x802000, 0xa02000, 0xc02000, 0xe02000,
    0x004000, 0x204000, 0x404000, 0x604000, 0x804000, 0xa04000, 0xc04000, 0xe04000,
    0x006000, 0x206000, 0x406000, 0x606000, 0x806000, 0xa06000, 0xc06000, 0xe06000,
    0x008000, 0x208000, 0x408000, 0x608000, 0x808000, 0xa08000, 0xc08000, 0xe08000,
    0x00a000, 0x20a000, 0x40a000, 0x60a000, 0x80a000, 0xa0a000, 0xc0a000, 0xe0a000,
    0x00c000, 0x20c000, 0x40c000, 0x60c000, 0x80c000, 0xa0c000, 0xc0c000, 0xe0c000,
    0x00e000, 0x20e000, 0x40e000, 0x60e000, 0x80e000, 0xa0e000, 0xc0e000, 0xe0e000,
    0x000040, 0x200040, 0x400040, 0x600040, 0x800040, 0xa00040, 0xc00040, 0xe00040,
    0x002040, 0x202040, 0x402040, 0x602040, 0x802040, 0xa02040, 0xc02040, 0xe02040,
    0x004040, 0x204040, 0x404040, 0x604040, 0x804040, 0xa04040, 0xc04040, 0xe04040,
    0x006040, 0x206040, 0x406040, 0x606040, 0x806040, 0xa06040, 0xc06040, 0xe06040,
    0x008040, 0x208040, 0x408040, 0x608040, 0x808040, 0xa08040, 0xc08040, 0xe08040,
    0x00a040, 0x20a040, 0x40a040, 0x60a040, 0x80a040, 0xa0a040, 0xc0a040, 0xe0a040,
    0x00c040, 0x20c040, 0x40c040, 0x60c040, 0x80c040, 0xa0c040, 0xc0c040, 0xe0c040,
    0x00e040, 0x20e040, 0x40e040, 0x60e040, 0x80e040, 0xa0e040, 0xc0e040, 0xe0e040,
    0x000080, 0x200080, 0x400080, 0x600080, 0x800080, 0xa00080, 0xc00080, 0xe00080,
    0x002080, 0x202080, 0x402080, 0x602080, 0x802080, 0xa02080, 0xc02080, 0xe02080,
    0x004080, 0x204080, 0x404080, 0x604080, 0x804080, 0xa04080, 0xc04080, 0xe04080,
    0x006080, 0x206080, 0x406080, 0x606080, 0x806080, 0xa06080, 0xc06080, 0xe06080,
    0x008080, 0x208080, 0x408080, 0x608080, 0x808080, 0xa08080, 0xc08080, 0xe08080,
    0x00a080, 0x20a080, 0x40a080, 0x60a080, 0x80a080, 0xa0a080, 0xc0a080, 0xe0a080,
    0x00c080, 0x20c080, 0x40c080, 0x60c080, 0x80c080, 0xa0c080, 0xc0c080, 0xe0c080,
    0x00e080, 0x20e080, 0x40e080, 0x60e080, 0x80e080, 0xa0e080, 0xc0e080, 0xe0e080,
    0x0000c0, 0x2000c0, 0x4000c0, 0x6000c0, 0x8000c0, 0xa000c0, 0xc000c0, 0xe000c0,
    0x0020c0, 0x2020c0, 0x4020c0, 0x6020c0, 0x8020c0, 0xa020c0, 0xc020c0, 0xe020c0,
    0x0040c0, 0x2040c0, 0x4040c0, 0x6040c0, 0x8040c0, 0xa040c0, 0xc040c0, 0xe040c0,
    0x0060c0, 0x2060c0, 0x4060c0, 0x6060c0, 0x8060c0, 0xa060c0, 0xc060c0, 0xe060c0,
    0x0080c0, 0x2080c0, 0x4080c0, 0x6080c0, 0x8080c0, 0xa080c0, 0xc080c0, 0xe080c0,
    0x00a0c0, 0x20a0c0, 0x40a0c0, 0x60a0c0, 0x80a0c0, 0xa0a0c0, 0xc0a0c0, 0xe0a0c0,
    0x00c0c0, 0x20c0c0, 0x40c0c0, 0x60c0c0, 0x80c0c0, 0xa0c0c0, 0xfffbf0, 0xa0a0a4,
    0x808080, 0xff0000, 0x00ff00, 0xffff00, 0x0000ff, 0xff00ff, 0x00ffff, 0xffffff,
)


class Palette:
    """
    Ordered list of RGB colours indexed by raw pixel value.

    Supports the usual sequence protocol (len, iteration, indexing,
    item assignment) so entries can be overwritten freely.
    """

    def __init__(self, colors=()):
        self._colors = list(colors)

    @classmethod
    def default(cls) -> "Palette":
        """Fresh copy of DEFAULT_PALETTE."""
        return cls(DEFAULT_PALETTE)

    # =========================================================================
    # Lookup & Growth
    # =========================================================================

    def index_of(self, color: int):
        """Return the first index holding `color`, or None."""
        try:
            return self._colors.index(color)
        except ValueError:
            return None

    def append(self, color: int) -> int:
        """
        Add a colour unless already present.

        Returns:
            Index of the colour. When the palette is full and the colour is
            new, 0 is returned and nothing is stored.
        """
        index = self.index_of(color)
        if index is not None:
            return index
        if self.is_full:
            return 0
        self._colors.append(color)
        return len(self._colors) - 1

    def color_at(self, index: int) -> int:
        """Colour for a raw pixel value; unfilled entries read as black."""
        if 0 <= index < len(self._colors):
            return self._colors[index]
        return BLACK_RGB

    @property
    def is_full(self) -> bool:
        return len(self._colors) >= CAPACITY

    def copy(self) -> "Palette":
        return Palette(self._colors)

    # =========================================================================
    # Sequence Protocol
    # =========================================================================

    def __len__(self) -> int: return len(self._colors)

    def __iter__(self): return iter(self._colors)

    def __contains__(self, color) -> bool: return color in self._colors

    def __getitem__(self, index): return self._colors[index]

    def __setitem__(self, index: int, color: int) -> None:
        self._colors[index] = color

    def __eq__(self, other):
        if isinstance(other, Palette):
            return self._colors == other._colors
        if isinstance(other, (list, tuple)):
            return self._colors == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Palette({len(self._colors)} colors)"
