"""Tests for the palette colour table."""
from bitmapkit.buffer import CAPACITY, DEFAULT_PALETTE, Palette


def test_default_palette_has_256_entries():
    assert len(DEFAULT_PALETTE) == 256
    assert DEFAULT_PALETTE[0] == 0x000000
    assert DEFAULT_PALETTE[-1] == 0xFFFFFF
    assert Palette.default() == DEFAULT_PALETTE


def test_append_returns_new_index():
    p = Palette()
    assert p.append(0xFF0000) == 0
    assert p.append(0x00FF00) == 1
    assert len(p) == 2


def test_append_existing_colour_returns_first_index():
    p = Palette([0x111111, 0x222222, 0x111111])
    assert p.append(0x111111) == 0
    assert len(p) == 3


def test_append_to_full_palette_saturates_to_zero():
    p = Palette(range(1, CAPACITY + 1))
    assert p.is_full
    assert p.append(0xABCDEF) == 0
    assert len(p) == CAPACITY
    assert 0xABCDEF not in p
    # Present colours are still found
    assert p.append(7) == 6


def test_index_of_missing_colour():
    assert Palette([0x010203]).index_of(0x030201) is None


def test_color_at_unfilled_entry_is_black():
    p = Palette([0x123456])
    assert p.color_at(0) == 0x123456
    assert p.color_at(1) == 0x000000
    assert p.color_at(-1) == 0x000000


def test_entries_can_be_overwritten():
    p = Palette.default()
    p[3] = 0xCAFE00
    assert p[3] == 0xCAFE00
    assert p.index_of(0xCAFE00) == 3
    assert DEFAULT_PALETTE[3] == 0x808000
