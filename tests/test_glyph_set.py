import numpy as np
import pytest

from glyphmatch.glyph_atlas import build_glyph_set
from glyphmatch.glyph_set import GlyphSet
from tests.conftest import FONT_PATH, letter_a, letter_b, needs_font


def test_properties(ab_font):
    assert len(ab_font) == 2
    assert ab_font.glyph_width == 8
    assert ab_font.glyph_height == 8
    assert ab_font.glyph_size == 64
    assert ab_font.charcodes() == ["A", "B"]
    assert "A" in ab_font
    assert "C" not in ab_font
    assert ab_font.get_symbol(1) == "B"
    assert ab_font.index("B") == 1


def test_get_glyph(ab_font):
    np.testing.assert_array_equal(ab_font.get_glyph("B").data, letter_b())


def test_vectors(ab_font):
    vectors = ab_font.vectors()
    assert vectors.shape == (2, 64)
    assert vectors.dtype == np.float64
    np.testing.assert_array_equal(vectors[0], letter_a().reshape(-1))


def test_bitmaps_are_copied_and_read_only():
    bitmap = letter_a()
    font = GlyphSet.from_bitmaps([("A", bitmap)])
    bitmap[:] = 0
    assert font.bitmaps.sum() > 0
    with pytest.raises(ValueError):
        font.bitmaps[0, 0, 0] = 1


def test_rejects_mismatched_sizes():
    with pytest.raises(ValueError):
        GlyphSet(symbols=("A", "B"), bitmaps=np.zeros((1, 8, 8)))


def test_rejects_duplicates():
    with pytest.raises(ValueError, match="Duplicate"):
        GlyphSet(symbols=("A", "A"), bitmaps=np.zeros((2, 8, 8)))


def test_rejects_empty():
    with pytest.raises(ValueError):
        GlyphSet(symbols=(), bitmaps=np.zeros((0, 8, 8)))


def test_rejects_multi_character_symbol():
    with pytest.raises(ValueError):
        GlyphSet(symbols=("AB",), bitmaps=np.zeros((1, 8, 8)))


@needs_font
def test_build_glyph_set_shape():
    font = build_glyph_set(FONT_PATH, 16, " #@")
    assert font.charcodes() == [" ", "#", "@"]
    assert font.bitmaps.shape == (3, font.glyph_height, font.glyph_width)
    assert font.bitmaps.dtype == np.uint8
    assert font.glyph_width > 0
    assert font.glyph_height > 0


@needs_font
def test_build_glyph_set_space_is_blank():
    font = build_glyph_set(FONT_PATH, 16, " @")
    assert font.get_glyph(" ").data.sum() == 0
    assert font.get_glyph("@").data.sum() > 0


@needs_font
def test_build_glyph_set_drops_duplicates():
    font = build_glyph_set(FONT_PATH, 12, "abca")
    assert font.charcodes() == ["a", "b", "c"]
