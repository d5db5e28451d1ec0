import numpy as np
from PIL import Image

from glyphmatch.converter import fit_output_size, image_to_ascii, image_to_text
from glyphmatch.factory import GlyphMatcherContextFactory
from glyphmatch.sequential import SequentialAsciifier
from tests.conftest import letter_a, letter_b


def make_asciifier(font):
    return SequentialAsciifier(GlyphMatcherContextFactory().create(font, "sed"))


def test_fit_wide_image():
    assert fit_output_size(160, 80, 8, 8, 10, 10) == (80, 40, 10, 5)


def test_fit_tall_image():
    assert fit_output_size(80, 160, 8, 8, 10, 10) == (40, 80, 5, 10)


def test_fit_rounds_partial_cells_up():
    assert fit_output_size(100, 30, 8, 16, 10, 10) == (80, 24, 10, 2)


def test_fit_never_collapses():
    out_width, out_height, cols, rows = fit_output_size(10000, 1, 8, 8, 10, 10)
    assert out_height == 1
    assert rows == 1
    assert cols == 10


def test_grid_of_letters(ab_font):
    image = Image.fromarray(np.tile(letter_a(), (3, 3)))
    assert image_to_ascii(image, make_asciifier(ab_font), max_cols=3, max_rows=3) == "AAA\nAAA\nAAA"


def test_mixed_letters(ab_font):
    pixels = np.hstack([letter_a(), letter_b(), letter_a()])
    text = image_to_text(Image.fromarray(pixels), make_asciifier(ab_font), max_cols=3, max_rows=3)
    assert (text.rows, text.cols) == (1, 3)
    assert text.lines() == ["ABA"]


def test_accepts_file_path_and_rgb(tmp_path, ab_font):
    grey = np.tile(letter_b(), (2, 2))
    image = Image.fromarray(np.stack([grey] * 3, axis=-1))
    path = tmp_path / "test.png"
    image.save(path)
    assert image_to_ascii(path, make_asciifier(ab_font), max_cols=2, max_rows=2) == "BB\nBB"


def test_resizes_to_fit(ab_font):
    image = Image.new("L", (100, 50), 0)
    text = image_to_text(image, make_asciifier(ab_font), max_cols=4, max_rows=4)
    assert (text.rows, text.cols) == (2, 4)
