import shutil
import subprocess

import numpy as np
import pytest

from glyphmatch.glyph_set import GlyphSet

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if shutil.os.path.exists(path):
            return path
    result = shutil.which("fc-match")
    if result:
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")

ALGORITHMS = ["sed", "md", "mi", "pca"]


def letter_a():
    glyph = np.zeros((8, 8), dtype=np.uint8)
    glyph[1, 3:5] = 255
    glyph[2:7, 2] = 255
    glyph[2:7, 5] = 255
    glyph[4, 2:6] = 255
    return glyph


def letter_b():
    glyph = np.zeros((8, 8), dtype=np.uint8)
    glyph[1:7, 1] = 255
    glyph[1, 1:5] = 255
    glyph[4, 1:5] = 255
    glyph[6, 1:5] = 255
    glyph[2:4, 5] = 255
    glyph[5, 5] = 255
    return glyph


def make_pattern_font(count=8, width=8, height=8, seed=7):
    """Distinct random-looking glyphs with a blank first glyph."""
    rng = np.random.default_rng(seed)
    bitmaps = (rng.random((count, height, width)) > 0.5).astype(np.uint8) * 255
    bitmaps[0] = 0
    symbols = tuple(" #@%&*+=-:.ox"[:count])
    return GlyphSet(symbols=symbols, bitmaps=bitmaps, name="pattern")


@pytest.fixture
def ab_font():
    return GlyphSet.from_bitmaps({"A": letter_a(), "B": letter_b()}, name="ab")


@pytest.fixture
def pattern_font():
    return make_pattern_font()


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(53, 61), dtype=np.uint8)
