from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from glyphmatch.glyph_set import GlyphSet


def measure_cell(font: ImageFont.FreeTypeFont) -> tuple[int, int]:
    """Cell size of a monospace font: advance width of "M" by ascent + descent."""
    ascent, descent = font.getmetrics()
    cell_width = max(1, round(font.getlength("M")))
    cell_height = max(1, ascent + descent)
    return cell_width, cell_height


def render_glyph(char: str, font: ImageFont.FreeTypeFont, cell_width: int, cell_height: int) -> np.ndarray:
    """Rasterise one character as bright ink on a black cell."""
    img = Image.new("L", (cell_width, cell_height), 0)
    draw = ImageDraw.Draw(img)
    draw.text((0, 0), char, fill=255, font=font)
    return np.asarray(img, dtype=np.uint8)


def build_glyph_set(font_path: str | Path, font_size: int, characters: str) -> GlyphSet:
    """Render every character of a monospace font into a fixed-size glyph set.

    Duplicate characters are dropped, keeping their first position, so the
    glyph order follows ``characters``.
    """
    font = ImageFont.truetype(str(font_path), font_size)
    cell_width, cell_height = measure_cell(font)

    char_list = list(dict.fromkeys(characters))
    bitmaps = np.zeros((len(char_list), cell_height, cell_width), dtype=np.uint8)
    for i, char in enumerate(char_list):
        bitmaps[i] = render_glyph(char, font, cell_width, cell_height)

    return GlyphSet(symbols=tuple(char_list), bitmaps=bitmaps, name=f"{Path(font_path).stem}:{font_size}")
