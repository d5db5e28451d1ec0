from collections.abc import Iterator

import numpy as np

from glyphmatch.engine import GlyphMatcher
from glyphmatch.surface import Surface, TextSurface


def region_of_interest(image: Surface, text: TextSurface, cell_width: int, cell_height: int) -> tuple[int, int]:
    """Part of the image covered by the text grid, as (width, height)."""
    return min(image.width, text.cols * cell_width), min(image.height, text.rows * cell_height)


def row_bands(image: Surface, text: TextSurface, cell_width: int, cell_height: int) -> Iterator[tuple[int, Surface]]:
    """Yield (text row, image band) pairs; the last band may be shorter than a cell."""
    roi_width, roi_height = region_of_interest(image, text, cell_width, cell_height)
    for row, y in enumerate(range(0, roi_height, cell_height)):
        yield row, image.window(0, y, roi_width, min(cell_height, roi_height - y))


def match_band(matcher: GlyphMatcher, band: Surface, output: np.ndarray, scratch: Surface) -> None:
    """Match the tiles of one band left to right, writing symbols into ``output``.

    ``scratch`` is a full cell; partial tiles are copied into it zero-padded.
    """
    cell_width, cell_height = scratch.width, scratch.height
    for col, x in enumerate(range(0, band.width, cell_width)):
        tile = band.window(x, 0, min(cell_width, band.width - x), band.height)
        if tile.width != cell_width or tile.height != cell_height:
            scratch.fill(0)
            scratch.paste(tile)
            tile = scratch
        output[col] = matcher.match(tile)
