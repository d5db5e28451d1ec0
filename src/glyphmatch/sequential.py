from __future__ import annotations

import numpy as np

from glyphmatch.engine import GlyphMatcherContext
from glyphmatch.surface import Surface, TextSurface
from glyphmatch.tiling import match_band, row_bands


class SequentialAsciifier:
    """Matches every tile on the calling thread with a single matcher."""

    def __init__(self, context: GlyphMatcherContext):
        self._context = context
        self._matcher = context.create_matcher()
        self._scratch = Surface.zeros(context.cell_width, context.cell_height, dtype=np.float64)

    @property
    def context(self) -> GlyphMatcherContext:
        return self._context

    @property
    def thread_count(self) -> int:
        return 1

    def generate(self, image: Surface, text: TextSurface) -> None:
        if not isinstance(image, Surface):
            image = Surface(image)
        cell_width, cell_height = self._context.cell_width, self._context.cell_height
        for row, band in row_bands(image, text, cell_width, cell_height):
            match_band(self._matcher, band, text.row(row), self._scratch)

    def close(self) -> None:
        pass

    def __enter__(self) -> SequentialAsciifier:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
