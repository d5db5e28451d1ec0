from __future__ import annotations

import numpy as np

from glyphmatch.glyph_set import GlyphSet
from glyphmatch.surface import Surface


def load_tile(tile, scratch: np.ndarray) -> np.ndarray:
    """Copy ``tile`` into the zero-filled ``scratch`` cell and return it.

    Tiles smaller than the cell end up zero-padded on the right and bottom.
    """
    arr = np.asarray(tile)
    if arr.ndim != 2:
        raise ValueError(f"Tile must be 2-D, got {arr.ndim} dimensions")
    height, width = arr.shape
    if width > scratch.shape[1] or height > scratch.shape[0]:
        raise ValueError(f"Tile {width}x{height} is larger than the {scratch.shape[1]}x{scratch.shape[0]} cell")
    if arr.shape == scratch.shape:
        scratch[...] = arr
    else:
        scratch.fill(0.0)
        scratch[:height, :width] = arr
    return scratch


class SquaredEuclideanDistance:
    """Sum of squared pixel differences between tile and glyph."""

    def __init__(self, font: GlyphSet):
        self.vectors = font.vectors()
        self.vectors.flags.writeable = False

    def create_scratch(self) -> np.ndarray:
        return np.empty_like(self.vectors)

    def __call__(self, tile: np.ndarray, scratch: np.ndarray, out: np.ndarray) -> np.ndarray:
        np.subtract(self.vectors, tile, out=scratch)
        np.multiply(scratch, scratch, out=scratch)
        return np.sum(scratch, axis=1, out=out)


class MeansDistance:
    """Squared difference between the mean intensities of tile and glyph."""

    def __init__(self, font: GlyphSet):
        self.means = font.vectors().mean(axis=1)
        self.means.flags.writeable = False

    def create_scratch(self) -> None:
        return None

    def __call__(self, tile: np.ndarray, scratch: None, out: np.ndarray) -> np.ndarray:
        np.subtract(self.means, tile.mean(), out=out)
        return np.multiply(out, out, out=out)


class PolicyBasedGlyphMatcherContext:
    """Linear scan over all glyphs with a pluggable distance policy.

    ``policy`` is a class taking the glyph set; the instance it builds holds
    the per-glyph data and is only read afterwards.
    """

    def __init__(self, font: GlyphSet, policy):
        self._font = font
        self.policy = policy(font)

    @property
    def font(self) -> GlyphSet:
        return self._font

    @property
    def cell_width(self) -> int:
        return self._font.glyph_width

    @property
    def cell_height(self) -> int:
        return self._font.glyph_height

    def match(self, tile: Surface) -> str:
        return self.create_matcher().match(tile)

    def create_matcher(self) -> PolicyBasedGlyphMatcher:
        return PolicyBasedGlyphMatcher(self)


class PolicyBasedGlyphMatcher:
    def __init__(self, context: PolicyBasedGlyphMatcherContext):
        self.context = context
        self._cell = np.zeros((context.cell_height, context.cell_width), dtype=np.float64)
        self._scratch = context.policy.create_scratch()
        self._distances = np.empty(len(context.font), dtype=np.float64)

    def match(self, tile: Surface) -> str:
        cell = load_tile(tile, self._cell)
        distances = self.context.policy(cell.reshape(-1), self._scratch, self._distances)
        # argmin keeps the first of equal minima
        return self.context.font.get_symbol(int(np.argmin(distances)))
