from __future__ import annotations

import numpy as np

from glyphmatch.glyph_set import GlyphSet
from glyphmatch.matching import load_tile
from glyphmatch.surface import Surface

DEFAULT_BINS = 16


def quantize(pixels: np.ndarray, bins: int) -> np.ndarray:
    """Map 8-bit intensities to histogram bucket indices in [0, bins)."""
    buckets = np.floor(pixels * (bins / 256.0)).astype(np.intp)
    return np.clip(buckets, 0, bins - 1)


class MutualInformationGlyphMatcherContext:
    """Picks the glyph sharing the most information with the tile.

    Each glyph's pixels are bucketed once. At match time only the occupied
    (tile bucket, glyph bucket) pairs are counted, at most one per pixel and
    glyph, so the histogram size does not drive the cost.
    """

    def __init__(self, font: GlyphSet, bins: int = DEFAULT_BINS):
        if bins < 1:
            raise ValueError(f"Histogram needs at least one bin, got {bins}")
        self._font = font
        self.bins = bins

        glyph_buckets = quantize(font.vectors(), bins)
        count = len(font)
        # Flat index of (glyph, tile bucket 0, glyph bucket) in a (count, bins, bins) histogram
        self.joint_base = glyph_buckets + (np.arange(count, dtype=np.intp) * bins * bins)[:, None]
        self.joint_base.flags.writeable = False

        glyph_counts = np.stack([np.bincount(row, minlength=bins) for row in glyph_buckets])
        self.glyph_marginals = glyph_counts / font.glyph_size
        self.glyph_marginals.flags.writeable = False

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

    def create_matcher(self) -> MutualInformationGlyphMatcher:
        return MutualInformationGlyphMatcher(self)


class MutualInformationGlyphMatcher:
    def __init__(self, context: MutualInformationGlyphMatcherContext):
        self.context = context
        self._cell = np.zeros((context.cell_height, context.cell_width), dtype=np.float64)
        self._joint_index = np.empty_like(context.joint_base)

    def information(self, tile: Surface) -> np.ndarray:
        """Mutual information between ``tile`` and every glyph, in nats."""
        ctx = self.context
        bins = ctx.bins
        count = len(ctx.font)
        pixels = ctx.font.glyph_size

        tile_buckets = quantize(load_tile(tile, self._cell).reshape(-1), bins)
        np.add(ctx.joint_base, tile_buckets * bins, out=self._joint_index)
        # Only occupied cells of the joint histograms contribute
        occupied, counts = np.unique(self._joint_index, return_counts=True)
        glyph, cell = np.divmod(occupied, bins * bins)
        tile_bucket, glyph_bucket = np.divmod(cell, bins)

        joint = counts / pixels
        tile_marginal = np.bincount(tile_buckets, minlength=bins) / pixels
        independent = tile_marginal[tile_bucket] * ctx.glyph_marginals[glyph, glyph_bucket]
        terms = joint * np.log(joint / independent)
        return np.bincount(glyph, weights=terms, minlength=count)

    def match(self, tile: Surface) -> str:
        # argmax keeps the first of equal maxima
        return self.context.font.get_symbol(int(np.argmax(self.information(tile))))
