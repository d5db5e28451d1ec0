"""Runtime bridge over the concrete matcher implementations.

The tiling engines hold one ``DynamicGlyphMatcherContext`` whatever algorithm
was chosen; each call is forwarded once to the wrapped implementation, whose
own hot loop stays specific to its algorithm.
"""

from __future__ import annotations

from glyphmatch.engine import GlyphMatcher, GlyphMatcherContext
from glyphmatch.glyph_set import GlyphSet
from glyphmatch.surface import Surface


class DynamicGlyphMatcherContext:
    def __init__(self, impl: GlyphMatcherContext):
        self._impl = impl

    @property
    def impl(self) -> GlyphMatcherContext:
        return self._impl

    @property
    def font(self) -> GlyphSet:
        return self._impl.font

    @property
    def cell_width(self) -> int:
        return self._impl.cell_width

    @property
    def cell_height(self) -> int:
        return self._impl.cell_height

    def match(self, tile: Surface) -> str:
        return self._impl.match(tile)

    def create_matcher(self) -> DynamicGlyphMatcher:
        return DynamicGlyphMatcher(self, self._impl.create_matcher())

    def __repr__(self) -> str:
        return f"DynamicGlyphMatcherContext({type(self._impl).__name__})"


class DynamicGlyphMatcher:
    def __init__(self, context: DynamicGlyphMatcherContext, impl: GlyphMatcher):
        self._context = context
        self._impl = impl

    @property
    def context(self) -> DynamicGlyphMatcherContext:
        return self._context

    def match(self, tile: Surface) -> str:
        return self._impl.match(tile)
