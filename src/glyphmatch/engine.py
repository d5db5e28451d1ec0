from __future__ import annotations

from typing import Protocol

from glyphmatch.glyph_set import GlyphSet
from glyphmatch.surface import Surface, TextSurface


class GlyphMatcher(Protocol):
    def match(self, tile: Surface) -> str:
        """Return the symbol of the glyph most similar to ``tile``."""
        ...


class GlyphMatcherContext(Protocol):
    @property
    def font(self) -> GlyphSet: ...

    @property
    def cell_width(self) -> int: ...

    @property
    def cell_height(self) -> int: ...

    def match(self, tile: Surface) -> str: ...

    def create_matcher(self) -> GlyphMatcher:
        """Build a matcher owning its own scratch buffers. Safe to call from any thread."""
        ...


class Asciifier(Protocol):
    @property
    def context(self) -> GlyphMatcherContext: ...

    @property
    def thread_count(self) -> int: ...

    def generate(self, image: Surface, text: TextSurface) -> None:
        """Fill ``text`` with the symbols matching the cells of ``image``."""
        ...

    def close(self) -> None: ...

    def __enter__(self) -> Asciifier: ...

    def __exit__(self, *exc_info) -> None: ...
