from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from glyphmatch.surface import Surface


@dataclass(frozen=True, eq=False)
class GlyphSet:
    """Ordered glyph bitmaps of one font at one cell size.

    ``bitmaps`` has shape (count, glyph_height, glyph_width). Iteration order
    is the order of ``symbols`` and decides ties in every matcher.
    """

    symbols: tuple[str, ...]
    bitmaps: np.ndarray
    name: str = ""
    _index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self):
        symbols = tuple(self.symbols)
        bitmaps = np.array(self.bitmaps, copy=True)
        if bitmaps.ndim != 3:
            raise ValueError(f"Glyph bitmaps must have shape (count, height, width), got {bitmaps.shape}")
        if len(symbols) != bitmaps.shape[0]:
            raise ValueError(f"{len(symbols)} symbols for {bitmaps.shape[0]} bitmaps")
        if not symbols:
            raise ValueError("Glyph set is empty")
        if bitmaps.shape[1] == 0 or bitmaps.shape[2] == 0:
            raise ValueError("Glyph cell size must be positive")
        index = {}
        for i, symbol in enumerate(symbols):
            if len(symbol) != 1:
                raise ValueError(f"Symbol must be a single character, got {symbol!r}")
            if symbol in index:
                raise ValueError(f"Duplicate symbol {symbol!r}")
            index[symbol] = i
        bitmaps.flags.writeable = False
        object.__setattr__(self, "symbols", symbols)
        object.__setattr__(self, "bitmaps", bitmaps)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_bitmaps(cls, glyphs: dict[str, np.ndarray] | Sequence[tuple[str, np.ndarray]], name: str = "") -> GlyphSet:
        items = list(glyphs.items()) if isinstance(glyphs, dict) else list(glyphs)
        if not items:
            raise ValueError("Glyph set is empty")
        symbols = tuple(symbol for symbol, _ in items)
        bitmaps = np.stack([np.asarray(bitmap) for _, bitmap in items])
        return cls(symbols=symbols, bitmaps=bitmaps, name=name)

    @property
    def glyph_width(self) -> int:
        return self.bitmaps.shape[2]

    @property
    def glyph_height(self) -> int:
        return self.bitmaps.shape[1]

    @property
    def glyph_size(self) -> int:
        """Pixel count of one cell."""
        return self.glyph_width * self.glyph_height

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._index

    def charcodes(self) -> list[str]:
        return list(self.symbols)

    def index(self, symbol: str) -> int:
        return self._index[symbol]

    def get_symbol(self, index: int) -> str:
        return self.symbols[index]

    def get_glyph(self, symbol: str) -> Surface:
        return Surface(self.bitmaps[self._index[symbol]])

    def vectors(self) -> np.ndarray:
        """Flattened glyphs as float64 rows, shape (count, glyph_size)."""
        return self.bitmaps.reshape(len(self), -1).astype(np.float64)
