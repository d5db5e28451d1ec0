from __future__ import annotations

import numpy as np


class Surface:
    """Non-owning 2-D view over a pixel buffer.

    Wraps a 2-D numpy array (or anything ``np.asarray`` accepts) without
    copying it. ``window`` slices a sub-view that shares the parent's memory.
    """

    __slots__ = ("data",)

    def __init__(self, data):
        arr = np.asarray(data)
        if arr.ndim != 2:
            raise ValueError(f"Surface needs a 2-D buffer, got {arr.ndim} dimensions")
        self.data = arr

    @classmethod
    def zeros(cls, width: int, height: int, dtype=np.uint8) -> Surface:
        return cls(np.zeros((height, width), dtype=dtype))

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def stride(self) -> int:
        """Distance between the starts of two rows, in bytes."""
        return self.data.strides[0]

    @property
    def itemsize(self) -> int:
        return self.data.itemsize

    def window(self, x: int, y: int, width: int, height: int) -> Surface:
        if x < 0 or y < 0 or width < 0 or height < 0 or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"Window ({x}, {y}, {width}, {height}) exceeds surface of size {self.width}x{self.height}"
            )
        return Surface(self.data[y : y + height, x : x + width])

    def fill(self, value) -> None:
        self.data[...] = value

    def paste(self, source: Surface) -> None:
        """Copy ``source`` into the top-left corner of this surface."""
        if source.width > self.width or source.height > self.height:
            raise ValueError(f"Cannot paste {source.width}x{source.height} into {self.width}x{self.height}")
        self.data[: source.height, : source.width] = source.data

    def __array__(self, dtype=None, copy=None):
        if copy is False and dtype is not None and np.dtype(dtype) != self.data.dtype:
            raise ValueError(f"Cannot view {self.data.dtype} surface as {np.dtype(dtype)} without copying")
        if copy:
            return np.array(self.data, dtype=dtype)
        return np.asarray(self.data, dtype=dtype)

    def __repr__(self) -> str:
        return f"Surface({self.width}x{self.height}, dtype={self.data.dtype})"


class TextSurface:
    """Row-major grid of symbols, the output of an asciifier."""

    def __init__(self, rows: int, cols: int, fill: str = " "):
        if rows < 0 or cols < 0:
            raise ValueError(f"Invalid text surface size {rows}x{cols}")
        if len(fill) != 1:
            raise ValueError(f"Fill must be a single character, got {fill!r}")
        self.data = np.full((rows, cols), fill, dtype="<U1")

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    def row(self, r: int) -> np.ndarray:
        """Writable view of one row; writes go straight into the grid."""
        return self.data[r]

    def __getitem__(self, index: tuple[int, int]) -> str:
        return str(self.data[index])

    def __setitem__(self, index: tuple[int, int], symbol: str) -> None:
        self.data[index] = symbol

    def lines(self) -> list[str]:
        return ["".join(row) for row in self.data.tolist()]

    def __str__(self) -> str:
        return "\n".join(self.lines())

    def __eq__(self, other) -> bool:
        if not isinstance(other, TextSurface):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(np.array_equal(self.data, other.data))

    __hash__ = None
