from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import numpy as np

from glyphmatch.glyph_set import GlyphSet
from glyphmatch.matching import load_tile
from glyphmatch.surface import Surface

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = 10

# Errors that make a cache file unusable rather than the program broken
CACHE_ERRORS = (OSError, EOFError, ValueError, KeyError, zipfile.BadZipFile)


class FontPCAnalyzer:
    """Principal components of a glyph set.

    Holds the mean glyph and the full eigen-decomposition of the glyph
    covariance, eigenvalues in descending order with the matching
    eigenvectors as columns. This is the expensive part and can be cached.
    """

    def __init__(self, font: GlyphSet):
        self.font = font
        self.mean: np.ndarray | None = None
        self.eigenvalues: np.ndarray | None = None
        self.eigenvectors: np.ndarray | None = None

    @property
    def ready(self) -> bool:
        return self.eigenvectors is not None

    def analyze(self) -> None:
        data = self.font.vectors()
        mean = data.mean(axis=0)
        centered = data - mean
        covariance = centered.T @ centered / len(data)
        values, vectors = np.linalg.eigh(covariance)
        # eigh sorts ascending
        self.mean = mean
        self.eigenvalues = np.ascontiguousarray(values[::-1])
        self.eigenvectors = np.ascontiguousarray(vectors[:, ::-1])
        logger.info("Analyzed %d glyphs of %d pixels", len(data), data.shape[1])

    def save_to_cache(self, path: str | Path) -> None:
        if not self.ready:
            raise RuntimeError("Nothing to cache: glyph set not analyzed yet")
        with Path(path).open("wb") as f:
            np.savez(
                f,
                mean=self.mean,
                eigenvalues=self.eigenvalues,
                eigenvectors=self.eigenvectors,
                cell_size=np.array([self.font.glyph_width, self.font.glyph_height]),
            )
        logger.info("Saved PCA cache to %s", path)

    def load_from_cache(self, path: str | Path) -> None:
        """Load a cached analysis. Raises one of ``CACHE_ERRORS`` if the file is unusable."""
        data = np.load(Path(path))
        if not hasattr(data, "files"):
            raise ValueError(f"Not a PCA cache archive: {path}")
        with data:
            mean = data["mean"]
            eigenvalues = data["eigenvalues"]
            eigenvectors = data["eigenvectors"]
            cell_size = tuple(int(v) for v in data["cell_size"])

        size = self.font.glyph_size
        if cell_size != (self.font.glyph_width, self.font.glyph_height):
            raise ValueError(f"Cache is for {cell_size[0]}x{cell_size[1]} cells")
        if mean.shape != (size,) or eigenvalues.shape != (size,) or eigenvectors.shape != (size, size):
            raise ValueError("Cache arrays do not match the glyph set")
        self.mean = mean.astype(np.float64)
        self.eigenvalues = eigenvalues.astype(np.float64)
        self.eigenvectors = np.ascontiguousarray(eigenvectors, dtype=np.float64)

    def load_or_analyze(self, path: str | Path) -> None:
        try:
            self.load_from_cache(path)
        except CACHE_ERRORS as e:
            logger.warning("Cannot use PCA cache %s (%s), recomputing", path, e)
            self.analyze()
        else:
            logger.info("Loaded PCA cache from %s", path)


class FontPCA:
    """Glyph set projected onto its leading principal components."""

    def __init__(self, analyzer: FontPCAnalyzer, feature_count: int = DEFAULT_FEATURES):
        if not analyzer.ready:
            analyzer.analyze()
        size = analyzer.font.glyph_size
        if feature_count < 1:
            raise ValueError(f"Feature count must be positive, got {feature_count}")
        if feature_count > size:
            logger.warning("Feature count %d exceeds cell pixel count, using %d", feature_count, size)
            feature_count = size

        self.font = analyzer.font
        self.mean = analyzer.mean
        self.basis = np.ascontiguousarray(analyzer.eigenvectors[:, :feature_count])
        self.basis.flags.writeable = False

        # Glyphs go through the same projection as tiles so an exact copy of
        # a glyph lands exactly on its stored coordinates.
        work = np.empty(size, dtype=np.float64)
        vectors = self.font.vectors()
        self.glyph_components = np.empty((len(vectors), feature_count), dtype=np.float64)
        for i, vector in enumerate(vectors):
            self.project(vector, work, self.glyph_components[i])
        self.glyph_components.flags.writeable = False

    @property
    def feature_count(self) -> int:
        return self.basis.shape[1]

    def project(self, vector: np.ndarray, work: np.ndarray, out: np.ndarray) -> np.ndarray:
        np.subtract(vector, self.mean, out=work)
        return np.dot(work, self.basis, out=out)

    def distances(self, components: np.ndarray) -> np.ndarray:
        diff = self.glyph_components - components
        return np.einsum("ij,ij->i", diff, diff)

    def find_closest_glyph(self, components: np.ndarray) -> int:
        # argmin keeps the first of equal minima
        return int(np.argmin(self.distances(components)))


class PcaGlyphMatcherContext:
    def __init__(self, pca: FontPCA):
        self.pca = pca

    @property
    def font(self) -> GlyphSet:
        return self.pca.font

    @property
    def cell_width(self) -> int:
        return self.pca.font.glyph_width

    @property
    def cell_height(self) -> int:
        return self.pca.font.glyph_height

    def match(self, tile: Surface) -> str:
        return self.create_matcher().match(tile)

    def create_matcher(self) -> PcaGlyphMatcher:
        return PcaGlyphMatcher(self)


class PcaGlyphMatcher:
    def __init__(self, context: PcaGlyphMatcherContext):
        self.context = context
        self._cell = np.zeros((context.cell_height, context.cell_width), dtype=np.float64)
        self._work = np.empty(context.font.glyph_size, dtype=np.float64)
        self._components = np.empty(context.pca.feature_count, dtype=np.float64)

    def match(self, tile: Surface) -> str:
        pca = self.context.pca
        cell = load_tile(tile, self._cell)
        pca.project(cell.reshape(-1), self._work, self._components)
        return pca.font.get_symbol(pca.find_closest_glyph(self._components))
