from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from glyphmatch.dynamic import DynamicGlyphMatcherContext
from glyphmatch.engine import GlyphMatcherContext
from glyphmatch.errors import UnsupportedAlgorithmError
from glyphmatch.glyph_set import GlyphSet
from glyphmatch.matching import MeansDistance, PolicyBasedGlyphMatcherContext, SquaredEuclideanDistance
from glyphmatch.mutual_information import DEFAULT_BINS, MutualInformationGlyphMatcherContext
from glyphmatch.options import parse_options, positive_int_option
from glyphmatch.pca import DEFAULT_FEATURES, FontPCA, FontPCAnalyzer, PcaGlyphMatcherContext

logger = logging.getLogger(__name__)

ContextConstructor = Callable[[GlyphSet, Mapping[str, str]], GlyphMatcherContext]


def create_sed_context(font: GlyphSet, options: Mapping[str, str]) -> GlyphMatcherContext:
    return PolicyBasedGlyphMatcherContext(font, SquaredEuclideanDistance)


def create_md_context(font: GlyphSet, options: Mapping[str, str]) -> GlyphMatcherContext:
    return PolicyBasedGlyphMatcherContext(font, MeansDistance)


def create_mi_context(font: GlyphSet, options: Mapping[str, str]) -> GlyphMatcherContext:
    bins = positive_int_option(options, "bins", DEFAULT_BINS)
    return MutualInformationGlyphMatcherContext(font, bins)


def create_pca_context(font: GlyphSet, options: Mapping[str, str]) -> GlyphMatcherContext:
    feature_count = positive_int_option(options, "nf", DEFAULT_FEATURES)
    analyzer = FontPCAnalyzer(font)
    if options.get("cache"):
        analyzer.load_or_analyze(options["cache"])
    else:
        analyzer.analyze()
    if options.get("makecache"):
        analyzer.save_to_cache(options["makecache"])
    return PcaGlyphMatcherContext(FontPCA(analyzer, feature_count))


def default_algorithms() -> dict[str, ContextConstructor]:
    return {
        "sed": create_sed_context,
        "md": create_md_context,
        "mi": create_mi_context,
        "pca": create_pca_context,
    }


class GlyphMatcherContextFactory:
    """Builds matcher contexts from ``<algorithm>[:key=value]*`` option strings."""

    def __init__(self, algorithms: Mapping[str, ContextConstructor] | None = None):
        self._algorithms = dict(default_algorithms() if algorithms is None else algorithms)

    @property
    def algorithms(self) -> list[str]:
        return sorted(self._algorithms)

    def create(self, font: GlyphSet, options: str = "") -> DynamicGlyphMatcherContext:
        name, parsed = parse_options(options)
        constructor = self._algorithms.get(name)
        if constructor is None:
            raise UnsupportedAlgorithmError(name)
        logger.info("Building %r matcher context for %d glyphs of %dx%d", name, len(font), font.glyph_width, font.glyph_height)
        return DynamicGlyphMatcherContext(constructor(font, parsed))
