from glyphmatch.engine import Asciifier, GlyphMatcherContext
from glyphmatch.parallel import ParallelAsciifier
from glyphmatch.sequential import SequentialAsciifier


def create_asciifier(context: GlyphMatcherContext, threads: int = 0) -> Asciifier:
    """Sequential engine for ``threads == 1``, otherwise a worker pool (0 picks the size)."""
    if threads == 1:
        return SequentialAsciifier(context)
    return ParallelAsciifier(context, threads)
