import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "pca"


def parse_options(text: str) -> tuple[str, dict[str, str]]:
    """Split ``<algorithm>[:key=value]*`` into the algorithm name and its options.

    Empty segments are skipped, an empty string selects the default algorithm
    and a key without ``=`` gets an empty value.
    """
    tokens = [token for token in text.split(":") if token]
    if not tokens:
        return DEFAULT_ALGORITHM, {}
    options: dict[str, str] = {}
    for token in tokens[1:]:
        key, _, value = token.partition("=")
        options[key] = value
    return tokens[0], options


def positive_int_option(options: Mapping[str, str], key: str, default: int) -> int:
    """Read a positive integer option, falling back to ``default`` if absent or malformed."""
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning("Invalid value %r for option %r, using default %d", raw, key, default)
        return default
    return value
