class GlyphMatchError(Exception):
    """Base class for errors raised by glyphmatch."""


class ConfigurationError(GlyphMatchError, ValueError):
    """The requested matcher configuration cannot be built."""


class UnsupportedAlgorithmError(ConfigurationError):
    def __init__(self, name: str):
        super().__init__(f"Unsupported algorithm: {name!r}")
        self.name = name
