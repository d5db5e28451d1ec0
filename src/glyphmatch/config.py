"""INI configuration for the glyphmatch command line.

The file is optional and never created automatically. Everything lives in a
single ``[glyphmatch]`` section, for example::

    [glyphmatch]
    algorithm = mi:bins=32
    threads = 4
    cols = 120
"""

import configparser
import logging
import os
from pathlib import Path

from glyphmatch.converter import DEFAULT_COLS, DEFAULT_ROWS
from glyphmatch.options import DEFAULT_ALGORITHM

logger = logging.getLogger(__name__)

SECTION = "glyphmatch"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULTS = {
    "algorithm": DEFAULT_ALGORITHM,
    "threads": "0",
    "cols": str(DEFAULT_COLS),
    "rows": str(DEFAULT_ROWS),
    "font_size": "16",
    "charset": "ascii",
}


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "glyphmatch" / DEFAULT_CONFIG_FILENAME


class Config:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else default_config_path()
        self.parser = configparser.ConfigParser()
        self.parser.read_dict({SECTION: DEFAULTS})
        if self.path.is_file():
            self.parser.read(self.path, encoding="utf-8")
            logger.info("Loaded configuration from %s", self.path)

    def _getint(self, key: str, minimum: int) -> int:
        default = int(DEFAULTS[key])
        try:
            value = self.parser.getint(SECTION, key)
        except ValueError:
            value = minimum - 1
        if value < minimum:
            logger.warning("Invalid %s in %s: %r, using %d", key, self.path, self.parser.get(SECTION, key), default)
            return default
        return value

    @property
    def algorithm(self) -> str:
        return self.parser.get(SECTION, "algorithm")

    @property
    def threads(self) -> int:
        """Worker threads; 0 sizes the pool from the CPU count."""
        return self._getint("threads", 0)

    @property
    def cols(self) -> int:
        return self._getint("cols", 1)

    @property
    def rows(self) -> int:
        return self._getint("rows", 1)

    @property
    def font_size(self) -> int:
        return self._getint("font_size", 1)

    @property
    def charset(self) -> str:
        return self.parser.get(SECTION, "charset")
