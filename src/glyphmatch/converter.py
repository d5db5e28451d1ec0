import logging
from pathlib import Path

from PIL import Image

from glyphmatch.engine import Asciifier
from glyphmatch.surface import Surface, TextSurface

logger = logging.getLogger(__name__)

DEFAULT_COLS = 79
DEFAULT_ROWS = 49


def fit_output_size(
    image_width: int,
    image_height: int,
    cell_width: int,
    cell_height: int,
    max_cols: int,
    max_rows: int,
) -> tuple[int, int, int, int]:
    """Scale the image into the text area keeping its aspect ratio.

    Returns (pixel width, pixel height, columns, rows). Columns and rows are
    rounded up, so the last column or row may cover a partial cell.
    """
    hint_width = max_cols * cell_width
    hint_height = max_rows * cell_height
    if hint_width * image_height // image_width < hint_height:
        out_width = hint_width
        out_height = out_width * image_height // image_width
    else:
        out_height = hint_height
        out_width = out_height * image_width // image_height
    out_width = max(1, out_width)
    out_height = max(1, out_height)
    cols = -(-out_width // cell_width)
    rows = -(-out_height // cell_height)
    return out_width, out_height, cols, rows


def image_to_text(
    image: Image.Image | str | Path,
    asciifier: Asciifier,
    max_cols: int = DEFAULT_COLS,
    max_rows: int = DEFAULT_ROWS,
) -> TextSurface:
    if not isinstance(image, Image.Image):
        image = Image.open(image)

    context = asciifier.context
    out_width, out_height, cols, rows = fit_output_size(
        image.width, image.height, context.cell_width, context.cell_height, max_cols, max_rows
    )
    logger.info("Image %dx%d, output %dx%d pixels, %d columns x %d rows", image.width, image.height, out_width, out_height, cols, rows)

    gray = image.convert("L")
    if gray.size != (out_width, out_height):
        gray = gray.resize((out_width, out_height), Image.LANCZOS)

    text = TextSurface(rows, cols)
    asciifier.generate(Surface(gray), text)
    return text


def image_to_ascii(
    image: Image.Image | str | Path,
    asciifier: Asciifier,
    max_cols: int = DEFAULT_COLS,
    max_rows: int = DEFAULT_ROWS,
) -> str:
    return str(image_to_text(image, asciifier, max_cols, max_rows))
