import argparse
import logging
import sys
from pathlib import Path

from glyphmatch.asciifier import create_asciifier
from glyphmatch.charsets import CHARSETS
from glyphmatch.config import Config
from glyphmatch.converter import image_to_text
from glyphmatch.errors import ConfigurationError
from glyphmatch.factory import GlyphMatcherContextFactory
from glyphmatch.glyph_atlas import build_glyph_set

logger = logging.getLogger(__name__)


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as text by matching cells against font glyphs")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-f", "--font", required=True, help="Monospace TrueType/OpenType font file")
    parser.add_argument(
        "--font-size", type=int, default=config.font_size, help=f"Font size in pixels (default: {config.font_size})"
    )
    parser.add_argument(
        "--charset",
        default=config.charset,
        choices=sorted(CHARSETS),
        help=f"Characters to match against (default: {config.charset})",
    )
    parser.add_argument(
        "-c", "--cols", type=int, default=config.cols, help=f"Suggested number of text columns (default: {config.cols})"
    )
    parser.add_argument(
        "-r", "--rows", type=int, default=config.rows, help=f"Suggested number of text rows (default: {config.rows})"
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default=config.algorithm,
        help="Glyph matching algorithm with options, e.g. sed, md, mi:bins=16, pca:nf=10:cache=FILE "
        f"(default: {config.algorithm})",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=config.threads,
        help="Worker thread count; 1 runs sequentially, 0 uses CPU count + 1 (default: %(default)s)",
    )
    parser.add_argument("-o", "--output", default=None, help="Output text file (default: stdout)")
    parser.add_argument("--config", default=None, help="Configuration file (default: ~/.config/glyphmatch/config.ini)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug output)")
    return parser


def _config_path(argv: list[str]) -> str | None:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=None)
    known, _ = pre.parse_known_args(argv)
    return known.config


def main(argv: list[str] | None = None):
    if argv is None:
        argv = sys.argv[1:]
    config = Config(_config_path(argv))
    args = build_parser(config).parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)
    font_path = Path(args.font)
    if not font_path.exists():
        print(f"Font not found: {font_path}", file=sys.stderr)
        sys.exit(1)
    if args.threads < 0:
        print(f"Invalid thread count: {args.threads}", file=sys.stderr)
        sys.exit(1)

    logger.info("Loading font %s", font_path)
    font = build_glyph_set(font_path, args.font_size, CHARSETS[args.charset])

    try:
        context = GlyphMatcherContextFactory().create(font, args.algorithm)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    with create_asciifier(context, args.threads) as asciifier:
        logger.info("Using %d thread(s)", asciifier.thread_count)
        text = image_to_text(image_path, asciifier, max_cols=args.cols, max_rows=args.rows)

    if args.output is None:
        print(text)
    else:
        Path(args.output).write_text(str(text) + "\n", encoding="utf-8")


if __name__ == "__main__":
    main()
