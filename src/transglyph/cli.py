"""
Command-line interface for transglyph.

Provides CLI commands for trying the shaper outside a host application:
- translate: Run the text stage and print the translated text
- shape: Shape text against a font and print glyph ids, clusters and advances
- config: Print the resolved configuration

Usage:
    transglyph translate "Hello. World!" [--clusters]
    transglyph shape "Hello. World!" --font path/to/font.ttf
    transglyph config

Environment Variables:
    TRANSGLYPH_WEIGHTS: Model weights path or URL
    TRANSGLYPH_TOKENIZER: tokenizer.json path or URL
    TRANSGLYPH_MODEL_CONFIG: Model config.json path or URL
    TRANSGLYPH_LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import sys

from transglyph.config import LoggingSettings, config, print_config_summary
from transglyph.errors import ModelLoadError

_LOG_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}


def configure_logging(settings: LoggingSettings) -> None:
    """Configure the root logger from the logging settings."""
    logging.basicConfig(
        level=getattr(logging, settings.level, logging.INFO),
        format=_LOG_FORMATS.get(settings.format, _LOG_FORMATS["detailed"]),
    )


def cmd_translate(args: argparse.Namespace) -> int:
    """
    Translate text and print the result.

    Returns:
        0 on success, 1 if the model could not be loaded
    """
    from transglyph.shaping.shaper import ShapingContext

    context = ShapingContext(config)
    try:
        pairs = context.translate_text(args.text)
    except ModelLoadError as e:
        print(f"Error loading model: {e}", file=sys.stderr)
        return 1

    print("".join(char for char, _ in pairs))
    if args.clusters:
        for char, cluster in pairs:
            print(f"{cluster:>4}  {char!r}")
    return 0


def cmd_shape(args: argparse.Namespace) -> int:
    """
    Shape text against a font file and print the glyph records.

    Returns:
        0 on success, 1 on error
    """
    from transglyph.shaping.buffer import GlyphBuffer
    from transglyph.shaping.host import HarfBuzzFontHost
    from transglyph.shaping.shaper import SHAPE_SUCCESS, ShapingContext

    try:
        font = HarfBuzzFontHost.from_path(args.font)
    except Exception as e:
        print(f"Error opening font {args.font}: {e}", file=sys.stderr)
        return 1

    buffer = GlyphBuffer.from_text(args.text)
    context = ShapingContext(config)
    if context.shape(None, font, buffer) != SHAPE_SUCCESS:
        print("Error: shaping failed (model could not be loaded).", file=sys.stderr)
        return 1

    print(f"{'glyph':>6} {'cluster':>7} {'advance':>7}")
    for glyph in buffer.glyphs:
        print(f"{glyph.codepoint:>6} {glyph.cluster:>7} {glyph.x_advance:>7}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    print_config_summary()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="transglyph",
        description="transglyph - translate text on its way to the glyph buffer",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate text and print the result",
        description=(
            "Run numeric detection, sentence segmentation and translation on TEXT. "
            "An unfinished trailing sentence is left untranslated."
        ),
    )
    translate_parser.add_argument("text", help="Text to translate")
    translate_parser.add_argument(
        "--clusters",
        action="store_true",
        help="Also print every output character with its cluster index",
    )
    translate_parser.set_defaults(func=cmd_translate)

    # shape command
    shape_parser = subparsers.add_parser(
        "shape",
        help="Shape text against a font",
        description="Translate TEXT, then map it to glyph ids and advances from FONT.",
    )
    shape_parser.add_argument("text", help="Text to shape")
    shape_parser.add_argument("--font", "-f", required=True, help="Path to a font file")
    shape_parser.set_defaults(func=cmd_shape)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Print the resolved configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(config.logging)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
