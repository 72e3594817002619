"""CLI tool for converting images to ZPL ^GFA commands."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from zplify.config import AppConfig, load_config
from zplify.converters import image_to_zpl
from zplify.errors import ConversionError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an image to a ZPL ^GFA graphic command.",
        prog="zplify-convert",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to the source image",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--compress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use ZPL hex-ASCII run-length compression",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        metavar="PERCENT",
        help="Blackness threshold percentage (100 or more prints every pixel black)",
    )
    parser.add_argument(
        "--header-footer",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap the graphic in ^XA/^XZ so it prints as a standalone label",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file with conversion defaults",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for zplify-convert CLI."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.threshold is not None and args.threshold < 0:
        print(f"Error: Threshold must not be negative, got {args.threshold}", file=sys.stderr)
        return 1

    # Load defaults
    if args.config is not None and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    try:
        config = load_config(args.config) if args.config else AppConfig()
    except (yaml.YAMLError, ValidationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    overrides: dict = {}
    if args.compress is not None:
        overrides["compress"] = args.compress
    if args.threshold is not None:
        overrides["blackness_percentage"] = args.threshold
    conversion = config.conversion.model_copy(update=overrides)
    add_header_footer = config.add_header_footer if args.header_footer is None else args.header_footer

    # Check image exists
    if not args.image.exists():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    try:
        with Image.open(args.image) as image:
            zpl = image_to_zpl(image, conversion, add_header_footer=add_header_footer)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        print(f"Error reading image: {e}", file=sys.stderr)
        return 1
    except ConversionError as e:
        print(f"Error converting image: {e}", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(zpl)
        return 0

    try:
        args.output.write_text(zpl, encoding="ascii")
        print(f"Converted to {args.output}", file=sys.stderr)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
