"""CLI tool for converting images to ZPL."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from PIL import Image
from pydantic import ValidationError

from zplgfa.config import ConversionDefaults, Settings, load_config
from zplgfa.encoding import apply_edits, convert_image
from zplgfa.errors import ConversionError
from zplgfa.models.graphic import GraphicConfig, GraphicType


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an image to a ZPL Graphic Field (^GF) command.",
        prog="zplgfa",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to the image file",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="graphic_type",
        default=None,
        help="Graphic type: ascii, binary or compressedascii (default: compressedascii)",
    )
    parser.add_argument(
        "-s",
        "--scale",
        type=float,
        default=None,
        help="Scale factor; without --max-width/--max-height the canvas grows with it (default: 1.0)",
    )
    parser.add_argument(
        "-d",
        "--darkness",
        type=float,
        default=None,
        help="Darkness 0.0-1.0 applied while flattening (default: 0.1)",
    )
    parser.add_argument("--max-width", type=int, default=None, help="Maximum width in dots")
    parser.add_argument("--max-height", type=int, default=None, help="Maximum height in dots")
    parser.add_argument(
        "-e",
        "--edit",
        action="append",
        default=[],
        dest="edits",
        metavar="EDIT[,EDIT...]",
        help="Image edit: invert, monochrome, blur, contrast, flip, mirror (can be specified multiple times)",
    )
    parser.add_argument(
        "--field-only",
        action="store_true",
        help="Output only the ^GF field without ^XA/^XZ label framing",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML file with conversion defaults (default: $ZPLGFA_CONFIG_FILE or zplgfa.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _merge_options(args: argparse.Namespace, defaults: ConversionDefaults) -> ConversionDefaults:
    """Overlay command line flags on the config file defaults."""
    overrides = {
        "graphic_type": args.graphic_type,
        "scale": args.scale,
        "darkness": args.darkness,
        "max_width": args.max_width,
        "max_height": args.max_height,
    }
    merged = defaults.model_copy(update={key: value for key, value in overrides.items() if value is not None})
    if args.edits:
        merged.edits = list(args.edits)
    if args.field_only:
        merged.label = False
    return merged


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the zplgfa CLI."""
    args = _build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = logging.DEBUG if (args.verbose or settings.debug) else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Load defaults
    config_path = args.config or settings.config_file
    try:
        defaults = load_config(config_path)
    except (yaml.YAMLError, ValidationError) as e:
        print(f"Error loading config {config_path}: {e}", file=sys.stderr)
        return 1

    options = _merge_options(args, defaults)

    try:
        graphic_type = GraphicType.parse(options.graphic_type)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Load image
    if not args.image.exists():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    try:
        with Image.open(args.image) as source:
            image = source.copy()
        image = apply_edits(image, options.edits)
    except OSError as e:
        print(f"Error reading image: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Convert
    config = GraphicConfig.for_image(
        image,
        scale=options.scale,
        darkness=options.darkness,
        max_width=options.max_width,
        max_height=options.max_height,
    )
    try:
        output = convert_image(image, config, graphic_type, label=options.label)
    except ConversionError as e:
        print(f"Error converting image: {e}", file=sys.stderr)
        return 1

    # Write output
    if args.output is None:
        sys.stdout.buffer.write(output)
        sys.stdout.buffer.flush()
        return 0

    try:
        with open(args.output, "wb") as f:
            f.write(output)
        print(f"Converted to {args.output}", file=sys.stderr)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
