"""Командная строка: изображение -> ASCII-арт в stdout или в файл."""
from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

from image_ascii.logging_config import setup_logging
from image_ascii.models.ascii_model import (
    DEFAULT_CHAR_ASPECT,
    DEFAULT_EDGE_SENSITIVITY,
    DEFAULT_TARGET_WIDTH,
    AsciiConfig,
)
from image_ascii.services.export_service import ExportService
from image_ascii.services.image_service import ImageService
from image_ascii.services.process_service import ProcessService

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-ascii",
        description="Render an image as ASCII art, optionally with Sobel edge glyphs.",
    )
    parser.add_argument("image", type=Path, help="Path to the source image file.")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=DEFAULT_TARGET_WIDTH,
        help=f"Output width in characters (default: {DEFAULT_TARGET_WIDTH}).",
    )
    parser.add_argument(
        "-e",
        "--edges",
        action="store_true",
        help="Replace flat shading with - \\ | / where the gradient is strong.",
    )
    parser.add_argument(
        "-s",
        "--sensitivity",
        type=float,
        default=DEFAULT_EDGE_SENSITIVITY,
        help=(
            "Gradient magnitude threshold for edge glyphs; higher means fewer edges "
            f"(default: {DEFAULT_EDGE_SENSITIVITY:g})."
        ),
    )
    parser.add_argument(
        "--char-aspect",
        type=float,
        default=DEFAULT_CHAR_ASPECT,
        help=f"Height/width compensation for the character cell (default: {DEFAULT_CHAR_ASPECT}).",
    )
    parser.add_argument("-o", "--output", type=Path, help="Write the art to this file instead of stdout.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.width < 1:
        parser.error("--width must be >= 1")
    if not math.isfinite(args.sensitivity):
        parser.error("--sensitivity must be a finite number")
    if not (math.isfinite(args.char_aspect) and args.char_aspect > 0):
        parser.error("--char-aspect must be positive")
    if not args.image.exists():
        parser.error(f"Image not found: {args.image}")

    setup_logging(level=logging.WARNING, debug=args.verbose)

    config = AsciiConfig(
        target_width=args.width,
        enable_edge_detection=args.edges,
        edge_sensitivity=args.sensitivity,
        char_aspect=args.char_aspect,
    )
    image_service = ImageService()
    try:
        image_data = image_service.load_image(args.image)
        art = ProcessService(image_service).image_to_ascii(image_data.pil_image, config)
    except (OSError, ValueError) as exc:
        print(f"image-ascii: error: {exc}", file=sys.stderr)
        return 1
    logger.debug("Rendered %s as %dx%d characters", args.image, art.width, art.height)

    if args.output is not None:
        try:
            ExportService().save_text(art, args.output)
        except OSError as exc:
            print(f"image-ascii: error: {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(art.text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
