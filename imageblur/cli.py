"""Command line front end.

Usage:
    imageblur photo.jpg
    imageblur *.png --output out/ --radius 12 --darken-alpha 0.3
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import settings
from .job import ProcessJob
from .pipeline import PipelineConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imageblur",
        description="Create a blurred, darkened (frosted glass) copy of images",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files to process")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: next to each input)",
    )
    parser.add_argument(
        "--scale-factor",
        type=float,
        default=settings.SCALE_FACTOR,
        help=f"Scale before blurring, 0-1 (default: {settings.SCALE_FACTOR})",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=settings.BLUR_RADIUS,
        help=f"Blur radius, clamped to 1-25 (default: {settings.BLUR_RADIUS:g})",
    )
    parser.add_argument(
        "--darken-alpha",
        type=float,
        default=settings.DARKEN_ALPHA,
        help=f"Black overlay opacity, 0-1 (default: {settings.DARKEN_ALPHA})",
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="More log output (-vv for debug)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = PipelineConfig(
            scale_factor=args.scale_factor,
            blur_radius=args.radius,
            darken_alpha=args.darken_alpha,
        )
    except ValidationError as e:
        parser.error(str(e))

    failed = 0
    for source in args.inputs:
        print(f"Processing {source}")
        job = ProcessJob(source, args.output, config, reporter=lambda status: print(f"  {status}"))
        try:
            result = job.run()
        except Exception:
            logger.exception("Failed to process %s", source)
            print(f"  Failed: {source}", file=sys.stderr)
            failed += 1
            continue
        print(f"  Saved: {result.output_path} ({result.total_time * 1000:.0f}ms)")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
