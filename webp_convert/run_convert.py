"""CLI runner converting raster images to WebP with optional crop/resize/scale."""

import argparse
import logging
from typing import List, Optional

from .batch import BatchDriver
from .codecs.pillow_codec import PillowCodec
from .config import ConverterConfig
from .errors import ConfigurationError, ResolutionError
from .file_resolver import filter_supported, resolve_files
from .helpers import (
    add_encode_arguments,
    add_input_argument,
    add_verbose_argument,
    configure_logging,
)
from .types import ANCHORS, FIT_MODES

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Convert PNG/JPEG/HEIC images to WebP"
    )

    add_input_argument(parser)
    add_encode_arguments(parser)

    parser.add_argument(
        "-w",
        "--includeWebp",
        action="store_true",
        help="Also optimize WebP files",
    )

    # Transforms
    parser.add_argument(
        "-s",
        "--scale",
        type=float,
        default=1.0,
        help="Scale factor (e.g., 0.5 for half size)",
    )
    parser.add_argument(
        "-c",
        "--crop",
        default="",
        help="Crop dimensions in format: widthxheight+left+top (e.g., 100x100+0+0)",
    )
    parser.add_argument(
        "-r",
        "--resize",
        default="",
        help="Resize dimensions in format: widthxheight (e.g., 800x600)",
    )
    parser.add_argument(
        "-f",
        "--fit",
        default="cover",
        choices=FIT_MODES,
        help="Resize fit (default: cover)",
    )
    parser.add_argument(
        "-p",
        "--position",
        default="center",
        choices=ANCHORS,
        help="Crop anchor and resize position (default: center)",
    )

    add_verbose_argument(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = ConverterConfig.from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        files = resolve_files(config.input, config.extensions)
    except ResolutionError as exc:
        logger.error("An error occurred: %s", exc)
        return 1

    images = filter_supported(files, config.extensions)
    logger.info("Found %d images", len(images))
    logger.info("Using options: %s", config.to_dict())

    report = BatchDriver(config, PillowCodec()).run(images)

    if not report.ok:
        for outcome in report.failed:
            logger.error("Failed: %s (%s)", outcome.path, outcome.error)
        return 1

    logger.info("Processing completed successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
