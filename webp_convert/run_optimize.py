"""CLI runner converting raster images to WebP and optimizing SVGs in place."""

import argparse
import logging
from typing import List, Optional

from .batch import BatchDriver
from .codecs.pillow_codec import PillowCodec
from .config import OptimizerConfig
from .errors import ConfigurationError, ResolutionError
from .file_resolver import filter_supported, resolve_files
from .helpers import (
    add_encode_arguments,
    add_input_argument,
    add_verbose_argument,
    configure_logging,
)
from .svg_optimizer import SvgOptimizer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Convert PNG/JPEG/HEIC images to WebP and optimize SVG files "
            "in place (the original is kept as <file>.svg.backup)"
        )
    )
    add_input_argument(parser)
    add_encode_arguments(parser)
    add_verbose_argument(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = OptimizerConfig.from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        files = resolve_files(config.input, config.extensions)
    except ResolutionError as exc:
        logger.error("An error occurred: %s", exc)
        return 1

    files = filter_supported(files, config.extensions)
    svg_count = len(filter_supported(files, config.svg_extensions))
    logger.info(
        "Found %d images and %d SVG files", len(files) - svg_count, svg_count
    )
    logger.info("Using options: %s", config.to_dict())

    driver = BatchDriver(
        config.converter_config(), PillowCodec(), svg_optimizer=SvgOptimizer()
    )
    report = driver.run(files)

    if not report.ok:
        for outcome in report.failed:
            logger.error("Failed: %s (%s)", outcome.path, outcome.error)
        return 1

    logger.info("Processing completed successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
