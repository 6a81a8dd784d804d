"""Shared command line helpers for the conversion tools."""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

LOG_LEVEL_ENV = "WEBP_CONVERT_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging.

    ``--verbose`` selects DEBUG. Otherwise the level named by
    ``WEBP_CONVERT_LOG_LEVEL`` (environment or a local ``.env``) is used,
    falling back to INFO for unknown names.
    """
    load_dotenv()
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Input path (folder, file, or glob pattern)",
    )


def add_encode_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the WebP encoder options shared by both tools."""
    parser.add_argument(
        "-q",
        "--quality",
        type=int,
        default=80,
        help="WebP quality (0-100, default: 80)",
    )
    parser.add_argument(
        "-l",
        "--lossless",
        action="store_true",
        help="Use lossless compression",
    )
    parser.add_argument(
        "-e",
        "--effort",
        type=int,
        default=6,
        help="Compression effort (0-6, default: 6)",
    )
    parser.add_argument(
        "-n",
        "--nearLossless",
        action="store_true",
        help="Enable near-lossless mode",
    )


def add_verbose_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
