"""
In-place SVG optimization with a one-time backup.

Markup is optimized by scour, then sizing and paint attributes are stripped
so the icons can be sized and coloured from CSS. The first run keeps a copy
of the untouched file at ``<name>.svg.backup``; later runs never replace it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from scour import scour

from .errors import DecodeError, OptimizationError, WriteError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


@dataclass(frozen=True)
class SvgProfile:
    """Attribute removals applied after scour's structural optimizations."""

    remove_dimensions: bool = True
    remove_view_box: bool = True
    removed_attributes: Tuple[str, ...] = ("stroke", "fill")


DEFAULT_PROFILE = SvgProfile()


def backup_path_for(path: Path) -> Path:
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def ensure_backup(path: Path, content: bytes) -> bool:
    """
    Write ``content`` to the backup of ``path`` unless a backup exists.

    The backup is created exclusively, so an existing backup (the original
    file from an earlier run) is never overwritten. A backup that cannot be
    written completely is removed, so a later run starts from the original.

    Returns:
        True if a new backup was written, False if one was already present
    """
    backup_path = backup_path_for(path)
    try:
        f = open(backup_path, "xb")
    except FileExistsError:
        logger.debug("Backup already present for %s", path)
        return False
    except OSError as exc:
        raise WriteError(f"Cannot write backup {backup_path}: {exc}") from exc

    try:
        with f:
            f.write(content)
    except OSError as exc:
        backup_path.unlink(missing_ok=True)
        raise WriteError(f"Cannot write backup {backup_path}: {exc}") from exc

    logger.info("Backed up %s -> %s", path, backup_path.name)
    return True


class SvgOptimizer:
    """Optimizes SVG markup with a fixed scour configuration."""

    def __init__(self, profile: SvgProfile = DEFAULT_PROFILE) -> None:
        self.profile = profile
        self.options = self._scour_options()

    @staticmethod
    def _scour_options():
        options = scour.sanitizeOptions()
        options.strip_comments = True
        options.remove_metadata = True
        options.strip_ids = True
        options.shorten_ids = True
        options.strip_xml_prolog = True
        options.enable_viewboxing = False
        options.indent_type = "none"
        options.newlines = False
        return options

    def optimize(self, svg: Union[str, bytes]) -> str:
        """
        Optimize SVG markup.

        Args:
            svg: Source document; bytes are decoded using the XML
                encoding declaration (UTF-8 when absent)

        Returns:
            Optimized document without XML declaration

        Raises:
            OptimizationError: If the markup cannot be parsed
        """
        try:
            scoured = scour.scourString(svg, self.options)
            document = minidom.parseString(scoured)
        except ExpatError as exc:
            raise OptimizationError(f"Invalid SVG markup: {exc}") from exc

        root = document.documentElement
        if self.profile.remove_dimensions:
            for name in ("width", "height"):
                if root.hasAttribute(name):
                    root.removeAttribute(name)
        if self.profile.remove_view_box and root.hasAttribute("viewBox"):
            root.removeAttribute("viewBox")

        for element in document.getElementsByTagName("*"):
            for name in self.profile.removed_attributes:
                if element.hasAttribute(name):
                    element.removeAttribute(name)

        return root.toxml()

    def optimize_svg_file(self, path: Path) -> Path:
        """
        Optimize an SVG file in place, backing it up on first run.

        Args:
            path: SVG file to rewrite

        Returns:
            The path that was rewritten

        Raises:
            DecodeError: If the file cannot be read
            OptimizationError: If the markup cannot be parsed
            WriteError: If the backup or the optimized file cannot be written
        """
        path = Path(path)
        try:
            original = path.read_bytes()
        except OSError as exc:
            raise DecodeError(f"Cannot read {path}: {exc}") from exc

        ensure_backup(path, original)
        optimized = self.optimize(original)

        try:
            path.write_text(optimized, encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Cannot write {path}: {exc}") from exc

        logger.info(
            "Optimized SVG: %s (%d -> %d bytes)",
            path,
            len(original),
            len(optimized.encode("utf-8")),
        )
        return path
