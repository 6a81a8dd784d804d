"""
Parsing utilities for geometry strings given on the command line.

Two formats are accepted:

- Crop:   ``WxH`` (anchored) or ``WxH+L+T`` (explicit offsets)
- Resize: ``WxH``

Malformed crop strings raise ``GeometryParseError``. Resize strings that do
not describe two positive sizes are skipped by the fallback API.
"""

from __future__ import annotations

import re
from typing import Optional

from .errors import GeometryParseError
from .geometry_utils import GeometryUtils
from .types import AnchoredCrop, CropRectangle, CropSpec, ResizeSpec

CROP_PATTERN = re.compile(r"\s*(\d+)\s*x\s*(\d+)\s*(?:\+\s*(\d+)\s*\+\s*(\d+)\s*)?")
RESIZE_PATTERN = re.compile(r"\s*(\d+)\s*x\s*(\d+)\s*")


class GeometryParser:
    """Parser for crop and resize geometry strings."""

    def __init__(self, fit: str = "cover", position: str = "center") -> None:
        """
        Initialize the parser.

        Args:
            fit: Resize fit attached to parsed resize specs
            position: Anchor attached to anchored crops and resize specs
        """
        GeometryUtils.anchor_axes(position)
        self.fit = fit
        self.position = position

    def parse_crop(self, value: str) -> CropSpec:
        """
        Parse a crop string.

        ``"100x100+10+20"`` yields an explicit rectangle; ``"100x100"``
        yields a crop anchored at the configured position.

        Raises:
            GeometryParseError: If the string is not ``WxH`` or ``WxH+L+T``
                or a size is zero
        """
        match = CROP_PATTERN.fullmatch(value or "")
        if not match:
            raise GeometryParseError(
                f"Invalid crop format {value!r}. Use: widthxheight or widthxheight+left+top"
            )

        width = int(match.group(1))
        height = int(match.group(2))
        if width <= 0 or height <= 0:
            raise GeometryParseError(
                f"Invalid crop dimensions {value!r} (width and height must be > 0)"
            )

        if match.group(3) is not None and match.group(4) is not None:
            return CropRectangle(
                width=width,
                height=height,
                left=int(match.group(3)),
                top=int(match.group(4)),
            )
        return AnchoredCrop(width=width, height=height, anchor=self.position)

    def parse_resize(self, value: str) -> ResizeSpec:
        """
        Parse a resize string.

        Raises:
            GeometryParseError: If the string is not ``WxH`` with positive sizes
        """
        match = RESIZE_PATTERN.fullmatch(value or "")
        if not match:
            raise GeometryParseError(
                f"Invalid resize format {value!r}. Use: widthxheight"
            )

        width = int(match.group(1))
        height = int(match.group(2))
        if width <= 0 or height <= 0:
            raise GeometryParseError(
                f"Invalid resize dimensions {value!r} (width and height must be > 0)"
            )
        return ResizeSpec(
            width=width, height=height, fit=self.fit, position=self.position
        )

    def parse_resize_with_fallback(self, value: str) -> Optional[ResizeSpec]:
        """
        Parse a resize string, returning None instead of raising.

        Args:
            value: Resize string, possibly empty

        Returns:
            ResizeSpec, or None when the resize should be skipped
        """
        try:
            return self.parse_resize(value)
        except GeometryParseError:
            return None
