"""
Geometry utilities for the WebP conversion tools.

This module provides pure calculations for crop rectangles and scaled
target sizes. Nothing here touches the filesystem or the image codec.
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

from .errors import ConfigurationError, DimensionError
from .types import (
    AnchoredCrop,
    AxisClass,
    Centering,
    CropRectangle,
    CropSpec,
    ImageDimensions,
    NumberLike,
)


class GeometryUtils:
    """
    Utility class for geometric calculations on raster images.

    Anchors are decomposed into an independent horizontal and vertical
    class so that all nine positions share the same three offset rules.
    """

    # anchor -> (horizontal class, vertical class)
    ANCHOR_AXES: Dict[str, Tuple[AxisClass, AxisClass]] = {
        "center": ("center", "center"),
        "north": ("center", "start"),
        "south": ("center", "end"),
        "east": ("end", "center"),
        "west": ("start", "center"),
        "northeast": ("end", "start"),
        "northwest": ("start", "start"),
        "southeast": ("end", "end"),
        "southwest": ("start", "end"),
    }

    CENTERING_FRACTIONS: Dict[AxisClass, float] = {
        "start": 0.0,
        "center": 0.5,
        "end": 1.0,
    }

    @staticmethod
    def anchor_axes(anchor: str) -> Tuple[AxisClass, AxisClass]:
        """
        Split an anchor into its horizontal and vertical classes.

        Args:
            anchor: One of the nine anchor names

        Returns:
            Tuple of (horizontal class, vertical class)

        Raises:
            ValueError: If the anchor is not one of the nine known names
        """
        try:
            return GeometryUtils.ANCHOR_AXES[anchor]
        except KeyError:
            raise ValueError(f"Unknown anchor: {anchor!r}") from None

    @staticmethod
    def axis_offset(axis_class: AxisClass, extent: int, crop_extent: int) -> int:
        """
        Compute the offset of a crop along a single axis.

        Args:
            axis_class: "start", "center" or "end"
            extent: Image size along the axis
            crop_extent: Crop size along the axis

        Returns:
            Offset in pixels
        """
        if axis_class == "start":
            return 0
        if axis_class == "end":
            return extent - crop_extent
        if axis_class == "center":
            return max(0, (extent - crop_extent) // 2)
        raise ValueError(f"Unknown axis class: {axis_class!r}")

    @staticmethod
    def anchor_centering(anchor: str) -> Centering:
        """
        Map an anchor to Pillow ``centering`` fractions.

        Args:
            anchor: One of the nine anchor names

        Returns:
            Tuple of (x, y) fractions in [0, 1]
        """
        horizontal, vertical = GeometryUtils.anchor_axes(anchor)
        return (
            GeometryUtils.CENTERING_FRACTIONS[horizontal],
            GeometryUtils.CENTERING_FRACTIONS[vertical],
        )

    @staticmethod
    def calculate_crop_coordinates(
        dimensions: ImageDimensions,
        crop_width: int,
        crop_height: int,
        anchor: str = "center",
    ) -> Tuple[int, int]:
        """
        Calculate the top-left corner of an anchored crop.

        Args:
            dimensions: Current image dimensions
            crop_width: Crop width in pixels
            crop_height: Crop height in pixels
            anchor: Anchor naming where the crop sits inside the image

        Returns:
            Tuple of (left, top)

        Raises:
            DimensionError: If the crop is larger than the image
        """
        if crop_width > dimensions.width or crop_height > dimensions.height:
            raise DimensionError(
                f"Crop dimensions ({crop_width}x{crop_height}) exceed image size "
                f"({dimensions.width}x{dimensions.height})"
            )

        horizontal, vertical = GeometryUtils.anchor_axes(anchor)
        left = GeometryUtils.axis_offset(horizontal, dimensions.width, crop_width)
        top = GeometryUtils.axis_offset(vertical, dimensions.height, crop_height)
        return left, top

    @staticmethod
    def resolve_crop_rectangle(
        dimensions: ImageDimensions, spec: CropSpec
    ) -> CropRectangle:
        """
        Resolve a crop specification into an explicit rectangle.

        Explicit rectangles pass through once they are confirmed to lie
        inside the image; anchored crops are positioned against the
        current dimensions.

        Args:
            dimensions: Current image dimensions
            spec: Explicit or anchored crop specification

        Returns:
            Explicit crop rectangle

        Raises:
            DimensionError: If the rectangle does not fit inside the image
        """
        if isinstance(spec, AnchoredCrop):
            left, top = GeometryUtils.calculate_crop_coordinates(
                dimensions, spec.width, spec.height, spec.anchor
            )
            return CropRectangle(
                width=spec.width, height=spec.height, left=left, top=top
            )

        if spec.left < 0 or spec.top < 0:
            raise DimensionError(
                f"Crop offsets must be non-negative, got +{spec.left}+{spec.top}"
            )
        if (
            spec.left + spec.width > dimensions.width
            or spec.top + spec.height > dimensions.height
        ):
            raise DimensionError(
                f"Crop area ({spec.width}x{spec.height}+{spec.left}+{spec.top}) "
                f"exceeds image size ({dimensions.width}x{dimensions.height})"
            )
        return spec

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer, halves away from zero."""
        if value < 0:
            return -int(math.floor(-value + 0.5))
        return int(math.floor(value + 0.5))

    @staticmethod
    def resolve_target_size(
        dimensions: ImageDimensions, scale: NumberLike
    ) -> ImageDimensions:
        """
        Compute the size of an image scaled by a uniform factor.

        Both sides are rounded half up (50.5 -> 51).

        Args:
            dimensions: Current image dimensions
            scale: Positive scale factor

        Returns:
            Target dimensions

        Raises:
            ConfigurationError: If the scale is not positive or a side
                would round down to zero pixels
        """
        if not scale > 0 or math.isinf(scale):
            raise ConfigurationError(f"Scale factor must be positive, got {scale}")

        width = GeometryUtils.round_half_up(dimensions.width * scale)
        height = GeometryUtils.round_half_up(dimensions.height * scale)
        if width < 1 or height < 1:
            raise ConfigurationError(
                f"Scale factor {scale} reduces {dimensions} to {width}x{height}"
            )
        return ImageDimensions(width=width, height=height)
