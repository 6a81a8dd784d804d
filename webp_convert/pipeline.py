"""
Transform pipeline for single images.

Each image goes through a fixed sequence: crop, resize, scale, then WebP
encoding. Steps receive the handle produced by the previous step and return
a new one together with a fresh dimensions snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .codecs.base import ImageCodec, ImageHandle
from .config import ConverterConfig
from .geometry_parser import GeometryParser
from .geometry_utils import GeometryUtils
from .types import AnchoredCrop, ImageDimensions, ResizeSpec

logger = logging.getLogger(__name__)

OPTIMIZED_PREFIX = "optimized-"

StepResult = Optional[Tuple[ImageHandle, ImageDimensions]]
Step = Callable[[ImageHandle, ImageDimensions], StepResult]


@dataclass(frozen=True)
class TransformResult:
    """Image produced by the transform steps."""

    handle: ImageHandle
    dimensions: ImageDimensions
    steps: Tuple[str, ...]


def output_path_for(path: Path) -> Path:
    """
    Compute where the WebP version of an input is written.

    WebP inputs are re-encoded next to the original as
    ``optimized-<name>.webp``; anything else becomes ``<stem>.webp`` in the
    same directory. An existing file at that path is overwritten.

    The prefix goes on the file name, not the whole path: prefixing
    ``photos/a.webp`` as a string would target an ``optimized-photos``
    directory that does not exist.
    """
    path = Path(path)
    if path.suffix.lower() == ".webp":
        return path.with_name(f"{OPTIMIZED_PREFIX}{path.name}")
    return path.with_name(f"{path.stem}.webp")


class TransformPipeline:
    """
    Applies crop, resize and scale transforms and writes WebP output.

    A crop that cannot be parsed or does not fit the image fails the whole
    file: the error propagates, later steps are not run and nothing is
    written.
    """

    def __init__(self, config: ConverterConfig, codec: ImageCodec) -> None:
        """
        Initialize the pipeline.

        Args:
            config: Options applied identically to every file
            codec: Codec used to decode, transform and encode images
        """
        self.config = config
        self.codec = codec
        self.parser = GeometryParser(fit=config.fit, position=config.position)

    def steps(self) -> List[Tuple[str, Step]]:
        """Transform steps in their fixed order."""
        return [
            ("crop", self.crop),
            ("resize", self.resize),
            ("scale", self.scale),
        ]

    def crop(self, handle: ImageHandle, dimensions: ImageDimensions) -> StepResult:
        """
        Crop the image if a crop is configured.

        Raises:
            GeometryParseError: If the crop string is malformed
            DimensionError: If the crop does not fit the image
        """
        if not self.config.crop:
            return None

        spec = self.parser.parse_crop(self.config.crop)
        rect = GeometryUtils.resolve_crop_rectangle(dimensions, spec)
        if isinstance(spec, AnchoredCrop):
            logger.info(
                "Cropping with calculated coordinates: left=%d, top=%d",
                rect.left,
                rect.top,
            )

        cropped = self.codec.extract(handle, rect)
        return cropped, self.codec.dimensions(cropped)

    def resize(self, handle: ImageHandle, dimensions: ImageDimensions) -> StepResult:
        """Resize the image if a valid ``WxH`` resize is configured."""
        if not self.config.resize:
            return None

        spec = self.parser.parse_resize_with_fallback(self.config.resize)
        if spec is None:
            logger.debug("Skipping resize, unusable size %r", self.config.resize)
            return None

        resized = self.codec.resize(handle, spec)
        return resized, self.codec.dimensions(resized)

    def scale(self, handle: ImageHandle, dimensions: ImageDimensions) -> StepResult:
        """Scale the image by the configured factor unless it is 1."""
        if self.config.scale == 1:
            return None

        current = self.codec.dimensions(handle)
        target = GeometryUtils.resolve_target_size(current, self.config.scale)
        scaled = self.codec.resize(
            handle, ResizeSpec(width=target.width, height=target.height, fit="fill")
        )
        return scaled, self.codec.dimensions(scaled)

    def apply_transforms(
        self, handle: ImageHandle, dimensions: ImageDimensions
    ) -> TransformResult:
        """
        Run every configured transform in order.

        Args:
            handle: Decoded image
            dimensions: Dimensions of the decoded image

        Returns:
            TransformResult with the final handle, its dimensions and the
            names of the steps that ran
        """
        applied: List[str] = []
        for name, step in self.steps():
            result = step(handle, dimensions)
            if result is None:
                continue
            handle, dimensions = result
            applied.append(name)

        return TransformResult(
            handle=handle, dimensions=dimensions, steps=tuple(applied)
        )

    def process_file(self, path: Path) -> Path:
        """
        Convert a single file to WebP.

        Args:
            path: Input image

        Returns:
            Path of the written WebP file

        Raises:
            ConversionError: On decode, geometry, encode or write failures
        """
        path = Path(path)
        output_path = output_path_for(path)

        dimensions, handle = self.codec.load(path)
        result = self.apply_transforms(handle, dimensions)
        data = self.codec.encode_webp(result.handle, self.config.encode_config)
        self.codec.write(output_path, data)

        logger.info("Converted: %s -> %s", path, output_path.name)
        return output_path
