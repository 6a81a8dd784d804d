"""
Pillow codec implementation.

This module implements the ImageCodec interface with Pillow. HEIC/HEIF
decoding is provided by pillow-heif, registered as a Pillow opener on import.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageOps
from pillow_heif import register_heif_opener

from ..config import EncodeConfig
from ..errors import DecodeError, EncodeError
from ..geometry_utils import GeometryUtils
from ..types import CropRectangle, ImageDimensions, ResizeSpec
from .base import ImageCodec

logger = logging.getLogger(__name__)

register_heif_opener()

RESAMPLE = Image.Resampling.LANCZOS


class PillowCodec(ImageCodec):
    """
    Pillow-backed codec.

    Images are normalized to RGB or RGBA on load, the two modes the WebP
    encoder accepts. All transforms return new ``Image.Image`` objects.
    """

    def load(self, path: Path) -> Tuple[ImageDimensions, Image.Image]:
        try:
            with Image.open(path) as image:
                handle = self._normalize_mode(image)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Cannot decode {path}: {exc}") from exc

        logger.debug("Loaded %s (%s, %dx%d)", path, handle.mode, *handle.size)
        return self.dimensions(handle), handle

    def dimensions(self, handle: Image.Image) -> ImageDimensions:
        width, height = handle.size
        return ImageDimensions(width=width, height=height)

    def extract(self, handle: Image.Image, rect: CropRectangle) -> Image.Image:
        return handle.crop(rect.box)

    def resize(self, handle: Image.Image, spec: ResizeSpec) -> Image.Image:
        """
        Resize following the fit modes of common image services:

        - cover:   fill the target, cropping overflow around ``position``
        - contain: fit inside the target, padding around ``position``
        - fill:    stretch to the exact target size
        - inside:  fit inside the target, no padding
        - outside: cover the target, no cropping
        """
        size = (spec.width, spec.height)
        centering = GeometryUtils.anchor_centering(spec.position)

        if spec.fit == "cover":
            return ImageOps.fit(handle, size, method=RESAMPLE, centering=centering)
        if spec.fit == "contain":
            return ImageOps.pad(
                handle,
                size,
                method=RESAMPLE,
                color=self._pad_color(handle),
                centering=centering,
            )
        if spec.fit == "fill":
            return handle.resize(size, RESAMPLE)
        if spec.fit == "inside":
            return ImageOps.contain(handle, size, method=RESAMPLE)
        if spec.fit == "outside":
            width, height = handle.size
            ratio = max(spec.width / width, spec.height / height)
            target = (
                max(1, GeometryUtils.round_half_up(width * ratio)),
                max(1, GeometryUtils.round_half_up(height * ratio)),
            )
            return handle.resize(target, RESAMPLE)
        raise ValueError(f"Unsupported fit: {spec.fit}")

    def encode_webp(self, handle: Image.Image, encode_config: EncodeConfig) -> bytes:
        """
        Encode as WebP.

        Pillow does not expose libwebp's near-lossless preprocessing level,
        so near-lossless output is encoded losslessly.
        """
        buffer = io.BytesIO()
        try:
            handle.save(
                buffer,
                format="WEBP",
                quality=encode_config.quality,
                lossless=encode_config.lossless or encode_config.near_lossless,
                method=encode_config.effort,
            )
        except (OSError, ValueError) as exc:
            raise EncodeError(f"WebP encoding failed: {exc}") from exc
        return buffer.getvalue()

    @staticmethod
    def _normalize_mode(image: Image.Image) -> Image.Image:
        """Convert to RGBA when the image carries transparency, RGB otherwise."""
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        return image.convert("RGBA" if has_alpha else "RGB")

    @staticmethod
    def _pad_color(handle: Image.Image) -> Tuple[int, ...]:
        if handle.mode == "RGBA":
            return (0, 0, 0, 255)
        return (0, 0, 0)
