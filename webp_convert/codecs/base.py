"""
Base interface for raster image codecs.

This module defines the abstract interface that the transform pipeline
uses to load, transform, encode and write images. Handles are opaque to
the pipeline; every transform returns a new handle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Tuple

from ..config import EncodeConfig
from ..errors import WriteError
from ..types import CropRectangle, ImageDimensions, ResizeSpec

ImageHandle = Any


class ImageCodec(ABC):
    """
    Abstract base class for raster image codecs.

    Defines the operations the converter needs from an image library:
    decoding, cropping, resizing, WebP encoding and writing bytes.
    """

    @abstractmethod
    def load(self, path: Path) -> Tuple[ImageDimensions, ImageHandle]:
        """
        Decode an image file.

        Args:
            path: Path to the input image

        Returns:
            Tuple of (dimensions, handle)

        Raises:
            DecodeError: If the file is not a readable image
        """
        pass

    @abstractmethod
    def dimensions(self, handle: ImageHandle) -> ImageDimensions:
        """Return the current dimensions of a handle."""
        pass

    @abstractmethod
    def extract(self, handle: ImageHandle, rect: CropRectangle) -> ImageHandle:
        """
        Crop a region out of an image.

        Args:
            handle: Image handle
            rect: Explicit rectangle lying inside the image

        Returns:
            New handle containing only the region
        """
        pass

    @abstractmethod
    def resize(self, handle: ImageHandle, spec: ResizeSpec) -> ImageHandle:
        """
        Resize an image using the spec's fit and position.

        Args:
            handle: Image handle
            spec: Target size, fit and position

        Returns:
            New handle with the resized image
        """
        pass

    @abstractmethod
    def encode_webp(self, handle: ImageHandle, encode_config: EncodeConfig) -> bytes:
        """
        Encode an image as WebP.

        Args:
            handle: Image handle
            encode_config: Quality, lossless, effort and near-lossless settings

        Returns:
            Encoded WebP bytes

        Raises:
            EncodeError: If the encoder rejects the image
        """
        pass

    def write(self, path: Path, data: bytes) -> None:
        """
        Write encoded bytes to a file, replacing any existing file.

        Args:
            path: Output path
            data: Encoded image bytes

        Raises:
            WriteError: If the file cannot be written
        """
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise WriteError(f"Cannot write {path}: {exc}") from exc
