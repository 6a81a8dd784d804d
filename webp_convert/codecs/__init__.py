"""
Raster image codecs for the WebP conversion tools.

This module provides the codec interface used by the transform pipeline
and its Pillow implementation.
"""

from .base import ImageCodec
from .pillow_codec import PillowCodec

__all__ = ["ImageCodec", "PillowCodec"]
