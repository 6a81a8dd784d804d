"""
Configuration management for the WebP conversion tools.

This module provides immutable configuration classes built once per
invocation and shared, unchanged, by every file in a batch.
"""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

from .errors import ConfigurationError
from .types import ANCHORS, FIT_MODES

RASTER_EXTENSIONS: FrozenSet[str] = frozenset({".png", ".jpg", ".jpeg", ".heic"})
WEBP_EXTENSIONS: FrozenSet[str] = frozenset({".webp"})
SVG_EXTENSIONS: FrozenSet[str] = frozenset({".svg"})


@dataclass(frozen=True)
class EncodeConfig:
    """WebP encoder settings passed through to the codec."""

    quality: int = 80
    lossless: bool = False
    effort: int = 6
    near_lossless: bool = False

    def __post_init__(self) -> None:
        """Validate encoder settings."""
        if not (0 <= self.quality <= 100):
            raise ConfigurationError(
                f"quality must be between 0 and 100, got {self.quality}"
            )
        if not (0 <= self.effort <= 6):
            raise ConfigurationError(
                f"effort must be between 0 and 6, got {self.effort}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quality": self.quality,
            "lossless": self.lossless,
            "effort": self.effort,
            "near_lossless": self.near_lossless,
        }


@dataclass(frozen=True)
class ConverterConfig:
    """
    Complete configuration for the raster-to-WebP converter.

    Crop and resize strings are kept as given; they are parsed per file by
    the transform pipeline so that a malformed value fails files, not the
    whole run.
    """

    input: str
    include_webp: bool = False
    scale: float = 1.0
    crop: str = ""
    resize: str = ""
    fit: str = "cover"
    position: str = "center"
    encode_config: EncodeConfig = field(default_factory=EncodeConfig)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.input:
            raise ConfigurationError("input must be a non-empty path or pattern")

        if not self.scale > 0 or math.isinf(self.scale):
            raise ConfigurationError(f"scale must be positive, got {self.scale}")

        if self.fit not in FIT_MODES:
            raise ConfigurationError(
                f"Unsupported fit: {self.fit} (expected one of {', '.join(FIT_MODES)})"
            )

        if self.position not in ANCHORS:
            raise ConfigurationError(
                f"Unsupported position: {self.position} "
                f"(expected one of {', '.join(ANCHORS)})"
            )

    @property
    def extensions(self) -> FrozenSet[str]:
        """Input suffixes this configuration converts."""
        if self.include_webp:
            return RASTER_EXTENSIONS | WEBP_EXTENSIONS
        return RASTER_EXTENSIONS

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ConverterConfig":
        """Create configuration from parsed command line arguments."""
        return cls(
            input=args.input,
            include_webp=args.includeWebp,
            scale=float(args.scale),
            crop=args.crop or "",
            resize=args.resize or "",
            fit=args.fit,
            position=args.position,
            encode_config=EncodeConfig(
                quality=args.quality,
                lossless=args.lossless,
                effort=args.effort,
                near_lossless=args.nearLossless,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        return {
            "input": self.input,
            "include_webp": self.include_webp,
            "scale": self.scale,
            "crop": self.crop,
            "resize": self.resize,
            "fit": self.fit,
            "position": self.position,
            "encode_config": self.encode_config.to_dict(),
        }


@dataclass(frozen=True)
class OptimizerConfig:
    """Configuration for the combined raster and SVG optimizer."""

    input: str
    encode_config: EncodeConfig = field(default_factory=EncodeConfig)

    def __post_init__(self) -> None:
        if not self.input:
            raise ConfigurationError("input must be a non-empty path or pattern")

    @property
    def svg_extensions(self) -> FrozenSet[str]:
        return SVG_EXTENSIONS

    @property
    def extensions(self) -> FrozenSet[str]:
        return RASTER_EXTENSIONS | SVG_EXTENSIONS

    def converter_config(self) -> ConverterConfig:
        """Converter settings used for the raster half of the batch."""
        return ConverterConfig(input=self.input, encode_config=self.encode_config)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "OptimizerConfig":
        return cls(
            input=args.input,
            encode_config=EncodeConfig(
                quality=args.quality,
                lossless=args.lossless,
                effort=args.effort,
                near_lossless=args.nearLossless,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"input": self.input, "encode_config": self.encode_config.to_dict()}
