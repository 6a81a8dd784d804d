"""Shared type aliases and value objects for the WebP conversion tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple, Union

NumberLike = Union[int, float]
Centering = Tuple[float, float]

Anchor = Literal[
    "center",
    "north",
    "east",
    "south",
    "west",
    "northeast",
    "southeast",
    "southwest",
    "northwest",
]
FitMode = Literal["cover", "contain", "fill", "inside", "outside"]

# Horizontal / vertical component of an anchor.
AxisClass = Literal["start", "center", "end"]

ANCHORS: Tuple[str, ...] = (
    "center",
    "north",
    "east",
    "south",
    "west",
    "northeast",
    "southeast",
    "southwest",
    "northwest",
)
FIT_MODES: Tuple[str, ...] = ("cover", "contain", "fill", "inside", "outside")


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of an image at the moment it is inspected."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class CropRectangle:
    """Explicit crop rectangle in pixel coordinates."""

    width: int
    height: int
    left: int
    top: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow-style ``(left, upper, right, lower)`` box."""
        return (self.left, self.top, self.left + self.width, self.top + self.height)


@dataclass(frozen=True)
class AnchoredCrop:
    """Crop size positioned by a named anchor, resolved per image."""

    width: int
    height: int
    anchor: Anchor = "center"


CropSpec = Union[CropRectangle, AnchoredCrop]


@dataclass(frozen=True)
class ResizeSpec:
    """Target size passed to the codec's resize together with fit/position."""

    width: int
    height: int
    fit: FitMode = "cover"
    position: Anchor = "center"
