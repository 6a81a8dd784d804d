"""
Tests for geometry string parsing.

Tests crop and resize string formats, anchored versus explicit crops
and the skip-on-failure resize API.
"""

import pytest

from webp_convert.errors import GeometryParseError
from webp_convert.geometry_parser import GeometryParser
from webp_convert.types import AnchoredCrop, CropRectangle, ResizeSpec


class TestGeometryParser:
    """Test cases for GeometryParser class."""

    @pytest.fixture
    def parser(self):
        """Create a parser with the default fit and position."""
        return GeometryParser()

    def test_parse_explicit_crop(self, parser):
        """Offsets make the crop explicit."""
        spec = parser.parse_crop("100x100+10+20")
        assert spec == CropRectangle(width=100, height=100, left=10, top=20)

    def test_parse_anchored_crop(self, parser):
        """Without offsets the crop is anchored, not explicit."""
        spec = parser.parse_crop("100x100")
        assert isinstance(spec, AnchoredCrop)
        assert spec == AnchoredCrop(width=100, height=100, anchor="center")

    def test_anchored_crop_uses_configured_position(self):
        parser = GeometryParser(position="southeast")
        spec = parser.parse_crop("30x20")
        assert spec.anchor == "southeast"

    def test_parse_crop_tolerates_whitespace(self, parser):
        spec = parser.parse_crop(" 64 x 32 + 1 + 2 ")
        assert spec == CropRectangle(width=64, height=32, left=1, top=2)

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "100", "100x", "x100", "100x100+10", "-5x10", "10x10+-1+2", "1.5x2"],
    )
    def test_parse_crop_invalid_format(self, parser, value):
        """Malformed crop strings raise GeometryParseError."""
        with pytest.raises(GeometryParseError, match="Invalid crop format"):
            parser.parse_crop(value)

    def test_parse_crop_zero_size(self, parser):
        with pytest.raises(GeometryParseError, match="must be > 0"):
            parser.parse_crop("0x10")

    def test_parse_resize(self):
        parser = GeometryParser(fit="contain", position="north")
        spec = parser.parse_resize("800x600")
        assert spec == ResizeSpec(width=800, height=600, fit="contain", position="north")

    def test_parse_resize_invalid(self, parser):
        with pytest.raises(GeometryParseError, match="Invalid resize format"):
            parser.parse_resize("800")

    @pytest.mark.parametrize("value", ["", "800", "0x600", "800x0", "wide x tall"])
    def test_parse_resize_with_fallback_skips(self, parser, value):
        """Unusable resize strings yield None instead of raising."""
        assert parser.parse_resize_with_fallback(value) is None

    def test_unknown_position_rejected(self):
        with pytest.raises(ValueError, match="Unknown anchor"):
            GeometryParser(position="top-left")
