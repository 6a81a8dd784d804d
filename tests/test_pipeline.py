"""
Tests for the transform pipeline.

Tests step ordering, crop failure policy, resize skipping, scale
handling and output path computation, using a recording codec.
"""

from pathlib import Path

import pytest
from PIL import Image

from tests.test_fixtures import RecordingCodec, create_image
from webp_convert.codecs.pillow_codec import PillowCodec
from webp_convert.config import EncodeConfig
from webp_convert.errors import DimensionError, GeometryParseError
from webp_convert.pipeline import TransformPipeline, output_path_for
from webp_convert.types import CropRectangle, ImageDimensions, ResizeSpec


class TestOutputPath:
    """Test cases for output path computation."""

    def test_raster_input(self):
        assert output_path_for(Path("photos/cat.png")) == Path("photos/cat.webp")

    def test_uppercase_extension(self):
        assert output_path_for(Path("photos/DOG.JPEG")) == Path("photos/DOG.webp")

    def test_webp_input(self):
        """WebP inputs get an optimized- prefix next to the original."""
        assert output_path_for(Path("photos/cat.webp")) == Path(
            "photos/optimized-cat.webp"
        )

    def test_nested_webp_input_keeps_directory(self):
        assert output_path_for(Path("assets/icons/cat.webp")) == Path(
            "assets/icons/optimized-cat.webp"
        )

    def test_webp_input_in_working_directory(self):
        assert output_path_for(Path("cat.WEBP")) == Path("optimized-cat.WEBP")


class TestTransformPipeline:
    """Test cases for TransformPipeline with a recording codec."""

    def run_pipeline(self, config, codec, size=(100, 100)):
        pipeline = TransformPipeline(config, codec)
        handle = codec.load(Path("in.png"))[1]
        return pipeline.apply_transforms(handle, ImageDimensions(*size))

    def test_no_transforms(self, converter_config_factory, recording_codec):
        result = self.run_pipeline(converter_config_factory(), recording_codec)

        assert result.steps == ()
        assert result.dimensions == ImageDimensions(100, 100)
        assert recording_codec.call_names() == ["load"]

    def test_fixed_order(self, converter_config_factory, recording_codec):
        """Crop, resize and scale run in that order on each other's output."""
        config = converter_config_factory(crop="80x60", resize="40x30", scale=0.5)

        result = self.run_pipeline(config, recording_codec)

        assert result.steps == ("crop", "resize", "scale")
        assert recording_codec.call_names() == ["load", "extract", "resize", "resize"]
        assert recording_codec.calls[1][1] == CropRectangle(80, 60, 10, 20)
        assert recording_codec.calls[2][1] == ResizeSpec(40, 30, "cover", "center")
        assert recording_codec.calls[3][1] == ResizeSpec(20, 15, "fill", "center")
        assert result.dimensions == ImageDimensions(20, 15)

    def test_scale_uses_current_dimensions(
        self, converter_config_factory, recording_codec
    ):
        """Scaling applies to the cropped size, not the original."""
        config = converter_config_factory(crop="50x50+0+0", scale=0.5)

        result = self.run_pipeline(config, recording_codec, size=(100, 100))

        assert result.dimensions == ImageDimensions(25, 25)

    def test_scale_of_one_is_skipped(self, converter_config_factory, recording_codec):
        result = self.run_pipeline(
            converter_config_factory(scale=1.0), recording_codec
        )
        assert "scale" not in result.steps
        assert "resize" not in recording_codec.call_names()

    def test_resize_passes_fit_and_position(
        self, converter_config_factory, recording_codec
    ):
        config = converter_config_factory(
            resize="60x20", fit="contain", position="south"
        )

        self.run_pipeline(config, recording_codec)

        assert recording_codec.calls[-1] == (
            "resize",
            ResizeSpec(60, 20, "contain", "south"),
        )

    @pytest.mark.parametrize("resize", ["0x100", "big", "100"])
    def test_unusable_resize_is_skipped(
        self, converter_config_factory, recording_codec, resize
    ):
        result = self.run_pipeline(
            converter_config_factory(resize=resize), recording_codec
        )
        assert result.steps == ()

    def test_anchored_crop_uses_position(
        self, converter_config_factory, recording_codec
    ):
        config = converter_config_factory(crop="20x10", position="northeast")

        self.run_pipeline(config, recording_codec, size=(100, 50))

        assert recording_codec.calls[1] == ("extract", CropRectangle(20, 10, 80, 0))

    def test_oversized_crop_fails_file(
        self, converter_config_factory, recording_codec
    ):
        """A crop larger than the image stops the file before resize."""
        config = converter_config_factory(crop="200x200", resize="10x10")

        with pytest.raises(DimensionError):
            self.run_pipeline(config, recording_codec)

        assert recording_codec.call_names() == ["load"]

    def test_malformed_crop_fails_file(
        self, converter_config_factory, recording_codec
    ):
        config = converter_config_factory(crop="ten by ten", scale=0.5)

        with pytest.raises(GeometryParseError):
            self.run_pipeline(config, recording_codec)

        assert recording_codec.call_names() == ["load"]

    def test_process_file_writes_output(self, converter_config_factory, tmp_path):
        codec = RecordingCodec()
        encode_config = EncodeConfig(quality=50, lossless=True)
        config = converter_config_factory(scale=0.5, encode_config=encode_config)
        pipeline = TransformPipeline(config, codec)

        output = pipeline.process_file(tmp_path / "photo.jpg")

        assert output == tmp_path / "photo.webp"
        assert codec.call_names() == ["load", "resize", "encode", "write"]
        assert ("encode", encode_config) in codec.calls
        assert codec.written[output] == b"50x50"

    def test_process_file_crop_failure_writes_nothing(
        self, converter_config_factory, tmp_path
    ):
        codec = RecordingCodec()
        pipeline = TransformPipeline(converter_config_factory(crop="101x5"), codec)

        with pytest.raises(DimensionError):
            pipeline.process_file(tmp_path / "photo.png")

        assert codec.written == {}


class TestPipelineWithPillow:
    """End-to-end pipeline runs on real images."""

    def test_crop_resize_scale(self, converter_config_factory, tmp_path):
        source = create_image(tmp_path / "wide.png", size=(200, 100))
        config = converter_config_factory(
            crop="160x100", resize="80x50", scale=0.5, position="west"
        )

        output = TransformPipeline(config, PillowCodec()).process_file(source)

        assert output == tmp_path / "wide.webp"
        with Image.open(output) as result:
            assert result.format == "WEBP"
            assert result.size == (40, 25)

    def test_webp_input_is_reencoded(self, converter_config_factory, tmp_path):
        source = create_image(tmp_path / "pic.webp", size=(30, 30))
        config = converter_config_factory(include_webp=True)

        output = TransformPipeline(config, PillowCodec()).process_file(source)

        assert output == tmp_path / "optimized-pic.webp"
        assert source.exists()
        with Image.open(output) as result:
            assert result.size == (30, 30)
