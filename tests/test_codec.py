"""Tests for the Pillow codec."""

import io

import pytest
from PIL import Image

from tests.test_fixtures import create_corrupt_image, create_image
from webp_convert.codecs.pillow_codec import PillowCodec
from webp_convert.config import EncodeConfig
from webp_convert.errors import DecodeError
from webp_convert.types import CropRectangle, ImageDimensions, ResizeSpec


@pytest.fixture
def codec():
    return PillowCodec()


def test_load_returns_dimensions(codec, tmp_path):
    path = create_image(tmp_path / "a.png", size=(64, 32))

    dimensions, handle = codec.load(path)

    assert dimensions == ImageDimensions(64, 32)
    assert handle.mode == "RGB"


def test_load_keeps_alpha(codec, tmp_path):
    path = create_image(tmp_path / "a.png", size=(8, 8), color=(0, 0, 0, 0), mode="RGBA")

    _, handle = codec.load(path)

    assert handle.mode == "RGBA"


def test_load_palette_image(codec, tmp_path):
    path = create_image(tmp_path / "p.png", size=(8, 8), color=3, mode="P")

    _, handle = codec.load(path)

    assert handle.mode in {"RGB", "RGBA"}


def test_load_corrupt_file(codec, tmp_path):
    path = create_corrupt_image(tmp_path / "bad.png")

    with pytest.raises(DecodeError, match="Cannot decode"):
        codec.load(path)


def test_load_missing_file(codec, tmp_path):
    with pytest.raises(DecodeError):
        codec.load(tmp_path / "missing.png")


def test_extract(codec):
    handle = Image.new("RGB", (100, 50))

    cropped = codec.extract(handle, CropRectangle(20, 10, 80, 0))

    assert codec.dimensions(cropped) == ImageDimensions(20, 10)
    assert handle.size == (100, 50)


@pytest.mark.parametrize(
    "fit, expected",
    [
        ("cover", (50, 50)),
        ("contain", (50, 50)),
        ("fill", (50, 50)),
        ("inside", (50, 25)),
        ("outside", (100, 50)),
    ],
)
def test_resize_fit_modes(codec, fit, expected):
    handle = Image.new("RGB", (200, 100))

    resized = codec.resize(handle, ResizeSpec(50, 50, fit=fit))

    assert resized.size == expected


def test_contain_pads_opaque_black_for_rgba(codec):
    handle = Image.new("RGBA", (200, 100), color=(255, 0, 0, 255))

    resized = codec.resize(handle, ResizeSpec(50, 50, fit="contain", position="north"))

    assert resized.getpixel((0, 49)) == (0, 0, 0, 255)
    assert resized.getpixel((25, 0)) == (255, 0, 0, 255)


def test_cover_respects_position(codec):
    handle = Image.new("RGB", (200, 100), color=(0, 0, 255))
    handle.paste((255, 0, 0), (0, 0, 100, 100))

    west = codec.resize(handle, ResizeSpec(10, 10, fit="cover", position="west"))
    east = codec.resize(handle, ResizeSpec(10, 10, fit="cover", position="east"))

    assert west.getpixel((5, 5)) == (255, 0, 0)
    assert east.getpixel((5, 5)) == (0, 0, 255)


def test_resize_unknown_fit(codec):
    with pytest.raises(ValueError, match="Unsupported fit"):
        codec.resize(Image.new("RGB", (4, 4)), ResizeSpec(2, 2, fit="stretch"))


def test_encode_webp(codec):
    handle = Image.new("RGB", (16, 16), color=(10, 20, 30))

    data = codec.encode_webp(handle, EncodeConfig(quality=50, effort=0))

    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "WEBP"
        assert decoded.size == (16, 16)


def test_lossless_encode_is_exact(codec):
    handle = Image.new("RGB", (8, 8), color=(10, 200, 30))

    data = codec.encode_webp(handle, EncodeConfig(lossless=True))

    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.convert("RGB").getpixel((3, 3)) == (10, 200, 30)


def test_write(codec, tmp_path):
    path = tmp_path / "out.webp"

    codec.write(path, b"data")

    assert path.read_bytes() == b"data"
