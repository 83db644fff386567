# tests/test_image_tools.py

"""
Tests for image compression, resizing and format conversion.
"""

import io

import pytest
from PIL import Image

from portfolio_service.core.image_tools import compress_image, compressed_name, fit_within
from portfolio_service.schemas.pdf_schemas import ImageCompressionOptions, ImageFormat
from portfolio_service.utils.exceptions import ImageProcessingError, ValidationFailure

from .conftest import make_image


def open_result(content: bytes) -> Image.Image:
    return Image.open(io.BytesIO(content))


class TestFitWithin:
    """Test cases for bounding box resizing."""

    def test_shrinks_preserving_ratio(self):
        assert fit_within((4000, 3000), 1000, None) == (1000, 750)
        assert fit_within((4000, 3000), 1000, 500) == (667, 500)

    def test_never_enlarges(self):
        assert fit_within((200, 100), 1000, 1000) == (200, 100)

    def test_no_bounds(self):
        assert fit_within((321, 123), None, None) == (321, 123)


class TestCompressImage:
    """Test cases for the image compressor."""

    def test_png_to_jpeg(self):
        data = make_image((300, 200), mode="RGBA")
        result = compress_image(data, "photo.png", ImageCompressionOptions(quality=70))

        assert result.filename == "photo-compressed.jpg"
        assert result.media_type == "image/jpeg"
        img = open_result(result.content)
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert result.compressed_size == len(result.content)
        assert result.original_size == len(data)

    def test_resize(self):
        data = make_image((800, 400), fmt="JPEG")
        result = compress_image(
            data, "wide.jpg", ImageCompressionOptions(max_width=200)
        )

        assert (result.width, result.height) == (200, 100)
        assert open_result(result.content).size == (200, 100)

    def test_keep_original_format(self):
        data = make_image((50, 50), fmt="PNG")
        result = compress_image(
            data, "icon.png", ImageCompressionOptions(output_format=ImageFormat.ORIGINAL)
        )

        assert result.filename == "icon-compressed.png"
        assert open_result(result.content).format == "PNG"

    def test_webp_output(self):
        result = compress_image(
            make_image(), "pic.bmp", ImageCompressionOptions(output_format=ImageFormat.WEBP)
        )

        assert result.filename == "pic-compressed.webp"
        assert result.media_type == "image/webp"

    def test_unknown_original_format_falls_back_to_jpeg(self):
        data = make_image(fmt="BMP")
        result = compress_image(
            data, "old.bmp", ImageCompressionOptions(output_format=ImageFormat.ORIGINAL)
        )

        assert result.filename == "old-compressed.jpg"

    def test_corrupt_image(self):
        with pytest.raises(ImageProcessingError, match="Unsupported or corrupted"):
            compress_image(b"not an image", "bad.png", ImageCompressionOptions())

    def test_empty_upload(self):
        with pytest.raises(ValidationFailure):
            compress_image(b"", "empty.png", ImageCompressionOptions())

    def test_compressed_name(self):
        assert compressed_name("holiday.photo.jpeg", ".jpg") == "holiday.photo-compressed.jpg"
