"""
Tests for image conversion utilities
"""

import io

import pytest
from PIL import Image

from api.exceptions import InvalidEncodingError
from core.enums import OutputFormat
from core.image import ImageConverters


class TestDataUrls:
    def test_decode(self, test_png, test_data_url):
        mime_type, data = ImageConverters.decode_data_url(test_data_url)

        assert mime_type == "image/png"
        assert data == test_png

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "not a data url",
            "data:image/png,AAAA",
            "data:image/png;base64,",
            "data:image/png;base64,@@@@",
        ],
    )
    def test_malformed(self, value):
        with pytest.raises(InvalidEncodingError):
            ImageConverters.decode_data_url(value)


class TestTranscode:
    def test_png_to_jpeg(self, test_png):
        data = ImageConverters.transcode(test_png, OutputFormat.JPEG, quality=80)

        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "JPEG"
            assert img.size == (64, 48)

    def test_probe(self, test_png):
        assert ImageConverters.probe(test_png) == (64, 48, "PNG")
