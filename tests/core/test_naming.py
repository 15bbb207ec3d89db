"""
Tests for output naming and download scheduling
"""

import pytest
from pydantic import ValidationError

from core.enums import OutputFormat
from core.gallery_buffer import GeneratedImage
from core.naming import (
    build_download_schedule,
    content_disposition,
    output_filename,
    strip_extension,
)
from schemas import OutputSettings


class TestOutputNaming:
    @pytest.mark.parametrize(
        "name,stem",
        [
            ("photo.png", "photo"),
            ("archive.tar.gz", "archive.tar"),
            ("no_extension", "no_extension"),
            ("dir.v1/scan", "dir.v1/scan"),
            (".hidden", ""),
        ],
    )
    def test_strip_extension(self, name, stem):
        assert strip_extension(name) == stem

    def test_prefix_suffix_and_format(self):
        settings = OutputSettings(prefix="tr_", suffix="_v2", format=OutputFormat.JPEG)

        assert output_filename("photo.PNG", settings) == "tr_photo_v2.jpeg"

    def test_defaults(self):
        assert output_filename("menu.JPG", OutputSettings()) == "translated_menu.png"

    def test_settings_are_immutable(self):
        settings = OutputSettings()

        with pytest.raises(ValidationError):
            settings.prefix = "changed_"


class TestContentDisposition:
    def test_ascii_name(self):
        assert content_disposition("tr_photo_v2.png") == (
            "attachment; filename=\"tr_photo_v2.png\"; filename*=UTF-8''tr_photo_v2.png"
        )

    def test_non_ascii_name_gets_fallback(self):
        header = content_disposition("translated_菜单.png")

        assert 'filename="translated___.png"' in header
        assert "filename*=UTF-8''translated_%E8%8F%9C%E5%8D%95.png" in header
        header.encode("latin-1")

    def test_quotes_and_breaks_are_neutralized(self):
        header = content_disposition('say "hi"\r\n.png')

        assert 'filename="say \\"hi\\"__.png"' in header
        assert "%22hi%22%0D%0A.png" in header
        assert "\r" not in header and "\n" not in header


class TestDownloadSchedule:
    def test_staggered_delays(self):
        images = [
            GeneratedImage.create("img_a", f"page{i}.png", "data:image/png;base64,AA==", "image/png", "d")
            for i in range(3)
        ]
        settings = OutputSettings(prefix="", suffix="_es")

        plan = build_download_schedule(images, settings, stagger_ms=400)

        assert [item.delay_ms for item in plan] == [0, 400, 800]
        assert [item.filename for item in plan] == ["page0_es.png", "page1_es.png", "page2_es.png"]
        assert plan[1].url == f"/api/gallery/{images[1].id}/download"

    def test_empty_schedule(self):
        assert build_download_schedule([], OutputSettings()) == []
