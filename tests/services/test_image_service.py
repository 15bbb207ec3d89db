"""
Tests for ImageService
"""

import pytest

from api.exceptions import ImageNotFoundException, SelectionOutOfRangeException
from schemas import Point, Selection, Size


@pytest.fixture
def image(image_service, test_png):
    return image_service.ingest("photo.png", test_png, "image/png")


class TestImageService:
    def test_ingest_selects_image(self, image_service, session, image):
        assert session.selected_image_ids == [image.id]
        assert image_service.to_info(image).selected is True

    def test_import_data_url(self, image_service, session, test_data_url):
        image = image_service.import_data_url("pasted.png", test_data_url)

        assert session.is_selected(image.id)

    def test_toggle(self, image_service, image):
        assert image_service.toggle(image.id) is False
        assert image_service.toggle(image.id) is True

    def test_toggle_unknown(self, image_service):
        with pytest.raises(ImageNotFoundException):
            image_service.toggle("img_missing")

    def test_remove_deselects(self, image_service, session, image):
        image_service.remove(image.id)

        assert session.selected_image_ids == []
        with pytest.raises(ImageNotFoundException):
            image_service.remove(image.id)

    def test_encode_selection_appends(self, image_service, image):
        display = Size(width=500, height=400)

        first, _ = image_service.encode_selection(image.id, Point(x=0, y=0), Point(x=50, y=40), display)
        second, updated = image_service.encode_selection(
            image.id, Point(x=250, y=200), Point(x=500, y=400), display
        )

        assert first == Selection(x=0, y=0, width=100, height=100)
        assert second == Selection(x=500, y=500, width=500, height=500)
        assert updated.selections == [first, second]

    def test_encode_noise_is_discarded(self, image_service, image):
        selection, updated = image_service.encode_selection(
            image.id, Point(x=10, y=10), Point(x=13, y=40), Size(width=500, height=400)
        )

        assert selection is None
        assert updated.selections == []

    def test_remove_selection(self, image_service, image):
        boxes = [
            Selection(x=0, y=0, width=10, height=10),
            Selection(x=20, y=20, width=10, height=10),
        ]
        image_service.set_selections(image.id, boxes)

        updated = image_service.remove_selection(image.id, 0)

        assert updated.selections == [boxes[1]]
        with pytest.raises(SelectionOutOfRangeException):
            image_service.remove_selection(image.id, 5)

    def test_clear_selections(self, image_service, image):
        image_service.set_selections(image.id, [Selection(x=0, y=0, width=10, height=10)])

        assert image_service.clear_selections(image.id).selections == []

    def test_overlay(self, image_service, image):
        image_service.set_selections(image.id, [Selection(x=500, y=0, width=500, height=1000)])

        rects = image_service.overlay(image.id, Size(width=200, height=100))

        assert len(rects) == 1
        assert rects[0].left == pytest.approx(100)
        assert rects[0].height == pytest.approx(100)
