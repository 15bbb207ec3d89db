"""
Image Service - Business logic for uploaded images and their selections.
"""

import logging
from typing import List, Optional, Tuple

from api.exceptions import ImageNotFoundException, SelectionOutOfRangeException
from core.image_manager import ImageManager, UploadedImage
from core.region_encoder import RegionEncoder
from core.session import TranslationSession
from schemas import PixelRect, Point, Selection, Size, UploadedImageInfo

logger = logging.getLogger(__name__)


class ImageService:
    """
    Service for image ingestion and region selection.

    Newly ingested images are selected for translation right away; removed
    images are dropped from the selection.
    """

    def __init__(self, image_manager: ImageManager, session: TranslationSession):
        self.image_manager = image_manager
        self.session = session

    def to_info(self, image: UploadedImage) -> UploadedImageInfo:
        return UploadedImageInfo(
            id=image.id,
            name=image.name,
            mime_type=image.mime_type,
            width=image.width,
            height=image.height,
            size_bytes=image.size_bytes,
            selections=list(image.selections),
            selected=self.session.is_selected(image.id),
            created_at=image.created_at,
        )

    def ingest(self, name: str, data: bytes, mime_type: Optional[str] = None) -> UploadedImage:
        image = self.image_manager.store(name, data, mime_type)
        self.session.select_image(image.id)
        return image

    def import_data_url(self, name: str, data_url: str) -> UploadedImage:
        image = self.image_manager.store_data_url(name, data_url)
        self.session.select_image(image.id)
        return image

    def get(self, image_id: str) -> UploadedImage:
        return self.image_manager.require(image_id)

    def list_images(self) -> List[UploadedImage]:
        return self.image_manager.list_images()

    def remove(self, image_id: str):
        """Remove an image; results generated from it stay in the gallery"""
        if not self.image_manager.delete(image_id):
            raise ImageNotFoundException(image_id)
        self.session.deselect_image(image_id)

    def toggle(self, image_id: str) -> bool:
        self.image_manager.require(image_id)
        return self.session.toggle_image(image_id)

    def set_selections(self, image_id: str, selections: List[Selection]) -> UploadedImage:
        return self.image_manager.set_selections(image_id, selections)

    def clear_selections(self, image_id: str) -> UploadedImage:
        return self.image_manager.set_selections(image_id, [])

    def remove_selection(self, image_id: str, index: int) -> UploadedImage:
        image = self.image_manager.require(image_id)
        if index < 0 or index >= len(image.selections):
            raise SelectionOutOfRangeException(index)

        remaining = [s for i, s in enumerate(image.selections) if i != index]
        return self.image_manager.set_selections(image_id, remaining)

    def encode_selection(
        self, image_id: str, start: Point, end: Point, display: Size
    ) -> Tuple[Optional[Selection], UploadedImage]:
        """
        Encode a drag gesture and append it to the image's selections.

        Returns:
            Tuple of (new selection or None if discarded, updated image)
        """
        image = self.image_manager.require(image_id)
        selection = RegionEncoder.encode_drag(start, end, display)
        if selection is None:
            return None, image

        image = self.image_manager.set_selections(image_id, [*image.selections, selection])
        logger.info(f"Added selection {selection.to_dict()} to {image_id}")
        return selection, image

    def overlay(self, image_id: str, display: Size) -> List[PixelRect]:
        image = self.image_manager.require(image_id)
        return RegionEncoder.overlay(image.selections, display)
