"""
Image Manager - In-memory store for uploaded images
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional, Sequence

from api.exceptions import (
    ImageNotFoundException,
    ImageStorageFullException,
    InvalidImageException,
)
from core.constants import ImageConstants
from core.image import ImageConverters, ImageProcessors
from schemas import Selection

logger = logging.getLogger(__name__)


@dataclass
class UploadedImage:
    """Uploaded image; only its selections change after ingestion"""

    id: str
    url: str  # data URL carrying mime type and bytes
    mime_type: str
    name: str
    selections: List[Selection] = field(default_factory=list)
    width: Optional[int] = None
    height: Optional[int] = None
    size_bytes: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @staticmethod
    def new_id() -> str:
        return f"{ImageConstants.ID_PREFIX}{uuid.uuid4().hex[:12]}"


class ImageManager:
    """Keeps uploaded images in memory, in upload order"""

    def __init__(
        self,
        max_size_mb: int = ImageConstants.DEFAULT_MAX_MEMORY_MB,
        max_images: int = ImageConstants.DEFAULT_MAX_IMAGES,
        thumbnail_width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
    ):
        """
        Initialize Image Manager

        Args:
            max_size_mb: Memory budget for stored image bytes
            max_images: Maximum number of stored images
            thumbnail_width: Width of listing thumbnails
        """
        self.max_size_bytes = max_size_mb * 1024 * 1024
        self.max_images = max_images
        self.thumbnail_width = thumbnail_width
        self.images: Dict[str, UploadedImage] = {}
        self.total_bytes = 0
        self.lock = RLock()

        logger.info(f"Image Manager initialized (max {max_images} images, {max_size_mb} MB)")

    def store(self, name: str, data: bytes, mime_type: Optional[str] = None) -> UploadedImage:
        """
        Ingest raw image bytes.

        Args:
            name: Original file name
            data: Encoded image bytes
            mime_type: Declared mime type; derived from the data when missing

        Returns:
            The stored UploadedImage

        Raises:
            InvalidImageException: If the data is not a readable image
            ImageStorageFullException: If a storage limit would be exceeded
        """
        if not data:
            raise InvalidImageException(f"{name} is empty")
        if mime_type and not mime_type.startswith(ImageConstants.ACCEPTED_MIME_PREFIX):
            raise InvalidImageException(f"{name} has unsupported type {mime_type}")

        width, height, pil_format = ImageConverters.probe(data)
        if not mime_type:
            mime_type = f"image/{pil_format.lower()}" if pil_format else ImageConstants.DEFAULT_MIME_TYPE

        image = UploadedImage(
            id=UploadedImage.new_id(),
            url=ImageConverters.to_data_url(data, mime_type),
            mime_type=mime_type,
            name=name,
            width=width,
            height=height,
            size_bytes=len(data),
        )
        return self.add(image)

    def store_data_url(self, name: str, data_url: str) -> UploadedImage:
        """Ingest an image given as a data URL"""
        mime_type, data = ImageConverters.decode_data_url(data_url)
        return self.store(name, data, mime_type)

    def add(self, image: UploadedImage) -> UploadedImage:
        """Add an already-built UploadedImage, enforcing storage limits"""
        with self.lock:
            if len(self.images) >= self.max_images:
                raise ImageStorageFullException({"max_images": self.max_images})
            if self.total_bytes + image.size_bytes > self.max_size_bytes:
                raise ImageStorageFullException({"max_size_bytes": self.max_size_bytes})

            self.images[image.id] = image
            self.total_bytes += image.size_bytes

        logger.info(f"Stored image {image.id} ({image.name}, {image.size_bytes} bytes)")
        return image

    def get(self, image_id: str) -> Optional[UploadedImage]:
        with self.lock:
            return self.images.get(image_id)

    def require(self, image_id: str) -> UploadedImage:
        """Get an image or raise ImageNotFoundException"""
        image = self.get(image_id)
        if image is None:
            raise ImageNotFoundException(image_id)
        return image

    def get_many(self, image_ids: Sequence[str]) -> List[UploadedImage]:
        """Get several images in upload order; unknown IDs are skipped"""
        wanted = set(image_ids)
        with self.lock:
            return [image for image in self.images.values() if image.id in wanted]

    def list_images(self) -> List[UploadedImage]:
        with self.lock:
            return list(self.images.values())

    def has_image(self, image_id: str) -> bool:
        with self.lock:
            return image_id in self.images

    def set_selections(self, image_id: str, selections: Sequence[Selection]) -> UploadedImage:
        """Replace the selections of an image"""
        with self.lock:
            image = self.require(image_id)
            image.selections = list(selections)

        logger.debug(f"Image {image_id} now has {len(image.selections)} selections")
        return image

    def delete(self, image_id: str) -> bool:
        """Remove an image; returns False if it was not stored"""
        with self.lock:
            image = self.images.pop(image_id, None)
            if image is None:
                return False
            self.total_bytes -= image.size_bytes

        logger.info(f"Removed image {image_id}")
        return True

    def create_thumbnail(self, image_id: str) -> str:
        """Base64 JPEG thumbnail of a stored image"""
        image = self.require(image_id)
        _, data = ImageConverters.decode_data_url(image.url)
        return ImageProcessors.create_thumbnail(data, self.thumbnail_width)

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "count": len(self.images),
                "max_images": self.max_images,
                "memory_mb": round(self.total_bytes / 1024 / 1024, 3),
                "max_memory_mb": round(self.max_size_bytes / 1024 / 1024, 3),
                "selections": sum(len(i.selections) for i in self.images.values()),
            }

    def cleanup(self):
        """Release all stored images"""
        with self.lock:
            self.images.clear()
            self.total_bytes = 0
        logger.info("Image Manager cleaned up")
