"""
Image processing operations.

Handles image manipulation tasks:
- Thumbnail creation for listings
"""

import io
import logging

from PIL import Image

from core.constants import ImageConstants
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)


class ImageProcessors:
    """Image operations used by the listing endpoints."""

    @staticmethod
    def create_thumbnail(data: bytes, width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH) -> str:
        """
        Create a JPEG thumbnail from encoded image bytes.

        Args:
            data: Encoded image (any format Pillow reads)
            width: Maximum thumbnail width in pixels (aspect ratio kept)

        Returns:
            Thumbnail as base64 string
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                pil_image = img.convert("RGB")

            aspect_ratio = pil_image.height / pil_image.width
            height = max(1, int(width * aspect_ratio))
            pil_image.thumbnail((width, height), Image.Resampling.LANCZOS)

            buffer = io.BytesIO()
            pil_image.save(buffer, format="JPEG", quality=ImageConstants.THUMBNAIL_JPEG_QUALITY)
            return ImageConverters.to_base64(buffer.getvalue())

        except Exception as e:
            logger.error(f"Failed to create thumbnail: {e}")
            raise
