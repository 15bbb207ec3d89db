"""
Gallery Service - Listing and downloading generated images.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from api.exceptions import GeneratedImageNotFoundException, InvalidEncodingError
from core.constants import DownloadConstants, ImageConstants
from core.gallery_buffer import GalleryBuffer, GeneratedImage
from core.image import ImageConverters, ImageProcessors
from core.naming import build_download_schedule, output_filename
from core.session import TranslationSession
from schemas import DownloadPlanResponse, GeneratedImageInfo

logger = logging.getLogger(__name__)

_MIME_ALIASES = {"image/jpg": "image/jpeg"}


class GalleryService:
    """Names, lists and serves generated images"""

    def __init__(
        self,
        gallery: GalleryBuffer,
        session: TranslationSession,
        stagger_ms: int = DownloadConstants.DEFAULT_STAGGER_MS,
        thumbnail_width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
    ):
        self.gallery = gallery
        self.session = session
        self.stagger_ms = stagger_ms
        self.thumbnail_width = thumbnail_width

    def _thumbnail(self, image: GeneratedImage) -> Optional[str]:
        try:
            _, data = ImageConverters.decode_data_url(image.url)
            return ImageProcessors.create_thumbnail(data, self.thumbnail_width)
        except (InvalidEncodingError, OSError, ValueError) as e:
            logger.warning(f"No thumbnail for {image.id}: {e}")
            return None

    def to_info(self, image: GeneratedImage, include_thumbnail: bool = False) -> GeneratedImageInfo:
        return GeneratedImageInfo(
            id=image.id,
            original_image_id=image.original_image_id,
            original_name=image.original_name,
            filename=output_filename(image.original_name, self.session.output_settings),
            mime_type=image.mime_type,
            description=image.description,
            created_at=image.created_at,
            thumbnail_base64=self._thumbnail(image) if include_thumbnail else None,
        )

    def list_images(
        self,
        limit: Optional[int] = None,
        original_image_id: Optional[str] = None,
        include_thumbnails: bool = False,
    ) -> List[GeneratedImageInfo]:
        images = self.gallery.list_images(limit=limit, original_image_id=original_image_id)
        return [self.to_info(image, include_thumbnails) for image in images]

    def get(self, image_id: str) -> GeneratedImage:
        image = self.gallery.get(image_id)
        if image is None:
            raise GeneratedImageNotFoundException(image_id)
        return image

    def download(self, image_id: str) -> Tuple[bytes, str, str]:
        """
        Prepare a generated image for download.

        The bytes are re-encoded when the service returned a different format
        than the one configured.

        Returns:
            Tuple of (bytes, file name, mime type)
        """
        image = self.get(image_id)
        settings = self.session.output_settings
        filename = output_filename(image.original_name, settings)

        mime_type, data = ImageConverters.decode_data_url(image.url)
        mime_type = _MIME_ALIASES.get(mime_type, mime_type)

        if mime_type != settings.format.mime_type:
            logger.debug(f"Transcoding {image_id} from {mime_type} to {settings.format.value}")
            data = ImageConverters.transcode(data, settings.format, settings.quality)
            mime_type = settings.format.mime_type

        return data, filename, mime_type

    def download_plan(self, image_ids: Sequence[str]) -> DownloadPlanResponse:
        """Staggered download schedule for the chosen results (all when empty)"""
        images = self.gallery.get_many(image_ids) if image_ids else self.gallery.list_images()
        items = build_download_schedule(images, self.session.output_settings, self.stagger_ms)
        return DownloadPlanResponse(items=items, stagger_ms=self.stagger_ms)

    def clear(self):
        self.gallery.clear()
