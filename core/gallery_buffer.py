"""
Gallery Buffer - Ordered collection of generated images
"""

import logging
import uuid
from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    """Single generated image; immutable once created"""

    id: str
    original_image_id: str  # weak back-reference, lookup only
    original_name: str
    url: str  # data URL
    mime_type: str
    description: str
    created_at: datetime

    @classmethod
    def create(
        cls,
        original_image_id: str,
        original_name: str,
        url: str,
        mime_type: str,
        description: str,
    ) -> "GeneratedImage":
        return cls(
            id=f"gen_{uuid.uuid4().hex[:12]}",
            original_image_id=original_image_id,
            original_name=original_name,
            url=url,
            mime_type=mime_type,
            description=description,
            created_at=datetime.now(),
        )


class GalleryBuffer:
    """
    Newest-first collection of generated images.

    Results accumulate for the whole session and are never pruned; each
    batch is placed in front of everything produced before it.
    """

    def __init__(self):
        self.buffer: deque = deque()
        self.total_batches = 0
        self.last_batch_at: Optional[datetime] = None

        # Thread safety (RLock allows reentrant locking)
        self.lock = RLock()

        logger.info("Gallery Buffer initialized")

    def add_batch(self, images: Sequence[GeneratedImage]) -> List[str]:
        """
        Prepend a batch of generated images, keeping their order within the batch.

        Args:
            images: Images produced by one remote call

        Returns:
            IDs of the added images
        """
        with self.lock:
            self.buffer.extendleft(reversed(list(images)))
            self.total_batches += 1
            self.last_batch_at = datetime.now()

            logger.debug(f"Added batch of {len(images)} generated images")
            return [image.id for image in images]

    def get(self, image_id: str) -> Optional[GeneratedImage]:
        """Get a generated image by ID"""
        with self.lock:
            for image in self.buffer:
                if image.id == image_id:
                    return image
        return None

    def get_many(self, image_ids: Sequence[str]) -> List[GeneratedImage]:
        """Get several images, in gallery order; unknown IDs are skipped"""
        wanted = set(image_ids)
        with self.lock:
            return [image for image in self.buffer if image.id in wanted]

    def list_images(
        self, limit: Optional[int] = None, original_image_id: Optional[str] = None
    ) -> List[GeneratedImage]:
        """
        List generated images, newest first.

        Args:
            limit: Maximum number of images to return
            original_image_id: Only results produced from this uploaded image

        Returns:
            List of generated images
        """
        with self.lock:
            images = list(self.buffer)

        if original_image_id:
            images = [i for i in images if i.original_image_id == original_image_id]

        if limit is not None:
            images = images[:limit]

        return images

    def __len__(self) -> int:
        with self.lock:
            return len(self.buffer)

    def get_statistics(self) -> Dict[str, Any]:
        """Get gallery statistics"""
        with self.lock:
            descriptions = Counter(image.description for image in self.buffer)
            return {
                "total": len(self.buffer),
                "batches": self.total_batches,
                "sources": len({image.original_image_id for image in self.buffer}),
                "by_description": dict(descriptions),
                "last_batch_at": self.last_batch_at.isoformat() if self.last_batch_at else None,
            }

    def clear(self):
        """Clear all generated images"""
        with self.lock:
            self.buffer.clear()
            self.total_batches = 0
            self.last_batch_at = None

            logger.info("Gallery buffer cleared")
