"""
Generated image (gallery) API models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class GeneratedImageInfo(BaseModel):
    """Generated image metadata, named for display and download"""

    id: str
    original_image_id: str
    original_name: str
    filename: str
    mime_type: str
    description: str
    created_at: datetime
    thumbnail_base64: Optional[str] = None


class GalleryResponse(BaseModel):
    images: List[GeneratedImageInfo]
    statistics: dict


class DownloadPlanRequest(BaseModel):
    """Results to download; empty means every result"""

    image_ids: List[str] = Field(default_factory=list)


class DownloadPlanItem(BaseModel):
    image_id: str
    filename: str
    url: str
    delay_ms: int


class DownloadPlanResponse(BaseModel):
    items: List[DownloadPlanItem]
    stagger_ms: int
