"""
Uploaded image API models.

This module contains models for image operations:
- Listing and importing uploaded images
- Editing selections and encoding drag gestures
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import PixelRect, Point, Selection, Size


class UploadedImageInfo(BaseModel):
    """Uploaded image metadata (no payload)"""

    id: str
    name: str
    mime_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    size_bytes: int
    selections: List[Selection] = Field(default_factory=list)
    selected: bool = False
    created_at: datetime


class ImageImportRequest(BaseModel):
    """Import an image from an embedded data URL"""

    name: str = Field(..., min_length=1)
    data_url: str = Field(..., description="data:<mime>;base64,<payload>")


class SelectionsUpdateRequest(BaseModel):
    """Replace the full selection list of an image"""

    selections: List[Selection] = Field(default_factory=list)


class SelectionsResponse(BaseModel):
    image_id: str
    selections: List[Selection]


class RegionEncodeRequest(BaseModel):
    """Drag gesture captured on the rendered image"""

    start: Point
    end: Point
    display: Size = Field(..., description="Displayed image size at mouse-up")


class RegionEncodeResponse(BaseModel):
    image_id: str
    selection: Optional[Selection] = Field(
        None, description="Encoded selection, or None when the drag was discarded as noise"
    )
    selections: List[Selection]


class OverlayRequest(BaseModel):
    display: Size


class OverlayResponse(BaseModel):
    image_id: str
    rects: List[PixelRect]


class ImageSelectionState(BaseModel):
    image_id: str
    selected: bool
