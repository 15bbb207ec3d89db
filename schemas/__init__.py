"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain. They are shared across all application layers:
- API (routers, dependencies)
- Services (business logic)
- Core (stores, region encoding, naming)
"""

# Common models (core data structures)
from .common import PixelRect, Point, Selection, Size

# Gallery models
from .gallery import (
    DownloadPlanItem,
    DownloadPlanRequest,
    DownloadPlanResponse,
    GalleryResponse,
    GeneratedImageInfo,
)

# Image models
from .image import (
    ImageImportRequest,
    ImageSelectionState,
    OverlayRequest,
    OverlayResponse,
    RegionEncodeRequest,
    RegionEncodeResponse,
    SelectionsResponse,
    SelectionsUpdateRequest,
    UploadedImageInfo,
)

# System models
from .system import CredentialRequest, CredentialResponse, SystemStatus

# Translation models
from .translation import (
    BatchResponse,
    LanguageAddRequest,
    LanguagesRequest,
    LanguagesResponse,
    MessageInfo,
    OutputSettings,
    OutputSettingsUpdate,
    StatusResponse,
    TranslateRequest,
)

__all__ = [
    # Common models
    "Selection",
    "Point",
    "Size",
    "PixelRect",
    # Image models
    "UploadedImageInfo",
    "ImageImportRequest",
    "ImageSelectionState",
    "SelectionsUpdateRequest",
    "SelectionsResponse",
    "RegionEncodeRequest",
    "RegionEncodeResponse",
    "OverlayRequest",
    "OverlayResponse",
    # Translation models
    "OutputSettings",
    "OutputSettingsUpdate",
    "TranslateRequest",
    "BatchResponse",
    "StatusResponse",
    "MessageInfo",
    "LanguagesRequest",
    "LanguageAddRequest",
    "LanguagesResponse",
    # Gallery models
    "GeneratedImageInfo",
    "GalleryResponse",
    "DownloadPlanRequest",
    "DownloadPlanItem",
    "DownloadPlanResponse",
    # System models
    "SystemStatus",
    "CredentialRequest",
    "CredentialResponse",
]
