"""
Image API Router - Uploaded images and region selections
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint
from core.constants import ImageConstants
from schemas import (
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

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload")
@safe_endpoint
async def upload_images(
    files: List[UploadFile] = File(...), image_service=Depends(get_image_service)
) -> List[UploadedImageInfo]:
    """
    Upload one or more images.

    Files whose content type is not image/* are skipped. Every stored image
    is selected for translation.
    """
    stored = []
    for file in files:
        content_type = file.content_type or ""
        if not content_type.startswith(ImageConstants.ACCEPTED_MIME_PREFIX):
            logger.warning(f"Skipping {file.filename}: unsupported type {content_type or 'unknown'}")
            continue

        contents = await file.read()
        image = image_service.ingest(file.filename or "image", contents, content_type)
        stored.append(image_service.to_info(image))

    logger.info(f"Uploaded {len(stored)}/{len(files)} files")
    return stored


@router.post("/import")
@safe_endpoint
async def import_image(
    request: ImageImportRequest, image_service=Depends(get_image_service)
) -> UploadedImageInfo:
    """Import an image embedded as a base64 data URL"""
    image = image_service.import_data_url(request.name, request.data_url)
    return image_service.to_info(image)


@router.get("/list")
@safe_endpoint
async def list_images(image_service=Depends(get_image_service)) -> List[UploadedImageInfo]:
    """List uploaded images in upload order"""
    return [image_service.to_info(image) for image in image_service.list_images()]


@router.get("/{image_id}")
@safe_endpoint
async def get_image(image_id: str, image_service=Depends(get_image_service)) -> UploadedImageInfo:
    return image_service.to_info(image_service.get(image_id))


@router.delete("/{image_id}")
@safe_endpoint
async def delete_image(image_id: str, image_service=Depends(get_image_service)) -> dict:
    """Remove an uploaded image; generated results are kept"""
    image_service.remove(image_id)
    return {"success": True, "message": f"Image {image_id} removed"}


@router.post("/{image_id}/toggle")
@safe_endpoint
async def toggle_image(
    image_id: str, image_service=Depends(get_image_service)
) -> ImageSelectionState:
    """Include or exclude an image from the next batch"""
    selected = image_service.toggle(image_id)
    return ImageSelectionState(image_id=image_id, selected=selected)


@router.put("/{image_id}/selections")
@safe_endpoint
async def replace_selections(
    image_id: str, request: SelectionsUpdateRequest, image_service=Depends(get_image_service)
) -> SelectionsResponse:
    image = image_service.set_selections(image_id, request.selections)
    return SelectionsResponse(image_id=image.id, selections=image.selections)


@router.delete("/{image_id}/selections")
@safe_endpoint
async def clear_selections(
    image_id: str, image_service=Depends(get_image_service)
) -> SelectionsResponse:
    """Clear all selections (translate the whole image)"""
    image = image_service.clear_selections(image_id)
    return SelectionsResponse(image_id=image.id, selections=image.selections)


@router.delete("/{image_id}/selections/{index}")
@safe_endpoint
async def remove_selection(
    image_id: str, index: int, image_service=Depends(get_image_service)
) -> SelectionsResponse:
    image = image_service.remove_selection(image_id, index)
    return SelectionsResponse(image_id=image.id, selections=image.selections)


@router.post("/{image_id}/selections/encode")
@safe_endpoint
async def encode_selection(
    image_id: str, request: RegionEncodeRequest, image_service=Depends(get_image_service)
) -> RegionEncodeResponse:
    """
    Encode a drag gesture on the displayed image into a normalized selection.

    Drags of 5 display pixels or less in either direction are discarded;
    the response then carries selection=None and the unchanged list.
    """
    selection, image = image_service.encode_selection(
        image_id, request.start, request.end, request.display
    )
    return RegionEncodeResponse(image_id=image.id, selection=selection, selections=image.selections)


@router.post("/{image_id}/selections/overlay")
@safe_endpoint
async def overlay_selections(
    image_id: str, request: OverlayRequest, image_service=Depends(get_image_service)
) -> OverlayResponse:
    """Pixel rectangles of the stored selections at the given display size"""
    rects = image_service.overlay(image_id, request.display)
    return OverlayResponse(image_id=image_id, rects=rects)
