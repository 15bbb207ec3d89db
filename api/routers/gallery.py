"""
Gallery API Router - Generated images and downloads
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from api.dependencies import get_gallery_service
from api.exceptions import safe_endpoint
from core.naming import content_disposition
from schemas import DownloadPlanRequest, DownloadPlanResponse, GalleryResponse, GeneratedImageInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/list")
@safe_endpoint
async def list_generated(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    original_image_id: Optional[str] = Query(None),
    thumbnails: bool = Query(False, description="Include JPEG thumbnails"),
    gallery_service=Depends(get_gallery_service),
) -> GalleryResponse:
    """List generated images, newest first"""
    images = gallery_service.list_images(
        limit=limit, original_image_id=original_image_id, include_thumbnails=thumbnails
    )
    return GalleryResponse(images=images, statistics=gallery_service.gallery.get_statistics())


@router.post("/download-plan")
@safe_endpoint
async def download_plan(
    request: DownloadPlanRequest, gallery_service=Depends(get_gallery_service)
) -> DownloadPlanResponse:
    """Staggered download schedule for several results"""
    return gallery_service.download_plan(request.image_ids)


@router.post("/clear")
@safe_endpoint
async def clear_gallery(gallery_service=Depends(get_gallery_service)) -> dict:
    """Clear all generated images"""
    gallery_service.clear()

    return {"success": True, "message": "Gallery cleared"}


@router.get("/{image_id}")
@safe_endpoint
async def get_generated(
    image_id: str, gallery_service=Depends(get_gallery_service)
) -> GeneratedImageInfo:
    return gallery_service.to_info(gallery_service.get(image_id), include_thumbnail=True)


@router.get("/{image_id}/download")
@safe_endpoint
async def download_generated(image_id: str, gallery_service=Depends(get_gallery_service)):
    """Download a generated image under its configured output name"""
    data, filename, mime_type = gallery_service.download(image_id)

    logger.info(f"Download {image_id} as {filename} ({len(data)} bytes)")
    return Response(
        content=data,
        media_type=mime_type,
        headers={"Content-Disposition": content_disposition(filename)},
    )
