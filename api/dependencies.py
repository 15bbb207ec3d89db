"""
Shared FastAPI dependencies for Image Translation Studio.
Centralizes access to the managers stored in app state.
"""

import logging
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from config import Settings
from core.gallery_buffer import GalleryBuffer
from core.image_manager import ImageManager
from core.session import TranslationSession
from services.credentials import SettingsCredentialProvider
from services.gallery_service import GalleryService
from services.image_service import ImageService
from services.translation_service import TranslationService

logger = logging.getLogger(__name__)


class Managers:
    """Container for all manager instances."""

    def __init__(
        self,
        image_manager: ImageManager,
        gallery: GalleryBuffer,
        session: TranslationSession,
        credentials: SettingsCredentialProvider,
        translation_service: TranslationService,
        settings: Settings,
    ):
        self.image_manager = image_manager
        self.gallery = gallery
        self.session = session
        self.credentials = credentials
        self.translation_service = translation_service
        self.settings = settings


def get_managers(request: Request) -> Managers:
    """
    Get all manager instances from app state.

    Args:
        request: FastAPI request object

    Returns:
        Managers container with all manager instances

    Raises:
        HTTPException: If managers not initialized
    """
    try:
        return Managers(
            image_manager=request.app.state.image_manager,
            gallery=request.app.state.gallery,
            session=request.app.state.session,
            credentials=request.app.state.credentials,
            translation_service=request.app.state.translation_service,
            settings=request.app.state.settings,
        )
    except AttributeError as e:
        logger.error(f"Managers not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Managers not initialized"
        )


def get_image_manager(managers: Managers = Depends(get_managers)) -> ImageManager:
    """Get ImageManager instance."""
    return managers.image_manager


def get_gallery(managers: Managers = Depends(get_managers)) -> GalleryBuffer:
    """Get GalleryBuffer instance."""
    return managers.gallery


def get_session(managers: Managers = Depends(get_managers)) -> TranslationSession:
    """Get the translation session."""
    return managers.session


def get_credentials(managers: Managers = Depends(get_managers)) -> SettingsCredentialProvider:
    """Get the credential provider."""
    return managers.credentials


def get_translation_service(managers: Managers = Depends(get_managers)) -> TranslationService:
    """
    Get the translation service.

    The service is long-lived (it owns the cancellation flag), so it is
    built once in the lifespan handler rather than per request.
    """
    return managers.translation_service


def get_config(request: Request) -> Dict[str, Any]:
    """Get application configuration (secrets redacted)."""
    try:
        return request.app.state.config
    except AttributeError:
        logger.warning("Config not found in app state, using defaults")
        return {}


# Service layer dependencies
def get_image_service(
    image_manager: ImageManager = Depends(get_image_manager),
    session: TranslationSession = Depends(get_session),
) -> ImageService:
    """
    Get image service instance.

    Args:
        image_manager: Image manager dependency
        session: Translation session dependency

    Returns:
        ImageService instance
    """
    return ImageService(image_manager=image_manager, session=session)


def get_gallery_service(managers: Managers = Depends(get_managers)) -> GalleryService:
    """
    Get gallery service instance.

    Args:
        managers: Managers container

    Returns:
        GalleryService instance
    """
    return GalleryService(
        gallery=managers.gallery,
        session=managers.session,
        stagger_ms=managers.settings.download.stagger_ms,
        thumbnail_width=managers.settings.image.thumbnail_width,
    )
