"""
Translation API Router - Batch control, target languages and output settings
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_credentials,
    get_gallery,
    get_gallery_service,
    get_session,
    get_translation_service,
)
from api.exceptions import safe_endpoint
from core.constants import TranslationConstants
from schemas import (
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

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/start")
@safe_endpoint
async def start_translation(
    request: TranslateRequest,
    translation_service=Depends(get_translation_service),
    gallery_service=Depends(get_gallery_service),
) -> BatchResponse:
    """
    Run a translation batch over the selected images.

    Returns started=False without doing anything when a batch is already
    processing or no image is selected.
    """
    outcome = await translation_service.start(request.instruction)

    return BatchResponse(
        started=outcome.started,
        status=outcome.status,
        message=outcome.message,
        error_message=outcome.error_message,
        generated=[gallery_service.to_info(image) for image in outcome.generated],
    )


@router.post("/cancel")
@safe_endpoint
async def cancel_translation(translation_service=Depends(get_translation_service)) -> dict:
    """Stop the running batch before its next image"""
    cancelled = translation_service.cancel()
    return {
        "success": cancelled,
        "message": "Cancellation requested" if cancelled else "No batch is processing",
    }


@router.get("/status")
@safe_endpoint
async def get_status(
    session=Depends(get_session),
    gallery=Depends(get_gallery),
    credentials=Depends(get_credentials),
) -> StatusResponse:
    return StatusResponse(
        status=session.status,
        error_message=session.error_message,
        selected_image_ids=list(session.selected_image_ids),
        target_languages=list(session.target_languages),
        generated_count=len(gallery),
        credential_ready=credentials.has_credential(),
    )


@router.get("/messages")
@safe_endpoint
async def get_messages(session=Depends(get_session)) -> List[MessageInfo]:
    """Conversation log, oldest first"""
    return [
        MessageInfo(
            id=m.id,
            role=m.role,
            content=m.content,
            is_error=m.is_error,
            created_at=m.created_at,
        )
        for m in session.messages
    ]


@router.get("/languages")
@safe_endpoint
async def get_languages(session=Depends(get_session)) -> LanguagesResponse:
    return LanguagesResponse(languages=session.target_languages)


@router.put("/languages")
@safe_endpoint
async def set_languages(
    request: LanguagesRequest, session=Depends(get_session)
) -> LanguagesResponse:
    """Replace the target languages (an empty list means a single pass)"""
    session.set_languages(request.languages)
    logger.info(f"Target languages set to {session.target_languages}")
    return LanguagesResponse(languages=session.target_languages)


@router.post("/languages")
@safe_endpoint
async def add_language(
    request: LanguageAddRequest, session=Depends(get_session)
) -> LanguagesResponse:
    session.add_language(request.language)
    return LanguagesResponse(languages=session.target_languages)


@router.get("/languages/common")
@safe_endpoint
async def get_common_languages() -> LanguagesResponse:
    """Suggested languages for quick selection"""
    return LanguagesResponse(languages=list(TranslationConstants.COMMON_LANGUAGES))


@router.delete("/languages/{language}")
@safe_endpoint
async def remove_language(language: str, session=Depends(get_session)) -> LanguagesResponse:
    # Removing an unknown language is a no-op
    session.remove_language(language)
    return LanguagesResponse(languages=session.target_languages)


@router.get("/settings")
@safe_endpoint
async def get_output_settings(session=Depends(get_session)) -> OutputSettings:
    return session.output_settings


@router.patch("/settings")
@safe_endpoint
async def update_output_settings(
    request: OutputSettingsUpdate, session=Depends(get_session)
) -> OutputSettings:
    """Partially update output settings; a running batch keeps its snapshot"""
    settings = session.update_settings(**request.model_dump(exclude_none=True))
    logger.info(f"Output settings updated: {settings.model_dump(mode='json')}")
    return settings
