"""
Exception hierarchy and FastAPI exception handlers for Image Translation Studio.

Domain errors raised by services carry their own HTTP status code, so routers
never translate them by hand. register_exception_handlers() wires the
hierarchy into the application; safe_endpoint() guards router functions
against unexpected failures.
"""

import functools
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.constants import ErrorMessages

logger = logging.getLogger(__name__)


class TranslationStudioException(Exception):
    """Base class for all domain errors"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Image store errors
class ImageNotFoundException(TranslationStudioException):
    status_code = 404

    def __init__(self, image_id: str):
        super().__init__(ErrorMessages.IMAGE_NOT_FOUND.format(image_id=image_id), {"image_id": image_id})
        self.image_id = image_id


class GeneratedImageNotFoundException(TranslationStudioException):
    status_code = 404

    def __init__(self, image_id: str):
        super().__init__(
            ErrorMessages.GENERATED_IMAGE_NOT_FOUND.format(image_id=image_id), {"image_id": image_id}
        )
        self.image_id = image_id


class InvalidImageException(TranslationStudioException):
    status_code = 400

    def __init__(self, reason: str):
        super().__init__(ErrorMessages.INVALID_IMAGE.format(reason=reason))


class ImageStorageFullException(TranslationStudioException):
    status_code = 413

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorMessages.IMAGE_STORAGE_FULL, details)


class SelectionOutOfRangeException(TranslationStudioException):
    status_code = 404

    def __init__(self, index: int):
        super().__init__(ErrorMessages.SELECTION_OUT_OF_RANGE.format(index=index), {"index": index})


class CredentialRequiredException(TranslationStudioException):
    """Start refused until a credential has been (re)selected"""

    status_code = 401

    def __init__(self):
        super().__init__(ErrorMessages.CREDENTIAL_REQUIRED)


# Translation errors
class InvalidEncodingError(TranslationStudioException):
    """Embedded image data is not a data:<mime>;base64,<payload> URL"""

    status_code = 400

    def __init__(self, message: str = ErrorMessages.INVALID_ENCODING):
        super().__init__(message)


class RemoteCallError(TranslationStudioException):
    """The generation service failed for a single image"""

    status_code = 502


class CredentialError(TranslationStudioException):
    """The configured credential is missing or rejected upstream"""

    status_code = 401


class GenericBatchError(TranslationStudioException):
    """Uncaught failure during a language pass; aborts the batch"""

    status_code = 500


class BatchCancelledError(GenericBatchError):
    """Cancellation requested; partial holds the results of the interrupted pass"""

    status_code = 409

    def __init__(self, message: str, partial: Any = None):
        super().__init__(message)
        self.partial = partial


def _error_content(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    content: Dict[str, Any] = {"error": message, "detail": message}
    if details:
        content["details"] = details
    return content


async def studio_exception_handler(request: Request, exc: TranslationStudioException):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=_error_content(exc.message, exc.details))


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain exception handlers on the application"""
    app.add_exception_handler(TranslationStudioException, studio_exception_handler)


def safe_endpoint(func):
    """
    Decorator for router endpoints.

    Domain exceptions and HTTPException pass through to their handlers;
    anything else is logged and converted into an HTTP 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (TranslationStudioException, HTTPException):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return wrapper
