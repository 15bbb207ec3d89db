"""
Constants and configuration values for Image Translation Studio.
Centralizes all magic numbers and fixed strings.
"""


# Image Management Constants
class ImageConstants:
    """Constants related to uploaded image storage."""

    # Storage limits
    DEFAULT_MAX_IMAGES = 100
    DEFAULT_MAX_MEMORY_MB = 500

    # Thumbnail settings
    DEFAULT_THUMBNAIL_WIDTH = 320
    THUMBNAIL_JPEG_QUALITY = 70

    # Ingestion
    ACCEPTED_MIME_PREFIX = "image/"
    DEFAULT_MIME_TYPE = "image/png"
    ID_PREFIX = "img_"


# Region selection constants
class RegionConstants:
    """Normalized coordinate space used for selections."""

    NORMALIZED_SCALE = 1000
    # Drags whose width or height is at or below this (display pixels) are noise
    MIN_DRAG_PIXELS = 5


# Remote service constants
class GeminiConstants:
    """Constants for the Gemini image generation service."""

    DEFAULT_MODEL = "gemini-3-pro-image-preview"
    # Smallest image size the service accepts; "original" maps here
    RESOLUTION_FLOOR = "1K"
    DEFAULT_OUTPUT_MIME = "image/png"
    # Upstream message meaning the configured key is unusable
    CREDENTIAL_ERROR_SIGNAL = "Requested entity was not found"
    CREDENTIAL_HTTP_CODES = (401, 403)


# Orchestration constants
class TranslationConstants:
    """Fixed strings used by the batch orchestrator."""

    DEFAULT_INSTRUCTION = "Translate all visible text"
    DEFAULT_DISPLAY_PROMPT = "Translate selected images"
    DEFAULT_COMPLETION_TEXT = "Translation complete."
    WELCOME_MESSAGE = (
        "Ready for translation. Upload images and select target languages to begin."
    )
    CANCELLED_MESSAGE = "Translation cancelled"
    COMMON_LANGUAGES = [
        "Spanish",
        "French",
        "German",
        "Italian",
        "Chinese",
        "Japanese",
        "Korean",
        "Portuguese",
    ]


# Download constants
class DownloadConstants:
    """Constants for result downloads."""

    # Delay between consecutive downloads of a batch (browser throttling)
    DEFAULT_STAGGER_MS = 400


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    IMAGE_NOT_FOUND = "Image with ID {image_id} not found"
    GENERATED_IMAGE_NOT_FOUND = "Generated image with ID {image_id} not found"
    IMAGE_STORAGE_FULL = "Image storage is full, cannot store new image"
    INVALID_IMAGE = "Invalid image: {reason}"
    INVALID_ENCODING = "Invalid base64 data URL"
    MISSING_API_KEY = "API Key is missing"
    CREDENTIAL_REQUIRED = "A Gemini API key must be selected before translating"
    SELECTION_OUT_OF_RANGE = "Selection index {index} out of range"
    IMAGE_PROCESSING_FAILED = "Error processing {name}: {error}"
