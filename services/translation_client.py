"""
Translation Client - Remote calls to the Gemini image generation service.

One request is made per image. Each request returns an ImageOutcome: the
generated image candidates and explanatory text, or the reason the image
failed. A failing image never stops the other images of the same batch;
only credential failures escape, since every later call would fail the same
way.
"""

import base64
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from google import genai
from google.genai import errors, types

from api.exceptions import (
    BatchCancelledError,
    CredentialError,
    InvalidEncodingError,
    RemoteCallError,
)
from core.constants import ErrorMessages, GeminiConstants, TranslationConstants
from core.image import ImageConverters
from core.image_manager import UploadedImage
from core.utils import timer
from schemas import OutputSettings
from services.credentials import CredentialProvider
from services.prompt_builder import build_prompt, resolve_image_size

logger = logging.getLogger(__name__)


@dataclass
class ImageCandidate:
    """Image returned by the service for one source image"""

    original_image_id: str
    original_name: str
    mime_type: str
    data: bytes

    @property
    def data_url(self) -> str:
        return ImageConverters.to_data_url(self.data, self.mime_type)


@dataclass
class ImageOutcome:
    """Per-image result: candidates and text, or an error reason"""

    image_id: str
    image_name: str
    candidates: List[ImageCandidate] = field(default_factory=list)
    text_lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_line(self) -> Optional[str]:
        if self.ok:
            return None
        return ErrorMessages.IMAGE_PROCESSING_FAILED.format(name=self.image_name, error=self.error)


@dataclass
class BatchResult:
    """Aggregated outcomes of one call over a set of images"""

    outcomes: List[ImageOutcome] = field(default_factory=list)

    @property
    def candidates(self) -> List[ImageCandidate]:
        return [c for outcome in self.outcomes for c in outcome.candidates]

    @property
    def error_lines(self) -> List[str]:
        return [o.error_line for o in self.outcomes if not o.ok]

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def text_response(self) -> str:
        lines: List[str] = []
        for outcome in self.outcomes:
            lines.extend(outcome.text_lines)
            if not outcome.ok:
                lines.append(outcome.error_line)
        return "\n".join(lines).strip()


def is_credential_failure(exc: Exception) -> bool:
    """True when an upstream failure means the configured key is unusable"""
    if GeminiConstants.CREDENTIAL_ERROR_SIGNAL in str(exc):
        return True
    if isinstance(exc, errors.APIError):
        return getattr(exc, "code", None) in GeminiConstants.CREDENTIAL_HTTP_CODES
    return False


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class TranslationClient:
    """Client for the image generation service"""

    def __init__(
        self,
        credentials: CredentialProvider,
        model: str = GeminiConstants.DEFAULT_MODEL,
        client_factory: Optional[Callable[[str], genai.Client]] = None,
    ):
        """
        Initialize translation client.

        Args:
            credentials: Provider of the API key
            model: Gemini model id
            client_factory: Builds an SDK client from an API key
        """
        self.credentials = credentials
        self.model = model
        self.client_factory = client_factory or _default_client_factory
        self._client = None
        self._client_key: Optional[str] = None

    def _get_client(self):
        api_key = self.credentials.get_api_key()
        if not api_key:
            raise CredentialError(ErrorMessages.MISSING_API_KEY)

        # Rebuild when the key was re-selected
        if self._client is None or api_key != self._client_key:
            self._client = self.client_factory(api_key)
            self._client_key = api_key
        return self._client

    async def _generate(self, prompt: str, mime_type: str, data: bytes, image_size: str):
        client = self._get_client()
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(image_size=image_size),
        )

        try:
            return await client.aio.models.generate_content(
                model=self.model,
                contents=[types.Part.from_bytes(data=data, mime_type=mime_type), prompt],
                config=config,
            )
        except Exception as e:
            if is_credential_failure(e):
                raise CredentialError(str(e)) from e
            raise RemoteCallError(f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _response_parts(response) -> list:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        content = getattr(candidates[0], "content", None)
        return list(getattr(content, "parts", None) or [])

    async def translate_one(self, prompt: str, image: UploadedImage, image_size: str) -> ImageOutcome:
        """
        Send one image with its prompt to the service.

        Args:
            prompt: Full prompt for this image
            image: Source image (data URL payload)
            image_size: Resolution hint (1K/2K/4K)

        Returns:
            ImageOutcome with candidates and text, or the failure reason

        Raises:
            CredentialError: If the service rejects the configured credential
        """
        outcome = ImageOutcome(image_id=image.id, image_name=image.name)

        try:
            mime_type, data = ImageConverters.decode_data_url(image.url)

            with timer() as t:
                response = await self._generate(prompt, mime_type, data, image_size)

            for part in self._response_parts(response):
                inline = getattr(part, "inline_data", None)
                if inline is not None and getattr(inline, "data", None):
                    payload = inline.data
                    if isinstance(payload, str):
                        payload = base64.b64decode(payload)
                    outcome.candidates.append(
                        ImageCandidate(
                            original_image_id=image.id,
                            original_name=image.name,
                            mime_type=getattr(inline, "mime_type", None)
                            or GeminiConstants.DEFAULT_OUTPUT_MIME,
                            data=payload,
                        )
                    )
                elif getattr(part, "text", None):
                    outcome.text_lines.append(f"[{image.name}] {part.text}")

            logger.info(
                f"{self.model} processed {image.name} in {t['ms']} ms: "
                f"{len(outcome.candidates)} images, {len(outcome.text_lines)} text parts"
            )

        except (InvalidEncodingError, RemoteCallError) as e:
            outcome.error = e.message
            logger.warning(f"Image {image.name} failed: {e.message}")

        return outcome

    async def translate_batch(
        self,
        instruction: str,
        images: Sequence[UploadedImage],
        settings: OutputSettings,
        should_stop: Optional[Callable[[], bool]] = None,
        language: Optional[str] = None,
    ) -> BatchResult:
        """
        Run one instruction over a set of images, one request per image.

        Args:
            instruction: Task text shared by every image
            images: Source images, processed in order
            settings: Output settings snapshot
            should_stop: Cancellation check consulted before each image
            language: Target language of this pass, if any

        Returns:
            BatchResult with one outcome per image

        Raises:
            CredentialError: If the credential is missing or rejected
            BatchCancelledError: If cancellation was requested; carries the
                outcomes of the images already processed
        """
        image_size = resolve_image_size(settings.resolution)
        result = BatchResult()

        for image in images:
            if should_stop is not None and should_stop():
                raise BatchCancelledError(TranslationConstants.CANCELLED_MESSAGE, partial=result)

            prompt = build_prompt(instruction, image, settings, language)
            result.outcomes.append(await self.translate_one(prompt, image, image_size))

        logger.info(
            f"Batch finished: {len(result.candidates)} images generated, "
            f"{result.failed_count}/{len(images)} images failed"
        )
        return result
