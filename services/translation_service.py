"""
Translation Service - Batch orchestration over the generation service.

Drives the processing state machine of a TranslationSession:

    IDLE --start--> PROCESSING --success--> COMPLETED
                    PROCESSING --failure--> ERROR
    COMPLETED | ERROR --start--> PROCESSING

A start request while PROCESSING, or with no selected images, is a no-op.
With target languages configured, one pass per language is made over all
selected images, strictly one after another; each pass's results are put in
front of the gallery so the latest language comes first.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from api.exceptions import (
    BatchCancelledError,
    CredentialError,
    CredentialRequiredException,
    GenericBatchError,
)
from core.constants import TranslationConstants
from core.enums import MessageRole, ProcessingStatus
from core.gallery_buffer import GalleryBuffer, GeneratedImage
from core.image_manager import ImageManager, UploadedImage
from core.session import TranslationSession
from schemas import OutputSettings
from services.credentials import CredentialProvider
from services.prompt_builder import build_language_instruction
from services.translation_client import BatchResult, TranslationClient

logger = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    """What a start request did"""

    started: bool
    status: ProcessingStatus
    message: Optional[str] = None
    error_message: Optional[str] = None
    generated: List[GeneratedImage] = field(default_factory=list)


class TranslationService:
    """
    Orchestrates translation batches for one session.

    All collaborators are injected: the session (explicit state), the image
    store, the gallery that receives results, the remote client and the
    credential provider.
    """

    def __init__(
        self,
        session: TranslationSession,
        image_manager: ImageManager,
        gallery: GalleryBuffer,
        client: TranslationClient,
        credentials: CredentialProvider,
    ):
        self.session = session
        self.image_manager = image_manager
        self.gallery = gallery
        self.client = client
        self.credentials = credentials
        self._cancel_requested = False

    @property
    def status(self) -> ProcessingStatus:
        return self.session.status

    def _should_stop(self) -> bool:
        return self._cancel_requested

    def cancel(self) -> bool:
        """Request cancellation of the running batch; False if nothing is running"""
        if self.session.status != ProcessingStatus.PROCESSING:
            return False
        self._cancel_requested = True
        logger.info("Cancellation requested")
        return True

    @staticmethod
    def _display_prompt(languages: Sequence[str], instruction: str) -> str:
        if languages:
            return f"Translating into: {', '.join(languages)}. {instruction}".strip()
        return instruction or TranslationConstants.DEFAULT_DISPLAY_PROMPT

    async def start(self, instruction: str = "") -> BatchOutcome:
        """
        Start a translation batch over the selected images.

        Args:
            instruction: Free-text instruction (may be empty)

        Returns:
            BatchOutcome; started is False when the request was a no-op

        Raises:
            CredentialRequiredException: If no usable credential is configured
        """
        session = self.session

        # Status check and switch to PROCESSING happen before any await
        if session.status == ProcessingStatus.PROCESSING:
            logger.info("Start ignored: a batch is already processing")
            return BatchOutcome(started=False, status=session.status)

        images = self.image_manager.get_many(session.selected_image_ids)
        if not images:
            logger.info("Start ignored: no images selected")
            return BatchOutcome(started=False, status=session.status)

        if not self.credentials.has_credential():
            raise CredentialRequiredException()

        instruction = (instruction or "").strip()
        languages = list(session.target_languages)
        settings = session.output_settings

        session.status = ProcessingStatus.PROCESSING
        session.error_message = None
        self._cancel_requested = False
        session.add_message(MessageRole.USER, self._display_prompt(languages, instruction))

        logger.info(
            f"Batch started: {len(images)} images, "
            f"languages={languages or 'none'}, format={settings.format.value}"
        )

        generated: List[GeneratedImage] = []
        try:
            if languages:
                text = await self._run_languages(languages, instruction, images, settings, generated)
            else:
                text = await self._run_single(instruction, images, settings, generated)

        except CredentialError as e:
            await self.credentials.request_credential()
            return self._fail(e.message, generated)

        except GenericBatchError as e:
            return self._fail(e.message, generated)

        except Exception as e:
            logger.error(f"Batch aborted by unexpected error: {e}", exc_info=True)
            return self._fail(GenericBatchError(str(e) or type(e).__name__).message, generated)

        message = text or TranslationConstants.DEFAULT_COMPLETION_TEXT
        session.status = ProcessingStatus.COMPLETED
        session.add_message(MessageRole.MODEL, message)

        logger.info(f"Batch completed: {len(generated)} images generated")
        return BatchOutcome(
            started=True, status=session.status, message=message, generated=generated
        )

    async def _run_single(
        self,
        instruction: str,
        images: Sequence[UploadedImage],
        settings: OutputSettings,
        generated: List[GeneratedImage],
    ) -> str:
        instruction = instruction or TranslationConstants.DEFAULT_INSTRUCTION
        result = await self._run_pass(instruction, instruction, images, settings, generated)
        return result.text_response

    async def _run_pass(
        self,
        instruction: str,
        description: str,
        images: Sequence[UploadedImage],
        settings: OutputSettings,
        generated: List[GeneratedImage],
        language: Optional[str] = None,
    ) -> BatchResult:
        """One call over all images; images finished before a cancellation are kept"""
        try:
            result = await self.client.translate_batch(
                instruction, images, settings, should_stop=self._should_stop, language=language
            )
        except BatchCancelledError as e:
            if e.partial is not None:
                self._collect(e.partial, description, generated)
            raise

        self._collect(result, description, generated)
        return result

    async def _run_languages(
        self,
        languages: Sequence[str],
        instruction: str,
        images: Sequence[UploadedImage],
        settings: OutputSettings,
        generated: List[GeneratedImage],
    ) -> str:
        text = ""
        for language in languages:
            if self._should_stop():
                raise BatchCancelledError(TranslationConstants.CANCELLED_MESSAGE)

            result = await self._run_pass(
                build_language_instruction(language, instruction),
                f"Translated to {language}",
                images,
                settings,
                generated,
                language=language,
            )

            text += f"[{language}] Processed.\n"
            for line in result.error_lines:
                text += f"{line}\n"

            logger.info(f"Language pass {language} done: {len(result.candidates)} images")
        return text

    def _collect(self, result: BatchResult, description: str, generated: List[GeneratedImage]):
        """Turn candidates into gallery entries, newest batch first"""
        batch = [
            GeneratedImage.create(
                original_image_id=c.original_image_id,
                original_name=c.original_name,
                url=c.data_url,
                mime_type=c.mime_type,
                description=description,
            )
            for c in result.candidates
        ]
        if batch:
            self.gallery.add_batch(batch)
            generated[:0] = batch

    def _fail(self, message: str, generated: List[GeneratedImage]) -> BatchOutcome:
        session = self.session
        session.status = ProcessingStatus.ERROR
        session.error_message = message
        session.add_message(MessageRole.MODEL, message, is_error=True)

        logger.error(f"Batch failed: {message}")
        return BatchOutcome(
            started=True,
            status=session.status,
            error_message=message,
            generated=generated,
        )
