"""
Translation session state.

The session is the explicit context the orchestrator works against: which
uploaded images are selected, the target languages, the output settings,
the message log and the processing status. Nothing here is module-global;
the application creates one session at startup and injects it.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import List, Optional, Sequence

from core.constants import TranslationConstants
from core.enums import MessageRole, ProcessingStatus
from schemas import OutputSettings

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """Entry in the conversation log"""

    id: str
    role: MessageRole
    content: str
    is_error: bool = False
    created_at: datetime = field(default_factory=datetime.now)


class TranslationSession:
    """Mutable state of one user's translation workspace"""

    def __init__(self, output_settings: Optional[OutputSettings] = None):
        self.selected_image_ids: List[str] = []
        self.target_languages: List[str] = []
        self.output_settings = output_settings or OutputSettings()
        self.messages: List[Message] = []
        self.status = ProcessingStatus.IDLE
        self.error_message: Optional[str] = None
        self.lock = RLock()

        self.add_message(MessageRole.MODEL, TranslationConstants.WELCOME_MESSAGE)

    # Image selection

    def select_image(self, image_id: str):
        with self.lock:
            if image_id not in self.selected_image_ids:
                self.selected_image_ids.append(image_id)

    def deselect_image(self, image_id: str):
        with self.lock:
            if image_id in self.selected_image_ids:
                self.selected_image_ids.remove(image_id)

    def toggle_image(self, image_id: str) -> bool:
        """Flip selection of an image; returns the new state"""
        with self.lock:
            if image_id in self.selected_image_ids:
                self.selected_image_ids.remove(image_id)
                return False
            self.selected_image_ids.append(image_id)
            return True

    def is_selected(self, image_id: str) -> bool:
        return image_id in self.selected_image_ids

    # Target languages

    def set_languages(self, languages: Sequence[str]):
        """Replace target languages (trimmed, de-duplicated, order kept)"""
        cleaned: List[str] = []
        for language in languages:
            language = language.strip()
            if language and language not in cleaned:
                cleaned.append(language)
        with self.lock:
            self.target_languages = cleaned

    def add_language(self, language: str):
        self.set_languages([*self.target_languages, language])

    def remove_language(self, language: str) -> bool:
        with self.lock:
            if language not in self.target_languages:
                return False
            self.target_languages = [lang for lang in self.target_languages if lang != language]
            return True

    # Output settings

    def update_settings(self, **changes) -> OutputSettings:
        """Replace the settings snapshot with a validated, updated copy"""
        with self.lock:
            merged = {**self.output_settings.model_dump(), **changes}
            self.output_settings = OutputSettings(**merged)
            return self.output_settings

    # Message log

    def add_message(self, role: MessageRole, content: str, is_error: bool = False) -> Message:
        message = Message(id=uuid.uuid4().hex, role=role, content=content, is_error=is_error)
        with self.lock:
            self.messages.append(message)
        return message
