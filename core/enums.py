"""
Centralized enums for Image Translation Studio.
"""

from enum import Enum


class ProcessingStatus(str, Enum):
    """Batch processing state; gates whether a new batch may start"""

    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class OutputFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


class Resolution(str, Enum):
    """Requested output resolution"""

    ORIGINAL = "original"
    R1K = "1K"
    R2K = "2K"
    R4K = "4K"


class MessageRole(str, Enum):
    USER = "user"
    MODEL = "model"
    SYSTEM = "system"
