"""
Translation API models.

This module contains models for the translation workflow:
- Output settings snapshot
- Batch start requests and responses
- Session status, languages and the message log
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.enums import MessageRole, OutputFormat, ProcessingStatus, Resolution

from .gallery import GeneratedImageInfo


class OutputSettings(BaseModel):
    """
    Output settings used for a batch.

    Frozen: a batch works on the snapshot taken when it starts, so later
    edits never leak into a running batch.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = "translated_"
    suffix: str = ""
    format: OutputFormat = OutputFormat.PNG
    quality: int = Field(90, ge=1, le=100, description="JPEG quality (ignored for png)")
    resolution: Resolution = Resolution.ORIGINAL


class OutputSettingsUpdate(BaseModel):
    """Partial update of output settings"""

    prefix: Optional[str] = None
    suffix: Optional[str] = None
    format: Optional[OutputFormat] = None
    quality: Optional[int] = Field(None, ge=1, le=100)
    resolution: Optional[Resolution] = None


class TranslateRequest(BaseModel):
    """Request to start a translation batch"""

    instruction: str = Field("", description="Free-text instruction; may be empty")


class MessageInfo(BaseModel):
    id: str
    role: MessageRole
    content: str
    is_error: bool = False
    created_at: datetime


class BatchResponse(BaseModel):
    """Result of a start request"""

    started: bool = Field(..., description="False when the request was a no-op")
    status: ProcessingStatus
    message: Optional[str] = None
    error_message: Optional[str] = None
    generated: List[GeneratedImageInfo] = Field(default_factory=list)


class StatusResponse(BaseModel):
    status: ProcessingStatus
    error_message: Optional[str] = None
    selected_image_ids: List[str]
    target_languages: List[str]
    generated_count: int
    credential_ready: bool


class LanguagesRequest(BaseModel):
    languages: List[str] = Field(default_factory=list)


class LanguageAddRequest(BaseModel):
    language: str = Field(..., min_length=1)


class LanguagesResponse(BaseModel):
    languages: List[str]
