"""
System API models.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from core.enums import ProcessingStatus


class SystemStatus(BaseModel):
    """Runtime status"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    processing_status: ProcessingStatus
    image_store: Dict[str, Any]
    gallery: Dict[str, Any]
    credential_ready: bool


class CredentialRequest(BaseModel):
    """Supply a new API key after a re-selection request"""

    api_key: str = Field(..., min_length=1)


class CredentialResponse(BaseModel):
    credential_ready: bool
