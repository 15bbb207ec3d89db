"""
System API Router - Status, configuration and credentials
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends

from api.dependencies import get_config, get_credentials, get_managers
from api.exceptions import safe_endpoint
from schemas import CredentialRequest, CredentialResponse, SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(managers=Depends(get_managers)) -> SystemStatus:
    """Get system status"""
    # Get memory usage
    process = psutil.Process()
    memory_info = process.memory_info()

    # Get system memory
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        processing_status=managers.session.status,
        image_store=managers.image_manager.get_stats(),
        gallery=managers.gallery.get_statistics(),
        credential_ready=managers.credentials.has_credential(),
    )


@router.get("/config")
@safe_endpoint
async def get_configuration(config=Depends(get_config)) -> dict:
    """Get current configuration"""
    return config


@router.post("/credential")
@safe_endpoint
async def set_credential(
    request: CredentialRequest, credentials=Depends(get_credentials)
) -> CredentialResponse:
    """Supply a new API key, completing a credential re-selection"""
    credentials.set_api_key(request.api_key.strip())
    return CredentialResponse(credential_ready=credentials.has_credential())


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
