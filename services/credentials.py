"""
Credential boundary for the generation service.

The orchestrator only talks to a CredentialProvider: it asks whether a usable
credential is configured and, when the service rejects the credential, asks
the host to run its re-selection flow. Until a new key is supplied the
provider reports no credential, which blocks the next batch.
"""

import logging
from threading import RLock
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialProvider(Protocol):
    """Host capability for API credential management"""

    def has_credential(self) -> bool: ...

    def get_api_key(self) -> Optional[str]: ...

    async def request_credential(self) -> None: ...

    def set_api_key(self, api_key: str) -> None: ...


class SettingsCredentialProvider:
    """
    Credential provider backed by configuration.

    The initial key comes from settings (GEMINI_API_KEY / GOOGLE_API_KEY).
    request_credential() invalidates it; set_api_key() completes the
    re-selection, typically through POST /api/system/credential.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key or None
        self._needs_reselection = False
        self._lock = RLock()

    def has_credential(self) -> bool:
        with self._lock:
            return bool(self._api_key) and not self._needs_reselection

    def get_api_key(self) -> Optional[str]:
        with self._lock:
            return self._api_key

    async def request_credential(self) -> None:
        with self._lock:
            self._needs_reselection = True
        logger.warning("Credential rejected by the generation service; a new API key is required")

    def set_api_key(self, api_key: str):
        with self._lock:
            self._api_key = api_key
            self._needs_reselection = False
        logger.info("API key updated")
