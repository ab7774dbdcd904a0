"""Master key loading for credential decryption."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Optional

from app.config import Settings
from app.core.errors import KeyUnavailableError
from app.infra.logging_config import get_logger

logger = get_logger("key_manager")

KEY_LENGTH = 32  # AES-256


@dataclass(frozen=True)
class KeyHandle:
    """Decoded master key. Immutable and shared by every request."""

    key: bytes = field(repr=False)


def load_master_key(encoded: Optional[str]) -> Optional[KeyHandle]:
    """
    Decode the base64 master key from configuration.

    Returns None when the value is missing, is not valid base64, or does not
    decode to exactly KEY_LENGTH bytes. Only the reason is logged.
    """
    if encoded is None or not encoded.strip():
        logger.warning("Encryption key not configured; decryption unavailable")
        return None
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Encryption key is not valid base64; decryption unavailable")
        return None
    if len(raw) != KEY_LENGTH:
        logger.warning(
            "Encryption key has %d bytes, expected %d; decryption unavailable",
            len(raw),
            KEY_LENGTH,
        )
        return None
    return KeyHandle(key=raw)


class KeyManager:
    """Holds either a valid key handle or the unavailable state for the process."""

    def __init__(self, handle: Optional[KeyHandle]) -> None:
        self._handle = handle

    @classmethod
    def from_settings(cls, settings: Settings) -> "KeyManager":
        return cls(load_master_key(settings.api_key_encryption_key_b64))

    @property
    def available(self) -> bool:
        return self._handle is not None

    def require(self) -> KeyHandle:
        """Return the key handle or raise KeyUnavailableError."""
        if self._handle is None:
            raise KeyUnavailableError()
        return self._handle

    def __repr__(self) -> str:
        state = "available" if self.available else "unavailable"
        return f"KeyManager({state})"
