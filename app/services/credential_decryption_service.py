"""Resolves a verified user's gateway secret, decrypting it when needed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.auth.gate import UserIdentity
from app.constants.credentials import SecretSource
from app.core.envelope import decrypt_envelope
from app.core.errors import DecryptError, DecryptionFailedError
from app.core.key_manager import KeyManager
from app.infra.logging_config import get_logger
from app.services.credential_repository import (
    CredentialRepository,
    EncryptedSecret,
    LegacySecret,
)

logger = get_logger("credential_decryption_service")


@dataclass(frozen=True)
class DecryptedSecret:
    """Recovered secret for a single request. Never persisted."""

    secret: str = field(repr=False)
    source: SecretSource
    auxiliary_fields: dict[str, Optional[str]] = field(default_factory=dict)

    def to_response(self) -> dict:
        return {
            "secret": self.secret,
            "source": self.source.value,
            **self.auxiliary_fields,
        }


class CredentialDecryptionService:
    """Looks up the caller's active credential and recovers its secret.

    Legacy plaintext rows are returned untouched without consulting the key.
    Encrypted rows require a loaded key; every codec failure is reported as
    the same DecryptionFailedError. Nothing is retried.
    """

    def __init__(
        self,
        repository: CredentialRepository,
        key_manager: KeyManager,
    ) -> None:
        self._repository = repository
        self._key_manager = key_manager

    def resolve(self, identity: UserIdentity, service_name: str) -> DecryptedSecret:
        record = self._repository.find_active(identity.user_id, service_name)

        if isinstance(record.secret, LegacySecret):
            return DecryptedSecret(
                secret=record.secret.value,
                source=SecretSource.PLAINTEXT,
                auxiliary_fields=dict(record.auxiliary_fields),
            )

        if not isinstance(record.secret, EncryptedSecret):
            raise TypeError(
                f"Unsupported stored secret: {type(record.secret).__name__}"
            )

        key = self._key_manager.require()
        try:
            secret = decrypt_envelope(record.secret.envelope, key)
        except DecryptError as e:
            logger.error(
                "Decryption failed for credential %s (%s)", record.id, e.kind
            )
            raise DecryptionFailedError() from None

        return DecryptedSecret(
            secret=secret,
            source=SecretSource.DECRYPTED,
            auxiliary_fields=dict(record.auxiliary_fields),
        )
