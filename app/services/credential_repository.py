"""Lookup of the active gateway credential for a verified user."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import AmbiguousCredentialsError, NoCredentialsError
from app.infra.logging_config import get_logger
from app.models.credential import ApiCredential

logger = get_logger("credential_repository")


@dataclass(frozen=True)
class LegacySecret:
    """Secret stored before encryption rollout; returned as-is."""

    value: str = field(repr=False)


@dataclass(frozen=True)
class EncryptedSecret:
    """Secret stored as an ``iv:ciphertext`` envelope."""

    envelope: str = field(repr=False)


StoredSecret = Union[LegacySecret, EncryptedSecret]


@dataclass(frozen=True)
class CredentialRecord:
    """Read-only view of one credential row, secret already classified."""

    id: UUID
    user_id: str
    service_name: str
    secret: StoredSecret
    auxiliary_fields: dict[str, Optional[str]] = field(default_factory=dict)


def classify_secret(row: ApiCredential) -> Optional[StoredSecret]:
    """Decide once whether the row holds an envelope or a legacy plaintext key."""
    if row.api_key_encrypted:
        return EncryptedSecret(envelope=row.api_key_encrypted)
    if row.api_key:
        return LegacySecret(value=row.api_key)
    return None


class CredentialRepository:
    """Reads ``api_credentials`` rows scoped to an authenticated user."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_active(self, user_id: str, service_name: str) -> CredentialRecord:
        """
        Return the single active credential for (user_id, service_name).

        user_id must come from the auth gate, never from the request body.
        Raises NoCredentialsError when nothing usable matches and
        AmbiguousCredentialsError when more than one active row matches.
        """
        rows = (
            self.db.query(ApiCredential)
            .filter(
                ApiCredential.user_id == user_id,
                ApiCredential.service_name == service_name,
                ApiCredential.is_active.is_(True),
            )
            .limit(2)
            .all()
        )
        if not rows:
            raise NoCredentialsError()
        if len(rows) > 1:
            logger.error(
                "Multiple active %s credentials for user %s", service_name, user_id
            )
            raise AmbiguousCredentialsError()

        row = rows[0]
        secret = classify_secret(row)
        if secret is None:
            logger.warning("Credential %s has no stored key", row.id)
            raise NoCredentialsError()
        return CredentialRecord(
            id=row.id,
            user_id=row.user_id,
            service_name=row.service_name,
            secret=secret,
            auxiliary_fields={"username": row.username, "sender_id": row.sender_id},
        )
