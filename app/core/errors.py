"""Failure taxonomy for credential resolution.

Every error carries the HTTP status and the message a caller is allowed to
see. Cryptographic failures share one public message so responses cannot be
used to tell a wrong key from tampered data.
"""

from __future__ import annotations


class CredentialServiceError(Exception):
    """Base class for errors converted into ``{"error": ...}`` responses."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class UnauthorizedError(CredentialServiceError):
    status_code = 401
    public_message = "Invalid authentication"


class NoCredentialsError(CredentialServiceError):
    status_code = 404
    public_message = "No credentials found for this service"


class AmbiguousCredentialsError(CredentialServiceError):
    """More than one active credential row for a (user, service) pair."""

    status_code = 409
    public_message = "Credential configuration error"


class KeyUnavailableError(CredentialServiceError):
    """The master key is missing or invalid for the life of the process."""

    status_code = 503
    public_message = "Credential decryption is unavailable"


class DecryptionFailedError(CredentialServiceError):
    status_code = 500
    public_message = "Failed to decrypt credentials"


class DecryptError(Exception):
    """Raised by the envelope codec. Never shown to callers directly."""

    kind = "decrypt_error"


class MalformedEnvelopeError(DecryptError):
    kind = "malformed_envelope"


class IntegrityFailureError(DecryptError):
    kind = "integrity_failure"


class MalformedPlaintextError(DecryptError):
    kind = "malformed_plaintext"
