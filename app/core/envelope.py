"""
Stored envelope format for gateway API keys.

Format: base64(nonce) + ":" + base64(ciphertext || tag), AES-256-GCM with a
12-byte nonce, 16-byte tag and no associated data. The write path owns
encryption; this format must stay byte-compatible with it.

Never log plaintext, ciphertext or key material.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.core.errors import (
    IntegrityFailureError,
    MalformedEnvelopeError,
    MalformedPlaintextError,
)
from app.core.key_manager import KeyHandle

NONCE_SIZE = 12  # 96-bit GCM nonce
TAG_SIZE = 16
SEPARATOR = ":"


def _b64decode(segment: str) -> bytes:
    try:
        return base64.b64decode(segment, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedEnvelopeError("Envelope segment is not valid base64") from None


def parse_envelope(envelope: str) -> tuple[bytes, bytes]:
    """Split and decode an envelope into (nonce, ciphertext || tag).

    Raises MalformedEnvelopeError before any cryptographic work when the
    envelope does not have exactly two non-empty base64 segments or the nonce
    has the wrong length.
    """
    if not isinstance(envelope, str):
        raise MalformedEnvelopeError("Envelope must be a string")
    parts = envelope.split(SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedEnvelopeError("Envelope must have exactly two segments")

    nonce = _b64decode(parts[0])
    payload = _b64decode(parts[1])
    if len(nonce) != NONCE_SIZE:
        raise MalformedEnvelopeError(
            f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}"
        )
    if len(payload) < TAG_SIZE:
        raise MalformedEnvelopeError("Ciphertext is shorter than the auth tag")
    return nonce, payload


def decrypt_envelope(envelope: str, key: KeyHandle) -> str:
    """Authenticate and decrypt an envelope, returning the UTF-8 secret."""
    nonce, payload = parse_envelope(envelope)
    try:
        plaintext = AESGCM(key.key).decrypt(nonce, payload, None)
    except InvalidTag:
        raise IntegrityFailureError("Authentication tag mismatch") from None
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedPlaintextError("Decrypted secret is not valid UTF-8") from None


def encrypt_envelope(plaintext: str, key: KeyHandle) -> str:
    """Encrypt a secret into the stored format with a fresh random nonce."""
    nonce = os.urandom(NONCE_SIZE)
    ct = AESGCM(key.key).encrypt(nonce, plaintext.encode("utf-8"), None)
    return (
        base64.b64encode(nonce).decode("ascii")
        + SEPARATOR
        + base64.b64encode(ct).decode("ascii")
    )
