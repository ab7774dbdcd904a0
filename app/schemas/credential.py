"""Pydantic schemas for credential decryption responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.constants.credentials import SecretSource


class DecryptedCredentialResponse(BaseModel):
    """Recovered gateway secret plus non-secret account fields."""

    secret: str
    source: SecretSource
    username: str | None = None
    sender_id: str | None = None


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""

    error: str
    timestamp: datetime = Field(default_factory=datetime.now)


class SystemStatus(BaseModel):
    """Non-sensitive runtime status for troubleshooting."""

    app_name: str
    environment: str
    is_production: bool
    encryption_key_loaded: bool
    identity_provider_configured: bool
    database_driver: str | None = None
    gateway_service_name: str
