from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.auth.gate import AuthGate, UserIdentity
from app.auth.identity_client import IdentityClient
from app.core.key_manager import KeyManager
from app.db import get_db
from app.services.credential_decryption_service import CredentialDecryptionService
from app.services.credential_repository import CredentialRepository


def get_key_manager(request: Request) -> KeyManager:
    """FastAPI dependency returning the key manager loaded at start-up."""
    return request.app.state.key_manager


def get_identity_client(request: Request) -> IdentityClient:
    """FastAPI dependency returning the shared identity provider client."""
    return request.app.state.identity_client


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> UserIdentity:
    """FastAPI dependency verifying the bearer token on the request."""
    return AuthGate(identity_client).verify(authorization)


def get_credential_decryption_service(
    db: Session = Depends(get_db),
    key_manager: KeyManager = Depends(get_key_manager),
) -> CredentialDecryptionService:
    """FastAPI dependency building the decryption service for one request."""
    return CredentialDecryptionService(CredentialRepository(db), key_manager)
