from app.services.credential_decryption_service import CredentialDecryptionService
from app.services.credential_repository import CredentialRepository

__all__ = [
    "CredentialDecryptionService",
    "CredentialRepository",
]
