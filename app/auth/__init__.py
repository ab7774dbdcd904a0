from app.auth.gate import AuthGate, UserIdentity, extract_bearer_token
from app.auth.identity_client import IdentityClient

__all__ = [
    "AuthGate",
    "IdentityClient",
    "UserIdentity",
    "extract_bearer_token",
]
