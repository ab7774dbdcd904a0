"""
Decrypt credentials API: returns the caller's gateway API key.

The caller is identified only by the bearer token; the credential row is
looked up for that identity. CORS preflight is answered by middleware.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from app.auth.gate import UserIdentity
from app.config import get_settings
from app.routers.utils.dependencies import (
    get_credential_decryption_service,
    get_current_identity,
)
from app.schemas.credential import DecryptedCredentialResponse, ErrorResponse
from app.services.credential_decryption_service import CredentialDecryptionService

router = APIRouter(
    prefix="/decrypt-credentials",
    tags=["credentials"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


@router.post("", response_model=DecryptedCredentialResponse)
def decrypt_credentials(
    service_name: Optional[str] = Query(None, min_length=1, max_length=64),
    identity: UserIdentity = Depends(get_current_identity),
    svc: CredentialDecryptionService = Depends(get_credential_decryption_service),
) -> dict[str, Any]:
    """Return the active gateway credential for the authenticated user."""
    resolved = svc.resolve(
        identity, service_name or get_settings().gateway_service_name
    )
    return resolved.to_response()
