from fastapi import APIRouter, Request
from sqlalchemy.exc import ArgumentError

from app.config import get_settings
from app.schemas.credential import SystemStatus

router = APIRouter(
    prefix="/system",
    tags=["system"],
    responses={404: {"description": "Not found"}},
)


@router.get("/status", response_model=SystemStatus)
def get_system_status(request: Request) -> SystemStatus:
    """Return non-sensitive configuration status for troubleshooting."""
    s = get_settings()

    # Extract safe database info only (no credentials)
    database_driver = None
    try:
        database_driver = s.database_url_obj.get_backend_name()
    except (ArgumentError, ValueError):
        pass

    return SystemStatus(
        app_name=s.app_name,
        environment=s.environment,
        is_production=s.is_production,
        encryption_key_loaded=request.app.state.key_manager.available,
        identity_provider_configured=request.app.state.identity_client.configured,
        database_driver=database_driver,
        gateway_service_name=s.gateway_service_name,
    )
