"""Client for the hosted identity provider (Supabase auth)."""

from __future__ import annotations

from typing import Optional

import requests

from app.config import Settings
from app.core.errors import UnauthorizedError
from app.infra.logging_config import get_logger

logger = get_logger("identity_client")

USER_PATH = "/auth/v1/user"


class IdentityClient:
    """Resolves a bearer token to the user id it was issued for."""

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str],
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/") if base_url else None
        self._api_key = api_key
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityClient":
        return cls(
            base_url=settings.supabase_url,
            api_key=settings.supabase_service_role_key,
            timeout=settings.identity_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._base_url and self._api_key)

    def get_user_id(self, token: str) -> str:
        """Return the user id for ``token`` or raise UnauthorizedError."""
        if not self.configured:
            logger.error("Identity provider is not configured")
            raise UnauthorizedError()

        headers = {
            "Authorization": f"Bearer {token}",
            "apikey": self._api_key,
            "Accept": "application/json",
        }
        try:
            resp = requests.get(
                f"{self._base_url}{USER_PATH}",
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Identity provider request failed: %s", type(e).__name__)
            raise UnauthorizedError() from None

        if resp.status_code != 200:
            logger.info("Identity provider rejected token: HTTP %s", resp.status_code)
            raise UnauthorizedError()

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Identity provider returned invalid JSON")
            raise UnauthorizedError() from None

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            raise UnauthorizedError()
        return str(user_id)
