from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from .config import Settings
from .exceptions import AuthError
from .models import AccessToken

logger = logging.getLogger(__name__)

# refresh this many seconds before the server-side expiry
EXPIRY_MARGIN_S = 60


def _now_epoch() -> int:
    return int(datetime.now(tz=timezone.utc).timestamp())


def fetch_access_token(settings: Settings, client: httpx.Client) -> AccessToken:
    """Exchange the API key pair for a bearer token."""
    url = f"{settings.base_url()}/api/auth-token"
    body = {"id": settings.access_key, "secret": settings.secret_key}
    try:
        resp = client.post(url, json=body, headers={"Accept": "application/json"})
    except httpx.HTTPError as e:
        raise AuthError(f"Token request failed: {e}") from e
    if resp.status_code >= 400:
        raise AuthError(f"Token request failed ({resp.status_code}): {resp.text}")
    try:
        return AccessToken.model_validate(resp.json())
    except ValueError as e:
        raise AuthError(f"Malformed token response: {resp.text}") from e


class TokenProvider:
    """Caches the access token and fetches a new one shortly before it expires."""

    def __init__(self, settings: Settings, http: httpx.Client):
        self._settings = settings
        self._http = http
        self._token: Optional[AccessToken] = None

    def token(self) -> str:
        if self._token is None or self._token.expires_within(EXPIRY_MARGIN_S, _now_epoch()):
            self._token = fetch_access_token(self._settings, self._http)
            logger.info(
                "Fetched access token, expires at %s",
                datetime.fromtimestamp(self._token.exp, tz=timezone.utc).isoformat(),
            )
        return self._token.token

    def invalidate(self) -> None:
        self._token = None
