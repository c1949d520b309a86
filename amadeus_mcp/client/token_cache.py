"""
OAuth2 bearer-token cache for the Amadeus API.

Amadeus uses the client-credentials flow: the key and secret are posted as a
form to /v1/security/oauth2/token and the returned access_token is sent as a
Bearer header on every search request. The token is kept until its TTL
elapses, then exchanged again on the next call.
"""

import time
import logging
from typing import Callable, Optional, Tuple

import httpx

from ..config import Config
from ..errors import AuthError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"


class TokenCache:
    """
    Holds a single bearer token and the time it stops being used.

    Concurrent callers that arrive after expiry may each perform an exchange;
    the last response wins.

    Args:
        http: Shared async HTTP client.
        credentials: Callable returning (api_key, api_secret), read on every
            exchange so credentials can be supplied after startup.
        base_url: Amadeus API root.
        ttl_seconds: How long a freshly issued token is reused.
        clock: Returns the current time in seconds.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: Callable[[], Tuple[str, str]] = Config.credentials,
        base_url: str = Config.AMADEUS_BASE_URL,
        ttl_seconds: float = Config.TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._http = http
        self._credentials = credentials
        self._url = base_url.rstrip("/") + TOKEN_PATH
        self._ttl = ttl_seconds
        self._clock = clock
        self.token: Optional[str] = None
        self.expires_at: float = 0.0

    def is_valid(self) -> bool:
        return self.token is not None and self._clock() < self.expires_at

    async def get_token(self) -> str:
        """Return the cached token, exchanging credentials for a new one when expired."""
        if self.is_valid():
            return self.token

        api_key, api_secret = self._credentials()
        if not api_key or not api_secret:
            raise AuthError("Failed to get access token: Amadeus API credentials are not configured")

        data = {
            "grant_type": "client_credentials",
            "client_id": api_key,
            "client_secret": api_secret,
        }

        try:
            response = await self._http.post(self._url, data=data)
            response.raise_for_status()
            token_data = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthError(f"Failed to get access token: {_oauth_error_detail(e.response) or e}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise AuthError(f"Failed to get access token: {e}") from e

        token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not token:
            raise AuthError("Failed to get access token: No access token received from Amadeus API")

        issued_at = self._clock()
        self.token = token
        self.expires_at = issued_at + self._ttl
        logger.info("Obtained new Amadeus access token")
        return token


def _oauth_error_detail(response: httpx.Response) -> Optional[str]:
    """Pull the provider's explanation out of an OAuth error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("error_description") or body.get("error") or None
