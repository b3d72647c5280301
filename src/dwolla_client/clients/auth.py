"""
OAuth2 Client Credentials

Exchanges the application key and secret for a bearer token and produces the
Authorization header for resource calls.
"""

import asyncio
import logging
import time
from typing import Callable, Dict, Optional

from ..exceptions import AuthenticationError
from ..schemas.https import AppTokenRequest, TokenResponse
from .http_client import DwollaClient

logger = logging.getLogger(__name__)

# Tokens are refreshed this many seconds before they actually expire.
EXPIRY_MARGIN = 60


class AppTokenProvider:
    """
    Holds the application's current bearer token.

    A new token is requested on first use and whenever the held one has
    expired. Concurrent callers wait on one refresh instead of each requesting
    a token. Tokens without ``expires_in`` are kept until ``fetch()`` is called
    again.

    Usage:
        ```python
        tokens = AppTokenProvider(client, key, secret)
        headers = await tokens.authorization_headers()
        await client.get(client.api_base_address, HalResource, headers)
        ```
    """

    def __init__(
        self,
        client: DwollaClient,
        key: str,
        secret: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._request = AppTokenRequest(key=key, secret=secret)
        self._clock = clock
        self._token: Optional[TokenResponse] = None
        self._expires_at: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def token_url(self) -> str:
        return f"{self._client.auth_base_address}/token"

    @property
    def token(self) -> Optional[TokenResponse]:
        return self._token

    def is_expired(self) -> bool:
        if self._token is None:
            return True
        return self._expires_at is not None and self._clock() >= self._expires_at

    async def fetch(self) -> TokenResponse:
        """
        Request a new token from the token endpoint.

        Raises:
            DwollaException: If the token endpoint returns an error
            AuthenticationError: If the endpoint answers without a token body
        """
        response = await self._client.post_auth(self.token_url, self._request, TokenResponse)
        token = response.content
        if token is None:
            raise AuthenticationError(f"Token endpoint {self.token_url} returned no token")

        self._token = token
        if token.expires_in is None:
            self._expires_at = None
        else:
            self._expires_at = self._clock() + max(token.expires_in - EXPIRY_MARGIN, 0)
        logger.debug("Obtained %s token, expires_in=%s", token.token_type, token.expires_in)
        return token

    async def authorization_headers(self) -> Dict[str, str]:
        """Return ``{"Authorization": "<type> <token>"}``, fetching a token if needed."""
        if self.is_expired():
            async with self._lock:
                # another caller may have refreshed while this one waited
                if self.is_expired():
                    await self.fetch()
        return {"Authorization": f"{self._token.token_type} {self._token.access_token}"}
