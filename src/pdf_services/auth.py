"""
Session token authentication.

``ServiceTokenAuthenticator`` exchanges service-token credentials for a
short-lived session token and caches it until shortly before expiry.
Refreshes are single-flight: concurrent callers that find the token stale
wait on one exchange instead of racing their own.
"""

import asyncio
import time
from typing import Callable, Optional

import httpx

from .config import get_logger
from .credentials import Credentials, CredentialsKind
from .core.remote import build_token_request_body, parse_token_response
from .core.utils import REQUEST_ID_HEADER, build_default_headers, new_request_id
from .exceptions import NetworkError, UsageError, REQUEST_ID_UNAVAILABLE
from .models import HttpResult, SessionToken

logger = get_logger("auth")


class ServiceTokenAuthenticator:
    """Exchanges an authorization code for session tokens."""

    def __init__(
        self,
        credentials: Credentials,
        client: httpx.AsyncClient,
        clock: Callable[[], float] = time.time,
    ):
        if credentials.kind is not CredentialsKind.SERVICE_TOKEN:
            raise UsageError("ServiceTokenAuthenticator requires service token credentials")
        self._credentials = credentials
        self._client = client
        self._clock = clock
        self._token: Optional[SessionToken] = None
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def token(self) -> Optional[SessionToken]:
        return self._token

    async def get_session_token(self, force_refresh: bool = False) -> SessionToken:
        """Return a valid session token, refreshing it when needed.

        Args:
            force_refresh: Exchange a new token even if the cached one is valid

        Raises:
            ServiceApiError: If the identity service rejects the exchange
            NetworkError: If the identity service cannot be reached
        """
        token = self._token
        if token is not None and not force_refresh and token.is_valid(self._clock()):
            return token

        seen_generation = self._generation
        async with self._lock:
            # Another caller refreshed while we waited for the lock
            if self._generation != seen_generation and self._token is not None:
                if self._token.is_valid(self._clock()):
                    return self._token

            token = await self._refresh_session_token()
            self._token = token
            self._generation += 1
            return token

    async def _refresh_session_token(self) -> SessionToken:
        request_id = new_request_id()
        headers = build_default_headers(request_id)
        headers["Content-Type"] = "application/x-www-form-urlencoded"

        logger.debug("Requesting session token, request id %s", request_id)
        try:
            response = await self._client.post(
                self._credentials.ims_uri,
                content=build_token_request_body(self._credentials),
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error("Session token request failed: %s", e)
            raise NetworkError(
                f"Failed to reach identity service: {e}",
                {"ims_uri": self._credentials.ims_uri},
            ) from e

        result = HttpResult(
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            content=_parse_body(response),
            request_id=response.headers.get(REQUEST_ID_HEADER) or REQUEST_ID_UNAVAILABLE,
        )

        token = parse_token_response(result, self._clock())
        logger.info("Session token refreshed")
        return token


class StaticTokenAuthenticator:
    """Serves a caller-supplied access token that never expires locally."""

    def __init__(self, credentials: Credentials):
        if credentials.kind is not CredentialsKind.ACCESS_TOKEN:
            raise UsageError("StaticTokenAuthenticator requires access token credentials")
        self._token = SessionToken(access_token=credentials.access_token)

    @property
    def token(self) -> SessionToken:
        return self._token

    async def get_session_token(self, force_refresh: bool = False) -> SessionToken:
        return self._token


def create_authenticator(credentials: Credentials, client: httpx.AsyncClient):
    """Pick the authenticator for the credentials kind."""
    if credentials.kind is CredentialsKind.SERVICE_TOKEN:
        return ServiceTokenAuthenticator(credentials, client)
    if credentials.kind is CredentialsKind.ACCESS_TOKEN:
        return StaticTokenAuthenticator(credentials)
    raise UsageError(f"Unsupported credentials kind: {credentials.kind}")


def _parse_body(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text
