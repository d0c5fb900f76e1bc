import asyncio

import httpx
import pytest

from pdf_services.auth import (
    ServiceTokenAuthenticator,
    StaticTokenAuthenticator,
    create_authenticator,
)
from pdf_services.credentials import Credentials
from pdf_services.exceptions import NetworkError, ServiceApiError, UsageError
from tests.helpers.fake_service import IMS_URI


class Clock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestServiceTokenAuthenticator:
    @pytest.mark.asyncio
    async def test_token_is_cached(self, credentials, fake_service):
        async with fake_service.client() as client:
            authenticator = ServiceTokenAuthenticator(credentials, client)

            first = await authenticator.get_session_token()
            second = await authenticator.get_session_token()

        assert first is second
        assert len(fake_service.token_requests) == 1
        assert fake_service.token_requests[0]["code"] == ["test-auth-code"]

    @pytest.mark.asyncio
    async def test_refresh_after_expiry_margin(self, credentials, fake_service):
        fake_service.expires_in = 120_000
        clock = Clock()
        async with fake_service.client() as client:
            authenticator = ServiceTokenAuthenticator(credentials, client, clock=clock)

            first = await authenticator.get_session_token()
            clock.now += 59
            assert await authenticator.get_session_token() is first

            clock.now += 2
            second = await authenticator.get_session_token()

        assert second.access_token != first.access_token
        assert len(fake_service.token_requests) == 2

    @pytest.mark.asyncio
    async def test_force_refresh(self, credentials, fake_service):
        async with fake_service.client() as client:
            authenticator = ServiceTokenAuthenticator(credentials, client)
            await authenticator.get_session_token()
            await authenticator.get_session_token(force_refresh=True)

        assert len(fake_service.token_requests) == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_refresh(self, credentials, fake_service):
        async with fake_service.client() as client:
            authenticator = ServiceTokenAuthenticator(credentials, client)
            tokens = await asyncio.gather(
                *(authenticator.get_session_token() for _ in range(10))
            )

        assert len(fake_service.token_requests) == 1
        assert len({token.access_token for token in tokens}) == 1

    @pytest.mark.asyncio
    async def test_request_carries_tracking_headers(self, credentials, fake_service):
        async with fake_service.client() as client:
            await ServiceTokenAuthenticator(credentials, client).get_session_token()

        request = fake_service.requests[0]
        assert request.headers["x-request-id"]
        assert request.headers["x-api-app-info"].startswith("python-pdf-services-sdk-")
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_invalid_client(self, credentials, fake_service):
        fake_service.override(
            "POST",
            IMS_URI,
            lambda request: httpx.Response(
                401,
                json={"error": "invalid_client"},
                headers={"x-request-id": request.headers["x-request-id"]},
            ),
        )
        async with fake_service.client() as client:
            authenticator = ServiceTokenAuthenticator(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await authenticator.get_session_token()

        error = exc_info.value
        assert error.status_code == 401
        assert error.error_code == "invalid_client"
        assert error.request_tracking_id == fake_service.requests[0].headers["x-request-id"]
        assert authenticator.token is None

    @pytest.mark.asyncio
    async def test_error_without_request_id_uses_sentinel(self, credentials, fake_service):
        fake_service.override(
            "POST", IMS_URI, lambda request: httpx.Response(400, json={"error": "invalid_grant"})
        )
        async with fake_service.client() as client:
            with pytest.raises(ServiceApiError) as exc_info:
                await ServiceTokenAuthenticator(credentials, client).get_session_token()

        assert exc_info.value.request_tracking_id == "UnknownRequestID"

    @pytest.mark.asyncio
    async def test_unreachable_identity_service(self, credentials):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(NetworkError):
                await ServiceTokenAuthenticator(credentials, client).get_session_token()

    def test_rejects_access_token_credentials(self):
        credentials = Credentials.from_access_token("id", "token")
        with pytest.raises(UsageError):
            ServiceTokenAuthenticator(credentials, httpx.AsyncClient())


class TestStaticTokenAuthenticator:
    @pytest.mark.asyncio
    async def test_returns_given_token(self):
        authenticator = StaticTokenAuthenticator(Credentials.from_access_token("id", "bearer"))
        token = await authenticator.get_session_token(force_refresh=True)
        assert token.access_token == "bearer"
        assert token.is_valid()

    def test_factory_picks_by_kind(self, credentials):
        client = httpx.AsyncClient()
        assert isinstance(create_authenticator(credentials, client), ServiceTokenAuthenticator)
        assert isinstance(
            create_authenticator(Credentials.from_access_token("id", "t"), client),
            StaticTokenAuthenticator,
        )
