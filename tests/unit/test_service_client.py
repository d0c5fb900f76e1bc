"""
Tests for the authenticated HTTP layer: retries, 401 refresh, error mapping,
polling and transfers.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pdf_services.auth import ServiceTokenAuthenticator
from pdf_services.exceptions import (
    NetworkError,
    ServiceApiError,
    ServiceUsageError,
    TimeoutError,
    ValidationError,
)
from pdf_services.file_ref import FileRef
from pdf_services.models import JobStatus
from pdf_services.remote import ServiceClient
from pdf_services.settings import ClientConfig
from tests.helpers.fake_service import BASE_URI, DOWNLOAD_PREFIX, UPLOAD_PREFIX


class Sleeper:
    """Records sleeps instead of waiting."""

    def __init__(self, clock=None):
        self.delays = []
        self.clock = clock

    async def __call__(self, delay):
        self.delays.append(delay)
        if self.clock is not None:
            self.clock.now += delay


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_service(credentials, client, config=None, sleep=None, clock=None):
    return ServiceClient(
        credentials,
        ServiceTokenAuthenticator(credentials, client),
        client,
        config or ClientConfig(max_retries=2, retry_delay=0.5),
        sleep=sleep or Sleeper(),
        **({"clock": clock} if clock else {}),
    )


class TestCall:
    @pytest.mark.asyncio
    async def test_authenticated_headers(self, credentials, fake_service):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            await service.call("POST", f"{BASE_URI}/assets", json={"mediaType": "application/pdf"})

        request = fake_service.requests[-1]
        assert request.headers["authorization"] == "Bearer token-1"
        assert request.headers["x-api-key"] == "test-client-id"
        assert request.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_retries_server_errors_with_backoff(self, credentials, fake_service):
        attempts = {"count": 0}

        def flaky(request):
            attempts["count"] += 1
            if attempts["count"] < 3:
                return httpx.Response(503, json={"error": {"code": "UNAVAILABLE"}})
            return None

        fake_service.override("POST", f"{BASE_URI}/assets", flaky)
        sleeper = Sleeper()
        async with fake_service.client() as client:
            service = make_service(credentials, client, sleep=sleeper)
            result = await service.call(
                "POST", f"{BASE_URI}/assets", json={"mediaType": "application/pdf"}
            )

        assert result.status_code == 200
        assert attempts["count"] == 3
        assert sleeper.delays == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_retry_exhaustion_raises_api_error(self, credentials, fake_service):
        fake_service.override(
            "POST",
            f"{BASE_URI}/assets",
            lambda request: httpx.Response(500, json={"error": {"code": "INTERNAL"}}),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await service.call("POST", f"{BASE_URI}/assets", json={})

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == "INTERNAL"

    @pytest.mark.asyncio
    async def test_no_retry_on_client_error(self, credentials, fake_service):
        calls = {"count": 0}

        def bad_request(request):
            calls["count"] += 1
            return httpx.Response(400, json={"error": {"code": "BAD", "message": "nope"}})

        fake_service.override("POST", f"{BASE_URI}/assets", bad_request)
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError, match="nope"):
                await service.call("POST", f"{BASE_URI}/assets", json={})

        assert calls["count"] == 1

    @pytest.mark.asyncio
    async def test_401_refreshes_token_once(self, credentials, fake_service):
        def reject_first_token(request):
            if request.headers["authorization"] == "Bearer token-1":
                return httpx.Response(401, json={"error": {"code": "UNAUTHORIZED"}})
            return None

        fake_service.override("POST", f"{BASE_URI}/assets", reject_first_token)
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            result = await service.call("POST", f"{BASE_URI}/assets", json={"mediaType": "x/y"})

        assert result.status_code == 200
        assert len(fake_service.token_requests) == 2

    @pytest.mark.asyncio
    async def test_repeated_401_fails(self, credentials, fake_service):
        fake_service.override(
            "POST",
            f"{BASE_URI}/assets",
            lambda request: httpx.Response(401, json={"error": {"code": "UNAUTHORIZED"}}),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await service.call("POST", f"{BASE_URI}/assets", json={})

        assert exc_info.value.status_code == 401
        assert len(fake_service.token_requests) == 2

    @pytest.mark.asyncio
    async def test_429_is_usage_error(self, credentials, fake_service):
        fake_service.override(
            "POST",
            f"{BASE_URI}/assets",
            lambda request: httpx.Response(429, json={"error": {"code": "TOO_MANY_REQUESTS"}}),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceUsageError):
                await service.call("POST", f"{BASE_URI}/assets", json={})

    @pytest.mark.asyncio
    async def test_transport_errors_retried_then_network_error(self, credentials, fake_service):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        fake_service.override("POST", f"{BASE_URI}/assets", refuse)
        sleeper = Sleeper()
        async with fake_service.client() as client:
            service = make_service(credentials, client, sleep=sleeper)
            with pytest.raises(NetworkError) as exc_info:
                await service.call("POST", f"{BASE_URI}/assets", json={})

        assert exc_info.value.details["kind"] == "network"
        assert len(sleeper.delays) == 2

    @pytest.mark.asyncio
    async def test_401_then_transport_errors_refreshes_once(self, credentials, fake_service):
        calls = {"count": 0}

        def reject_then_refuse(request):
            calls["count"] += 1
            if calls["count"] == 1:
                return httpx.Response(401, json={"error": {"code": "UNAUTHORIZED"}})
            raise httpx.ConnectError("connection refused", request=request)

        fake_service.override("POST", f"{BASE_URI}/assets", reject_then_refuse)
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(NetworkError):
                await service.call("POST", f"{BASE_URI}/assets", json={})

        assert calls["count"] == 4
        assert len(fake_service.token_requests) == 2


class TestSubmitAndPoll:
    @pytest.mark.asyncio
    async def test_submit_polls_until_done(self, credentials, fake_service):
        fake_service.polls_in_progress = 2
        sleeper = Sleeper()
        async with fake_service.client() as client:
            service = make_service(
                credentials,
                client,
                config=ClientConfig(poll_interval=0.2, max_poll_interval=1),
                sleep=sleeper,
            )
            result = await service.submit("compresspdf", {"assetID": "a"})

        assert result.status is JobStatus.DONE
        assert result.request_id == "job-1"
        assert result.download_uri == f"{DOWNLOAD_PREFIX}job-1"
        assert sleeper.delays == [0.2, 0.2]

    @pytest.mark.asyncio
    async def test_retry_after_is_capped(self, credentials, fake_service):
        calls = {"count": 0}

        def slow_status(request):
            calls["count"] += 1
            if calls["count"] == 1:
                return httpx.Response(
                    200, json={"status": "in progress"}, headers={"retry-after": "30"}
                )
            return None

        fake_service.override("GET", f"{BASE_URI}/operation/", slow_status)
        sleeper = Sleeper()
        async with fake_service.client() as client:
            service = make_service(
                credentials,
                client,
                config=ClientConfig(poll_interval=0.1, max_poll_interval=2),
                sleep=sleeper,
            )
            await service.submit("ocr", {"assetID": "a"})

        assert sleeper.delays == [2]

    @pytest.mark.asyncio
    async def test_poll_timeout(self, credentials, fake_service):
        fake_service.polls_in_progress = 1000
        clock = Clock()
        sleeper = Sleeper(clock)
        async with fake_service.client() as client:
            service = make_service(
                credentials,
                client,
                config=ClientConfig(processing_timeout=3, poll_interval=1, max_poll_interval=1),
                sleep=sleeper,
                clock=clock,
            )
            with pytest.raises(TimeoutError) as exc_info:
                await service.submit("compresspdf", {"assetID": "a"})

        assert exc_info.value.details["request_id"] == "job-1"
        assert sum(sleeper.delays) == 3

    @pytest.mark.asyncio
    async def test_failed_job(self, credentials, fake_service):
        fake_service.override(
            "GET",
            f"{BASE_URI}/operation/",
            lambda request: httpx.Response(
                200,
                json={
                    "status": "failed",
                    "error": {"code": "BAD_PDF", "message": "Input is corrupt", "status": 400},
                },
            ),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await service.submit("compresspdf", {"assetID": "a"})

        assert exc_info.value.error_code == "BAD_PDF"

    @pytest.mark.asyncio
    async def test_inline_json_result(self, credentials, fake_service):
        fake_service.override(
            "POST",
            f"{BASE_URI}/operation/",
            lambda request: httpx.Response(200, json={"metadata": {"pages": 3}}),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            result = await service.submit("pdfproperties", {"assetID": "a"})

        assert result.payload == {"metadata": {"pages": 3}}
        assert result.download_uri is None

    @pytest.mark.asyncio
    async def test_inline_binary_result(self, credentials, fake_service):
        fake_service.override(
            "POST",
            f"{BASE_URI}/operation/",
            lambda request: httpx.Response(
                200, content=b"%PDF-inline", headers={"Content-Type": "application/pdf"}
            ),
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            result = await service.submit("compresspdf", {"assetID": "a"})

        assert result.content == b"%PDF-inline"
        assert result.media_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_poll_transport_failures_stop_at_deadline(self, credentials, fake_service):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        fake_service.override("GET", f"{BASE_URI}/operation/", refuse)
        clock = Clock()
        sleeper = Sleeper(clock)
        async with fake_service.client() as client:
            service = make_service(
                credentials,
                client,
                config=ClientConfig(processing_timeout=3, max_retries=10, retry_delay=1),
                sleep=sleeper,
                clock=clock,
            )
            with pytest.raises(TimeoutError) as exc_info:
                await service.submit("compresspdf", {"assetID": "a"})

        assert exc_info.value.details["request_id"] == "job-1"
        assert sleeper.delays == [1]
        assert clock.now < 3

    @pytest.mark.asyncio
    async def test_accepted_without_location_fails(self, credentials, fake_service):
        fake_service.override(
            "POST", f"{BASE_URI}/operation/", lambda request: httpx.Response(202)
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await service.submit("compresspdf", {"assetID": "a"})

        assert exc_info.value.status_code == 202
        assert "no polling URL" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_empty_inline_response_fails(self, credentials, fake_service):
        fake_service.override(
            "POST", f"{BASE_URI}/operation/", lambda request: httpx.Response(200)
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError, match="empty response"):
                await service.submit("compresspdf", {"assetID": "a"})


class TestTransfers:
    @pytest.mark.asyncio
    async def test_upload_asset(self, credentials, fake_service, sample_pdf):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            asset_id = await service.upload_asset(FileRef.create_from_local_file(sample_pdf))

        assert asset_id == "asset-1"
        assert fake_service.uploads["asset-1"] == sample_pdf.read_bytes()
        upload = [r for r in fake_service.requests if str(r.url).startswith(UPLOAD_PREFIX)][0]
        assert "authorization" not in upload.headers
        assert upload.headers["content-type"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_url_input_cannot_be_uploaded(self, credentials, fake_service):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ValidationError):
                await service.upload_asset(FileRef.create_from_url("https://example.com/page"))

    @pytest.mark.asyncio
    async def test_download(self, credentials, fake_service, tmp_path):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            path = await service.download(f"{DOWNLOAD_PREFIX}job-1", tmp_path / "out.pdf")

        assert path.read_bytes() == fake_service.result_content

    @pytest.mark.asyncio
    async def test_download_error(self, credentials, fake_service, tmp_path):
        fake_service.override(
            "GET", DOWNLOAD_PREFIX, lambda request: httpx.Response(403, text="expired link")
        )
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with pytest.raises(ServiceApiError) as exc_info:
                await service.download(f"{DOWNLOAD_PREFIX}job-1", tmp_path / "out.pdf")

        assert exc_info.value.status_code == 403
        assert not (tmp_path / "out.pdf").exists()

    @pytest.mark.asyncio
    async def test_download_writes_in_executor(self, credentials, fake_service, tmp_path):
        loop = asyncio.get_running_loop()
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with patch.object(
                loop, "run_in_executor", wraps=loop.run_in_executor
            ) as mock_executor:
                path = await service.download(f"{DOWNLOAD_PREFIX}job-1", tmp_path / "out.pdf")

        assert path.read_bytes() == fake_service.result_content
        assert mock_executor.call_args_list[0].args[1] is open
        assert mock_executor.call_count >= 3


class TestTransportMocks:
    @pytest.mark.asyncio
    async def test_read_timeouts_retried(self, credentials, fake_service):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            await service._authenticator.get_session_token()

            timeout = httpx.ReadTimeout("read timed out")
            with patch.object(
                service._client, "request", AsyncMock(side_effect=timeout)
            ) as mock_request:
                with pytest.raises(NetworkError) as exc_info:
                    await service.call("GET", f"{BASE_URI}/operation/x/job/status")

        assert mock_request.call_count == 3
        assert exc_info.value.details["kind"] == "timeout"

    @pytest.mark.asyncio
    async def test_unauthenticated_call_skips_token(self, credentials, fake_service):
        async with fake_service.client() as client:
            service = make_service(credentials, client)
            with patch.object(
                service._authenticator, "get_session_token", AsyncMock()
            ) as mock_token:
                await service.call("PUT", f"{UPLOAD_PREFIX}asset-1", content=b"x", authenticated=False)

        mock_token.assert_not_called()
