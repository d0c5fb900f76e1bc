import asyncio
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from .config import get_logger
from .core.remote import (
    build_asset_request,
    parse_asset_response,
    parse_http_error_response,
    parse_poll_response,
)
from .core.utils import (
    REQUEST_ID_HEADER,
    build_auth_headers,
    build_default_headers,
    calculate_retry_delay,
    classify_request_exception,
    new_request_id,
    parse_retry_after,
    request_id_from_location,
    should_retry_request,
    should_retry_status,
)
from .credentials import Credentials
from .exceptions import (
    NetworkError,
    ServiceApiError,
    TimeoutError,
    ValidationError,
    REQUEST_ID_UNAVAILABLE,
)
from .file_ref import FileRef, InputType
from .models import HttpResult, JobStatus, PollResult
from .settings import ClientConfig

logger = get_logger("remote")


class ServiceClient:
    """Authenticated HTTP client for the PDF Services API."""

    def __init__(
        self,
        credentials: Credentials,
        authenticator,
        client: httpx.AsyncClient,
        config: Optional[ClientConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.credentials = credentials
        self.base_uri = credentials.base_uri.rstrip("/")
        self.config = config or ClientConfig()
        self._authenticator = authenticator
        self._client = client
        self._sleep = sleep
        self._clock = clock

    async def call(
        self,
        method: str,
        uri: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        content: Optional[bytes] = None,
        authenticated: bool = True,
        deadline: Optional[float] = None,
    ) -> HttpResult:
        """
        Perform one logical HTTP call and return its normalized result.

        Transient network failures and 5xx responses are retried with
        exponential backoff. A 401 on an authenticated call forces one token
        refresh followed by one retry. When ``deadline`` (on this client's
        clock) is given, no retry is scheduled past it.

        Raises:
            ServiceApiError: If the service answers with an error status
            ServiceUsageError: If the service rejects the call for quota reasons
            NetworkError: If the service cannot be reached after all retries
            TimeoutError: If the next retry would start after ``deadline``
        """
        attempt = 0
        auth_retried = False
        force_refresh = False

        while True:
            request_id = new_request_id()
            request_headers = build_default_headers(request_id)
            if authenticated:
                token = await self._authenticator.get_session_token(force_refresh)
                force_refresh = False
                request_headers.update(
                    build_auth_headers(token.access_token, self.credentials.client_id)
                )
            if headers:
                request_headers.update(headers)

            logger.debug("%s %s (request id %s, attempt %d)", method, uri, request_id, attempt + 1)
            try:
                response = await self._client.request(
                    method, uri, headers=request_headers, json=json, content=content
                )
            except (httpx.HTTPError, OSError) as e:
                if should_retry_request(attempt, self.config.max_retries, e):
                    delay = calculate_retry_delay(attempt, self.config.retry_delay)
                    self._check_deadline(deadline, delay, uri, request_id)
                    logger.warning(
                        "Request %s %s failed (%s), retrying in %.2fs", method, uri, e, delay
                    )
                    attempt += 1
                    await self._sleep(delay)
                    continue
                kind = classify_request_exception(e)
                logger.error("Request %s %s failed: %s", method, uri, e)
                raise NetworkError(
                    f"{kind.capitalize()} error calling {uri}: {e}",
                    {"uri": uri, "request_id": request_id, "kind": kind},
                ) from e

            result = _to_http_result(response, request_id)

            if 200 <= result.status_code < 300:
                return result

            if result.status_code == 401 and authenticated and not auth_retried:
                logger.info("Request %s %s was rejected with 401, refreshing token", method, uri)
                auth_retried = True
                force_refresh = True
                continue

            if should_retry_status(attempt, self.config.max_retries, result.status_code):
                delay = calculate_retry_delay(attempt, self.config.retry_delay)
                self._check_deadline(deadline, delay, uri, request_id)
                logger.warning(
                    "Request %s %s returned %d, retrying in %.2fs",
                    method,
                    uri,
                    result.status_code,
                    delay,
                )
                attempt += 1
                await self._sleep(delay)
                continue

            error = parse_http_error_response(result)
            logger.error("Request %s %s failed: %s", method, uri, error)
            raise error

    def _check_deadline(
        self, deadline: Optional[float], delay: float, uri: str, request_id: str
    ) -> None:
        if deadline is not None and self._clock() + delay >= deadline:
            logger.error("Request %s cannot be retried before the processing deadline", uri)
            raise TimeoutError(
                "Operation did not complete in time",
                {"uri": uri, "request_id": request_id},
            )

    async def submit(self, endpoint: str, payload: Dict[str, Any]) -> PollResult:
        """Submit an operation and wait for its terminal result."""
        uri = f"{self.base_uri}/operation/{endpoint}"
        result = await self.call("POST", uri, json=payload)

        if result.status_code in (201, 202):
            if not result.location:
                raise ServiceApiError(
                    f"Operation {endpoint} was accepted but no polling URL was returned",
                    request_tracking_id=result.request_id,
                    status_code=result.status_code,
                )
            logger.info(
                "Operation %s accepted, polling %s", endpoint, result.location
            )
            return await self.poll(result.location)

        if result.content is None:
            raise ServiceApiError(
                f"Operation {endpoint} returned an empty response",
                request_tracking_id=result.request_id,
                status_code=result.status_code,
            )

        if isinstance(result.content, dict):
            if "status" in result.content:
                done = parse_poll_response(result.content, result.request_id)
                if done is not None:
                    return done
                raise ServiceApiError(
                    f"Operation {endpoint} is in progress but no polling URL was returned",
                    request_tracking_id=result.request_id,
                    status_code=result.status_code,
                )
            return PollResult(
                status=JobStatus.DONE,
                request_id=result.request_id,
                payload=result.content,
            )

        return PollResult(
            status=JobStatus.DONE,
            request_id=result.request_id,
            media_type=result.headers.get("content-type", "").split(";")[0] or None,
            content=_as_bytes(result.content),
        )

    async def poll(self, location: str, timeout: Optional[float] = None) -> PollResult:
        """
        Poll a status URL until the job is done or failed.

        Raises:
            TimeoutError: If no terminal status arrives within the processing window
            ServiceApiError: If the job failed
        """
        timeout = self.config.processing_timeout if timeout is None else timeout
        deadline = self._clock() + timeout
        request_id = request_id_from_location(location)

        while True:
            try:
                result = await self.call("GET", location, deadline=deadline)
            except TimeoutError as e:
                raise TimeoutError(
                    f"Operation did not complete in time ({timeout:.1f}s)",
                    {"request_id": request_id, "location": location},
                ) from e
            done = parse_poll_response(result.content, request_id)
            if done is not None:
                logger.info("Operation %s completed", request_id)
                return done

            remaining = deadline - self._clock()
            if remaining <= 0:
                logger.error(
                    "Operation %s did not complete within %.1fs", request_id, timeout
                )
                raise TimeoutError(
                    f"Operation did not complete in time ({timeout:.1f}s)",
                    {"request_id": request_id, "location": location},
                )

            delay = parse_retry_after(result.headers.get("retry-after")) or self.config.poll_interval
            await self._sleep(min(delay, self.config.max_poll_interval, remaining))

    async def upload_asset(self, file_ref: FileRef) -> str:
        """Upload a local or stream input and return its asset id."""
        if file_ref.input_type is InputType.URL:
            raise ValidationError("URL inputs cannot be uploaded as assets")
        if not file_ref.media_type:
            raise ValidationError(
                f"Could not determine media type of input {file_ref.file_source}"
            )

        result = await self.call(
            "POST", f"{self.base_uri}/assets", json=build_asset_request(file_ref.media_type)
        )
        asset_id, upload_uri = parse_asset_response(result)

        data = await file_ref.read_content()
        logger.info("Uploading %d bytes as asset %s", len(data), asset_id)
        await self.call(
            "PUT",
            upload_uri,
            content=data,
            headers={"Content-Type": file_ref.media_type},
            authenticated=False,
        )
        return asset_id

    async def download(self, uri: str, destination: Path) -> Path:
        """Stream a result asset into a local file.

        File writes run in the default executor so a large result does not
        block other operations on the loop.
        """
        logger.info("Downloading result to %s", destination)
        loop = asyncio.get_running_loop()
        try:
            async with self._client.stream("GET", uri) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise parse_http_error_response(
                        _to_http_result(response, REQUEST_ID_UNAVAILABLE)
                    )
                f = await loop.run_in_executor(None, open, destination, "wb")
                try:
                    async for chunk in response.aiter_bytes():
                        await loop.run_in_executor(None, f.write, chunk)
                finally:
                    await loop.run_in_executor(None, f.close)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to download result: {e}", {"uri": uri}) from e
        return destination


def _to_http_result(response: httpx.Response, request_id: str) -> HttpResult:
    headers = {k.lower(): v for k, v in response.headers.items()}
    content_type = headers.get("content-type", "")

    if not response.content:
        content = None
    elif "json" in content_type:
        try:
            content = response.json()
        except ValueError:
            content = response.text
    elif content_type.startswith("text/"):
        content = response.text
    else:
        content = response.content

    return HttpResult(
        status_code=response.status_code,
        headers=headers,
        content=content,
        request_id=headers.get(REQUEST_ID_HEADER) or request_id,
    )


def _as_bytes(content: Any) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return content
