"""
Utility functions for remote SDK operations.
"""

import uuid
from typing import Dict, Optional

import httpx

from .. import __version__
from ..exceptions import REQUEST_ID_UNAVAILABLE

APP_INFO = f"python-pdf-services-sdk-{__version__}"
APP_INFO_HEADER = "x-api-app-info"
REQUEST_ID_HEADER = "x-request-id"
API_KEY_HEADER = "x-api-key"


def new_request_id() -> str:
    return str(uuid.uuid4())


def build_default_headers(request_id: str) -> Dict[str, str]:
    """Build headers sent with every request."""
    return {
        "User-Agent": f"pdf-services-sdk/{__version__}",
        APP_INFO_HEADER: APP_INFO,
        REQUEST_ID_HEADER: request_id,
    }


def build_auth_headers(access_token: Optional[str], client_id: Optional[str]) -> Dict[str, str]:
    """Build authentication headers."""
    headers = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if client_id:
        headers[API_KEY_HEADER] = client_id
    return headers


def request_id_from_location(location: Optional[str]) -> str:
    """The job id in a polling URL, which doubles as tracking id.

    Polling URLs look like ``<base>/operation/<endpoint>/<job id>/status``.
    """
    if not location:
        return REQUEST_ID_UNAVAILABLE
    parts = [part for part in location.split("?")[0].split("/") if part]
    if parts and parts[-1] == "status":
        parts.pop()
    return parts[-1] if parts else REQUEST_ID_UNAVAILABLE


def classify_request_exception(exception: Exception) -> str:
    """Classify exception type for error handling logic."""
    error_msg = str(exception).lower()

    if isinstance(exception, httpx.TimeoutException):
        return "timeout"
    elif isinstance(
        exception, (httpx.NetworkError, httpx.ConnectError, ConnectionError, OSError)
    ):
        return "network"
    elif any(
        term in error_msg
        for term in ["connection", "network", "refused", "unreachable"]
    ):
        return "network"
    else:
        return "unknown"


def should_retry_request(attempt: int, max_retries: int, exception: Exception) -> bool:
    """Determine if request should be retried based on attempt count and exception type."""
    if attempt >= max_retries:
        return False

    retry_exceptions = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
        ConnectionError,
    )

    return isinstance(exception, retry_exceptions)


def should_retry_status(attempt: int, max_retries: int, status_code: int) -> bool:
    """Server-side failures are retried; client errors are not."""
    return attempt < max_retries and status_code >= 500


def calculate_retry_delay(attempt: int, base_delay: float) -> float:
    """Calculate exponential backoff delay for retry attempts."""
    return base_delay * (2**attempt)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None
