"""
Pure functions for remote API operations.

Functions for building token requests, parsing responses, and mapping
service failures to SDK exceptions without I/O dependencies.
"""

from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

from ..credentials import Credentials
from ..exceptions import (
    PDFServicesError,
    ServiceApiError,
    ServiceUsageError,
    REQUEST_ID_UNAVAILABLE,
)
from ..models import HttpResult, JobStatus, PollResult, SessionToken

TOKEN_EXPIRY_MARGIN_SECONDS = 60

USAGE_ERROR_CODES = {
    "INSUFFICIENT_QUOTA",
    "QUOTA_EXCEEDED",
    "TRANSACTION_LIMIT_EXCEEDED",
    "RATE_LIMIT_EXCEEDED",
}


def build_token_request_body(credentials: Credentials) -> str:
    """Build the url-encoded authorization-code exchange body."""
    return urlencode(
        [
            ("grant_type", "authorization_code"),
            ("client_id", credentials.client_id),
            ("client_secret", credentials.client_secret),
            ("code", credentials.auth_code),
        ]
    )


def compute_expires_at(now: float, expires_in_ms: Any) -> float:
    """Expiry in epoch seconds, less the safety margin.

    The identity service reports ``expires_in`` in milliseconds.
    """
    return now + float(expires_in_ms) / 1000.0 - TOKEN_EXPIRY_MARGIN_SECONDS


def parse_token_response(result: HttpResult, now: float) -> SessionToken:
    """Turn a token endpoint response into a SessionToken or raise."""
    content = result.content if isinstance(result.content, dict) else {}

    if result.status_code != 200:
        message, error_code = extract_error_details(result.content)
        raise ServiceApiError(
            message,
            request_tracking_id=result.request_id,
            status_code=result.status_code,
            error_code=error_code,
        )

    access_token = content.get("access_token")
    expires_in = content.get("expires_in")
    if not access_token or expires_in is None:
        raise ServiceApiError(
            "Malformed token response: missing access_token or expires_in",
            request_tracking_id=result.request_id,
            status_code=result.status_code,
        )

    return SessionToken(
        access_token=access_token,
        expires_at=compute_expires_at(now, expires_in),
    )


def extract_error_details(content: Any) -> Tuple[str, Optional[str]]:
    """Extract message and error code from any of the service's error shapes.

    Handles ``{"error": "code", "error_description": ...}`` from the identity
    service and ``{"error": {"code", "message"}}`` or ``{"code", "message"}``
    from the platform.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    if isinstance(content, str):
        return (content.strip() or "Unknown error"), None

    if not isinstance(content, dict):
        return "Unknown error", None

    error = content.get("error")
    if isinstance(error, str):
        return content.get("error_description") or error, error

    if isinstance(error, dict):
        code = error.get("code")
        return error.get("message") or code or "Unknown error", code

    code = content.get("code") or content.get("error_code")
    message = content.get("message") or content.get("reason") or code or "Unknown error"
    return message, code


def map_status_code_to_exception(
    status_code: int,
    message: str,
    error_code: Optional[str],
    request_id: Optional[str],
) -> PDFServicesError:
    """Map HTTP status codes to appropriate SDK exceptions."""
    if status_code == 429 or (error_code or "").upper() in USAGE_ERROR_CODES:
        return ServiceUsageError(
            message,
            request_tracking_id=request_id,
            status_code=status_code,
            error_code=error_code,
        )
    return ServiceApiError(
        message,
        request_tracking_id=request_id,
        status_code=status_code,
        error_code=error_code,
    )


def parse_http_error_response(result: HttpResult) -> PDFServicesError:
    """Parse an HTTP error response and return the matching exception."""
    message, error_code = extract_error_details(result.content)
    return map_status_code_to_exception(
        result.status_code, message, error_code, result.request_id or REQUEST_ID_UNAVAILABLE
    )


def parse_poll_response(content: Any, request_id: str) -> Optional[PollResult]:
    """Interpret one status poll.

    Returns None while the job is still running, a PollResult once done, and
    raises ServiceApiError when the job failed.
    """
    if not isinstance(content, dict):
        raise ServiceApiError(
            "Invalid status response: expected JSON object",
            request_tracking_id=request_id,
        )

    raw_status = str(content.get("status", "")).lower()
    try:
        status = JobStatus(raw_status)
    except ValueError:
        raise ServiceApiError(
            f"Invalid status response: unknown status '{raw_status}'",
            request_tracking_id=request_id,
        ) from None

    if status is JobStatus.IN_PROGRESS:
        return None

    if status is JobStatus.FAILED:
        error = content.get("error") or {}
        message, error_code = extract_error_details({"error": error} if error else content)
        status_code = error.get("status") if isinstance(error, dict) else None
        raise map_status_code_to_exception(
            int(status_code or 0), message, error_code, request_id
        )

    asset = content.get("asset") or {}
    metadata = asset.get("metadata") or {}
    return PollResult(
        status=status,
        request_id=request_id,
        download_uri=asset.get("downloadUri"),
        media_type=metadata.get("type"),
        payload=content,
    )


def build_asset_request(media_type: str) -> Dict[str, str]:
    return {"mediaType": media_type}


def parse_asset_response(result: HttpResult) -> Tuple[str, str]:
    """Return (asset_id, upload_uri) from an asset creation response."""
    content = result.content if isinstance(result.content, dict) else {}
    asset_id = content.get("assetID")
    upload_uri = content.get("uploadUri")
    if not asset_id or not upload_uri:
        raise ServiceApiError(
            "Invalid asset response: missing assetID or uploadUri",
            request_tracking_id=result.request_id,
            status_code=result.status_code,
        )
    return asset_id, upload_uri
