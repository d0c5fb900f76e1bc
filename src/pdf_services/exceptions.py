"""
Custom exceptions for the PDF Services SDK.
"""

from typing import Dict, Any, Optional

DEFAULT_STATUS_CODE = 0
DEFAULT_ERROR_CODE = "UNKNOWN"
REQUEST_ID_UNAVAILABLE = "UnknownRequestID"


class PDFServicesError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PDFServicesError):
    """Raised when options or file reference fields are invalid.

    Raised locally; nothing is sent over the network.
    """

    pass


class UsageError(PDFServicesError):
    """Raised when the SDK API is misused.

    Examples are saving a non-result file reference, consuming a result twice,
    or mutating a built options object.
    """

    pass


class ServiceApiError(PDFServicesError):
    """Raised when a service API call results in an error."""

    def __init__(
        self,
        message: str,
        request_tracking_id: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message or "Service API error", details)
        self.request_tracking_id = request_tracking_id or REQUEST_ID_UNAVAILABLE
        self.status_code = status_code or DEFAULT_STATUS_CODE
        self.error_code = error_code or DEFAULT_ERROR_CODE

    def __str__(self) -> str:
        return (
            f"description = {self.message}; "
            f"requestTrackingId = {self.request_tracking_id}; "
            f"statusCode = {self.status_code}; "
            f"errorCode = {self.error_code}"
        )


class ServiceUsageError(ServiceApiError):
    """Raised when the service rejects a call for quota or plan limits."""

    pass


class TimeoutError(PDFServicesError):
    """Raised when an operation does not complete within its processing window."""

    pass


class NetworkError(PDFServicesError):
    """Raised when network operations fail after all retries."""

    pass
