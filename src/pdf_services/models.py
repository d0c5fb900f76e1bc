"""
Data models for tokens, HTTP results and job status.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SessionToken:
    """
    Short-lived bearer token issued by the identity service.

    Attributes:
        access_token: Bearer token value
        expires_at: Epoch seconds after which the token must not be used,
            already reduced by the safety margin. ``None`` never expires.

    Example:
        >>> token = await authenticator.get_session_token()
        >>> headers = {"Authorization": f"Bearer {token.access_token}"}
    """

    access_token: str
    expires_at: Optional[float] = None

    def is_valid(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return True
        now = time.time() if now is None else now
        return now <= self.expires_at


@dataclass
class HttpResult:
    """
    Normalized result of one HTTP call.

    Attributes:
        status_code: HTTP status code
        headers: Response headers with lower-case names
        content: Parsed JSON body, raw bytes, or None for an empty body
        request_id: Tracking id echoed by the service, or the one sent
    """

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: Any = None
    request_id: str = ""

    @property
    def location(self) -> Optional[str]:
        return self.headers.get("location")


class JobStatus(str, Enum):
    IN_PROGRESS = "in progress"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PollResult:
    """
    Terminal state of an asynchronous operation.

    Attributes:
        status: Always ``JobStatus.DONE`` for results handed to callers
        request_id: Tracking id derived from the polling URL
        download_uri: Where the result asset can be fetched, if any
        media_type: Media type reported for the result asset
        payload: Full status response body
        content: Result bytes when the service answered inline
    """

    status: JobStatus
    request_id: str
    download_uri: Optional[str] = None
    media_type: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    content: Optional[bytes] = None
