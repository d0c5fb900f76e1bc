"""
Execution context: credentials, cached session token and API address.
"""

from typing import Optional

import httpx

from .auth import create_authenticator
from .config import SDKConfig, get_logger
from .credentials import Credentials
from .exceptions import ValidationError
from .remote import ServiceClient
from .settings import ClientConfig, get_settings

logger = get_logger("execution_context")


class ExecutionContext:
    """
    Bundle of credentials, authenticator and HTTP client used to run operations.

    One context may run many operations concurrently; they share the session
    token and its single-flight refresh.

    Examples:
        >>> credentials = Credentials.from_file("pdfservices-api-credentials.json")
        >>> async with ExecutionContext.create(credentials) as context:
        ...     result = await operation.execute(context)
    """

    def __init__(
        self,
        credentials: Credentials,
        client_config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if credentials is None:
            raise ValidationError("Credentials cannot be null")

        self.credentials = credentials
        self.client_config = client_config or ClientConfig.from_settings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                self.client_config.read_timeout,
                connect=self.client_config.connect_timeout,
            ),
            follow_redirects=True,
        )
        self.authenticator = create_authenticator(credentials, self._http)
        self.service = ServiceClient(
            credentials, self.authenticator, self._http, self.client_config
        )

    @classmethod
    def create(
        cls,
        credentials: Credentials,
        client_config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ExecutionContext":
        """Create a context, configuring SDK logging on first use."""
        settings = get_settings()
        SDKConfig(
            debug=settings.debug,
            log_level=settings.log_level,
            log_config_file=settings.log_config_file,
        ).setup_logging()

        context = cls(credentials, client_config, http_client)
        logger.debug("Execution context created for %s", credentials)
        return context

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._owns_client:
            await self._http.aclose()
