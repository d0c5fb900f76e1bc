from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ValidationError

DEFAULT_IMS_URI = "https://ims-na1.adobelogin.com/ims/token/v1"
DEFAULT_BASE_URI = "https://pdf-services.adobe.io"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="PDF_SERVICES_", extra="ignore"
    )

    ims_uri: str = DEFAULT_IMS_URI
    base_uri: str = DEFAULT_BASE_URI
    credentials_file: str = "pdfservices-api-credentials.json"

    log_config_file: Optional[str] = "pdfservices-sdk-log-config.json"
    log_level: str = "INFO"
    debug: bool = False

    connect_timeout: float = Field(10.0, gt=0)
    read_timeout: float = Field(10.0, gt=0)
    processing_timeout: float = Field(600.0, gt=0)
    poll_interval: float = Field(1.0, gt=0)
    max_poll_interval: float = Field(10.0, gt=0)
    max_retries: int = Field(3, ge=0)
    retry_delay: float = Field(1.0, ge=0)


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class ClientConfig:
    """Per-context network and polling configuration.

    Attributes:
        connect_timeout: Seconds to wait for a connection
        read_timeout: Seconds to wait for response data
        processing_timeout: Seconds an operation may spend polling
        poll_interval: Initial seconds between status polls
        max_poll_interval: Upper bound on the poll interval
        max_retries: Retries for transient failures (0 disables)
        retry_delay: Base delay for exponential backoff
    """

    connect_timeout: float = 10.0
    read_timeout: float = 10.0
    processing_timeout: float = 600.0
    poll_interval: float = 1.0
    max_poll_interval: float = 10.0
    max_retries: int = 3
    retry_delay: float = 1.0

    def __post_init__(self):
        for name in ("connect_timeout", "read_timeout", "processing_timeout", "poll_interval"):
            if getattr(self, name) <= 0:
                raise ValidationError(f"{name} must be a positive number")
        if self.max_poll_interval < self.poll_interval:
            raise ValidationError("max_poll_interval must not be below poll_interval")
        if self.max_retries < 0:
            raise ValidationError("max_retries cannot be negative")
        if self.retry_delay < 0:
            raise ValidationError("retry_delay cannot be negative")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ClientConfig":
        settings = settings or get_settings()
        return cls(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            processing_timeout=settings.processing_timeout,
            poll_interval=settings.poll_interval,
            max_poll_interval=settings.max_poll_interval,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
        )
