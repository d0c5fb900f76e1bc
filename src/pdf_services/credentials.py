"""
Credentials for authorizing calls to the PDF Services API.

Credentials come in two kinds. Service-token credentials are exchanged for a
short-lived session token at the identity (IMS) endpoint. Access-token
credentials carry a bearer token obtained elsewhere and are used as-is.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError, model_validator

from .exceptions import ValidationError
from .settings import get_settings


class CredentialsKind(str, Enum):
    SERVICE_TOKEN = "service_token"
    ACCESS_TOKEN = "access_token"


@dataclass(frozen=True)
class Credentials:
    """Immutable credentials bundle.

    Use the per-kind constructors instead of instantiating directly.

    Example:
        >>> credentials = Credentials.service_token(
        ...     client_id="id", client_secret="secret", auth_code="code"
        ... )
        >>> credentials = Credentials.from_file("pdfservices-api-credentials.json")
    """

    kind: CredentialsKind
    client_id: str
    base_uri: str
    client_secret: Optional[str] = None
    auth_code: Optional[str] = None
    ims_uri: Optional[str] = None
    access_token: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Credentials(kind={self.kind.value!r}, client_id={self.client_id!r}, "
            f"base_uri={self.base_uri!r})"
        )

    @classmethod
    def service_token(
        cls,
        client_id: str,
        client_secret: str,
        auth_code: str,
        ims_uri: Optional[str] = None,
        base_uri: Optional[str] = None,
    ) -> "Credentials":
        settings = get_settings()
        _require(client_id, "client_id")
        _require(client_secret, "client_secret")
        _require(auth_code, "auth_code")
        return cls(
            kind=CredentialsKind.SERVICE_TOKEN,
            client_id=client_id,
            client_secret=client_secret,
            auth_code=auth_code,
            ims_uri=ims_uri or settings.ims_uri,
            base_uri=(base_uri or settings.base_uri).rstrip("/"),
        )

    @classmethod
    def from_access_token(
        cls, client_id: str, access_token: str, base_uri: Optional[str] = None
    ) -> "Credentials":
        _require(client_id, "client_id")
        _require(access_token, "access_token")
        return cls(
            kind=CredentialsKind.ACCESS_TOKEN,
            client_id=client_id,
            access_token=access_token,
            base_uri=(base_uri or get_settings().base_uri).rstrip("/"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path, None] = None) -> "Credentials":
        """Load credentials from a JSON credentials file.

        Defaults to the ``credentials_file`` setting when no path is given.
        """
        path = Path(path or get_settings().credentials_file)
        if not path.is_file():
            raise ValidationError(
                f"Credentials file not found: {path}", {"path": str(path)}
            )

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            parsed = CredentialsFile.model_validate(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Credentials file is not valid JSON: {e}", {"path": str(path)}
            ) from e
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid credentials file {path}: {e.error_count()} error(s)",
                {"path": str(path), "errors": e.errors(include_url=False)},
            ) from e

        return parsed.to_credentials()


def _require(value: Optional[str], name: str) -> None:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} cannot be null or empty")


class ClientCredentialsSection(BaseModel):
    client_id: str
    client_secret: Optional[str] = None


class ServiceTokenSection(BaseModel):
    auth_code: str
    ims_uri: Optional[str] = None


class CredentialsFile(BaseModel):
    """Schema of the credentials JSON file."""

    client_credentials: ClientCredentialsSection
    service_token_credentials: Optional[ServiceTokenSection] = None
    access_token: Optional[str] = None
    base_uri: Optional[str] = None

    @model_validator(mode="after")
    def check_kind(self):
        if self.access_token is None:
            if self.service_token_credentials is None:
                raise ValueError(
                    "either service_token_credentials or access_token is required"
                )
            if not self.client_credentials.client_secret:
                raise ValueError("client_secret is required for service token credentials")
        return self

    def to_credentials(self) -> Credentials:
        if self.access_token is not None:
            return Credentials.from_access_token(
                client_id=self.client_credentials.client_id,
                access_token=self.access_token,
                base_uri=self.base_uri,
            )
        return Credentials.service_token(
            client_id=self.client_credentials.client_id,
            client_secret=self.client_credentials.client_secret,
            auth_code=self.service_token_credentials.auth_code,
            ims_uri=self.service_token_credentials.ims_uri,
            base_uri=self.base_uri,
        )
