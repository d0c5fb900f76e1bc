"""
Validation utilities for SDK inputs.
"""

import re
from pathlib import Path
from typing import Any, Iterable, Optional, Type, TypeVar
from enum import Enum

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class URLValidator:
    """Permissive URL validation for remote inputs."""

    URL_PATTERN = re.compile(
        r"(https?://.)?(www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b"
        r"([-a-zA-Z0-9@:%_+.~#?&/=]*)"
    )

    @classmethod
    def validate_url(cls, url: Any) -> str:
        if url is None or url == "":
            raise ValidationError("Input URL cannot be null or empty")

        if not isinstance(url, str):
            raise ValidationError(
                f"Invalid URL {url} provided for the operation. "
                f"URL cannot be {type(url).__name__}"
            )

        url = url.strip()
        if not cls.URL_PATTERN.search(url):
            raise ValidationError(f"Invalid URL {url} provided for the operation.")

        return url


class MediaTypeValidator:
    """Media type format validation."""

    @classmethod
    def validate_media_type(cls, media_type: Any, required: bool = False) -> Optional[str]:
        if media_type is None or media_type == "":
            if required:
                raise ValidationError("Media type must be provided for a stream")
            return None

        if not isinstance(media_type, str):
            raise ValidationError("Media type must be a string")

        media_type = media_type.strip().lower()

        if len(media_type) > 100:
            raise ValidationError("Media type too long (max 100 characters)")

        if media_type.count("/") != 1:
            raise ValidationError("Media type must contain exactly one '/' separator")

        return media_type


class PathValidator:
    """Local path validation."""

    @classmethod
    def validate_path(cls, path: Any, name: str = "Local file path") -> Path:
        if path is None or (isinstance(path, str) and not path.strip()):
            raise ValidationError(f"{name} must not be empty")

        if not isinstance(path, (str, Path)):
            raise ValidationError(f"{name} must be a string or Path")

        path_obj = Path(str(path).strip()) if isinstance(path, str) else path
        if not path_obj.name:
            raise ValidationError(f"Invalid {name.lower()}: {path}")

        return path_obj


def require_value(value: Any, name: str) -> Any:
    """Reject None, empty strings and empty collections."""
    if value is None:
        raise ValidationError(f"{name} cannot be null")
    if isinstance(value, (str, list, tuple, set, dict)) and len(value) == 0:
        raise ValidationError(f"{name} cannot be null or empty")
    return value


def coerce_enum(enum_cls: Type[E], value: Any, name: str) -> E:
    """Coerce a value (member or raw value) into ``enum_cls``."""
    require_value(value, name)
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise ValidationError(
            f"{name} must be one of {allowed}", {"field": name, "value": value}
        ) from None


def coerce_enums(enum_cls: Type[E], values: Iterable[Any], name: str) -> tuple:
    require_value(values, name)
    values = tuple(require_value(list(values), name))
    return tuple(coerce_enum(enum_cls, value, name) for value in values)
