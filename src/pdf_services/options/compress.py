from enum import Enum
from typing import Any, Dict, Optional

from ..validators import coerce_enum
from .base import OperationOptions, OptionsBuilder


class CompressionLevel(str, Enum):
    """Compression levels; HIGH gives the smallest output, LOW the best quality."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class CompressPDFOptions(OperationOptions):
    """Parameters for compressing a PDF.

    Example:
        >>> options = (
        ...     CompressPDFOptions.builder()
        ...     .with_compression_level(CompressionLevel.MEDIUM)
        ...     .build()
        ... )
    """

    compression_level: Optional[CompressionLevel] = None

    @classmethod
    def builder(cls) -> "CompressPDFOptionsBuilder":
        return CompressPDFOptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        if self.compression_level is None:
            return {}
        return {"compressionLevel": self.compression_level.value}


class CompressPDFOptionsBuilder(OptionsBuilder):
    options_class = CompressPDFOptions

    def with_compression_level(self, compression_level) -> "CompressPDFOptionsBuilder":
        self._check_open()
        return self._set(
            "compression_level",
            coerce_enum(CompressionLevel, compression_level, "compression_level"),
        )
