"""
PDF Services SDK

Async Python client for the cloud PDF Services API.
"""

__version__ = "1.0.0"

from .credentials import Credentials, CredentialsKind
from .execution_context import ExecutionContext
from .file_ref import FileRef, InputType
from .media_types import MediaType
from .settings import ClientConfig
from .exceptions import (
    PDFServicesError,
    ValidationError,
    UsageError,
    ServiceApiError,
    ServiceUsageError,
    TimeoutError,
    NetworkError,
)
from .operations import (
    CombineFilesOperation,
    CompressPDFOperation,
    CreatePDFOperation,
    DocumentMergeOperation,
    ExtractPDFOperation,
    OCROperation,
    PageManipulationOperation,
    PDFPropertiesOperation,
    ProtectPDFOperation,
)

__all__ = [
    "Credentials",
    "CredentialsKind",
    "ExecutionContext",
    "ClientConfig",
    "FileRef",
    "InputType",
    "MediaType",
    "PDFServicesError",
    "ValidationError",
    "UsageError",
    "ServiceApiError",
    "ServiceUsageError",
    "TimeoutError",
    "NetworkError",
    "CombineFilesOperation",
    "CompressPDFOperation",
    "CreatePDFOperation",
    "DocumentMergeOperation",
    "ExtractPDFOperation",
    "OCROperation",
    "PageManipulationOperation",
    "PDFPropertiesOperation",
    "ProtectPDFOperation",
]
