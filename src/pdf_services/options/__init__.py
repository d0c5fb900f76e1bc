from .base import OperationOptions, OptionsBuilder
from .compress import CompressionLevel, CompressPDFOptions, CompressPDFOptionsBuilder
from .create_pdf import CreatePDFFromHTMLOptions, CreatePDFFromHTMLOptionsBuilder, PageLayout
from .document_merge import DocumentMergeOptions, DocumentMergeOptionsBuilder, OutputFormat
from .extract import (
    ExtractElementType,
    ExtractPDFOptions,
    ExtractPDFOptionsBuilder,
    ExtractRenditionsElementType,
    TableStructureType,
)
from .ocr import OCROptions, OCROptionsBuilder, OCRSupportedLocale, OCRSupportedType
from .page_actions import (
    PageAction,
    PageActionsOptions,
    PageActionsOptionsBuilder,
    PageActionType,
    RotationAngle,
)
from .page_ranges import PageRange, PageRanges
from .pdf_properties import PDFPropertiesOptions, PDFPropertiesOptionsBuilder
from .protect import (
    ContentEncryption,
    EncryptionAlgorithm,
    PasswordProtectOptions,
    PasswordProtectOptionsBuilder,
    Permission,
)

__all__ = [
    "OperationOptions",
    "OptionsBuilder",
    "CompressionLevel",
    "CompressPDFOptions",
    "CompressPDFOptionsBuilder",
    "CreatePDFFromHTMLOptions",
    "CreatePDFFromHTMLOptionsBuilder",
    "PageLayout",
    "DocumentMergeOptions",
    "DocumentMergeOptionsBuilder",
    "OutputFormat",
    "ExtractElementType",
    "ExtractPDFOptions",
    "ExtractPDFOptionsBuilder",
    "ExtractRenditionsElementType",
    "TableStructureType",
    "OCROptions",
    "OCROptionsBuilder",
    "OCRSupportedLocale",
    "OCRSupportedType",
    "PageAction",
    "PageActionsOptions",
    "PageActionsOptionsBuilder",
    "PageActionType",
    "RotationAngle",
    "PageRange",
    "PageRanges",
    "PDFPropertiesOptions",
    "PDFPropertiesOptionsBuilder",
    "ContentEncryption",
    "EncryptionAlgorithm",
    "PasswordProtectOptions",
    "PasswordProtectOptionsBuilder",
    "Permission",
]
