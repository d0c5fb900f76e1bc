from .base import Operation
from .combine_files import CombineFilesOperation
from .compress_pdf import CompressPDFOperation
from .create_pdf import CreatePDFOperation
from .document_merge import DocumentMergeOperation
from .extract_pdf import ExtractPDFOperation
from .ocr import OCROperation
from .page_manipulation import PageManipulationOperation
from .pdf_properties import PDFPropertiesOperation
from .protect_pdf import ProtectPDFOperation

__all__ = [
    "Operation",
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
