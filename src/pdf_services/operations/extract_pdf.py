from ..media_types import MediaType
from ..options.extract import ExtractPDFOptions
from .base import Operation


class ExtractPDFOperation(Operation):
    """Extract text, tables and figures from a PDF into a zip archive."""

    endpoint = "extractpdf"
    options_class = ExtractPDFOptions
    options_required = True
    result_media_type = MediaType.ZIP
