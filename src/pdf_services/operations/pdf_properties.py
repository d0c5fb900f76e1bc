from typing import Any, Dict

from ..config import get_logger
from ..exceptions import ServiceApiError
from ..models import PollResult
from ..options.pdf_properties import PDFPropertiesOptions
from .base import Operation

logger = get_logger("operations.pdf_properties")


class PDFPropertiesOperation(Operation):
    """
    Read document properties of a PDF.

    Unlike other operations the result is returned as a dict, not a file.

    Examples:
        >>> operation = PDFPropertiesOperation.create_new(
        ...     PDFPropertiesOptions.builder().include_page_level_properties(True).build()
        ... )
        >>> operation.set_input(FileRef.create_from_local_file("sample.pdf"))
        >>> properties = await operation.execute(context)
        >>> properties["document"]["page_count"]
    """

    endpoint = "pdfproperties"
    options_class = PDFPropertiesOptions

    async def handle_result(self, context, result: PollResult) -> Dict[str, Any]:
        properties = result.payload.get("metadata")
        if properties is None and "status" not in result.payload:
            properties = result.payload or None
        if not isinstance(properties, dict):
            raise ServiceApiError(
                "PDF properties response did not contain metadata",
                request_tracking_id=result.request_id,
            )
        logger.debug("Read %d property groups", len(properties))
        return properties
