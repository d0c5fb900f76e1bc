from typing import Any, Dict, List, Optional, Tuple

from ..config import get_logger
from ..exceptions import UsageError, ValidationError
from ..file_ref import FileRef
from ..options.page_ranges import PageRanges
from .base import Operation, upload_input

logger = get_logger("operations.combine_files")

MIN_INPUTS = 2


class CombineFilesOperation(Operation):
    """
    Combine several PDFs, optionally picking page ranges from each, into one PDF.

    Examples:
        >>> operation = CombineFilesOperation.create_new()
        >>> operation.add_input(FileRef.create_from_local_file("first.pdf"))
        >>> operation.add_input(
        ...     FileRef.create_from_local_file("second.pdf"),
        ...     PageRanges().add_range(1, 3),
        ... )
        >>> result = await operation.execute(context)
    """

    endpoint = "combinepdf"

    def __init__(self, options=None):
        if options is not None:
            raise ValidationError("CombineFilesOperation takes no options")
        super().__init__()
        self._inputs: List[Tuple[FileRef, Optional[PageRanges]]] = []

    def add_input(self, source: FileRef, page_ranges: Optional[PageRanges] = None):
        if source is None:
            raise ValidationError("Input file reference cannot be null")
        if not isinstance(source, FileRef):
            raise ValidationError("Input must be a FileRef")
        if page_ranges is not None:
            if not isinstance(page_ranges, PageRanges):
                raise ValidationError("page_ranges must be a PageRanges instance")
            page_ranges.validate()
        self._inputs.append((source, page_ranges))
        return self

    def set_input(self, source: FileRef):
        return self.add_input(source)

    def validate_inputs(self) -> None:
        if not self._inputs:
            raise UsageError("No input was set for operation")
        if len(self._inputs) < MIN_INPUTS:
            raise ValidationError(f"At least {MIN_INPUTS} files are required to combine")
        for source, _ in self._inputs:
            self.check_source(source)

    async def build_payload(self, context) -> Dict[str, Any]:
        assets = []
        for source, page_ranges in self._inputs:
            asset: Dict[str, Any] = {"assetID": await upload_input(context, source)}
            if page_ranges:
                asset["pageRanges"] = page_ranges.to_payload()
            assets.append(asset)
        logger.info("Combining %d files", len(assets))
        return {"assets": assets}
