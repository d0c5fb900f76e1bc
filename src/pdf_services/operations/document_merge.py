from ..media_types import MediaType
from ..options.document_merge import DocumentMergeOptions, OutputFormat
from .base import Operation


class DocumentMergeOperation(Operation):
    """
    Merge JSON data into a Word template, producing DOCX or PDF.

    Examples:
        >>> options = (
        ...     DocumentMergeOptions.builder()
        ...     .with_json_data(json.loads(Path("data.json").read_text()))
        ...     .with_output_format(OutputFormat.PDF)
        ...     .build()
        ... )
        >>> operation = DocumentMergeOperation.create_new(options)
        >>> operation.set_input(FileRef.create_from_local_file("template.docx"))
        >>> result = await operation.execute(context)
    """

    endpoint = "documentgeneration"
    supported_media_types = frozenset({MediaType.DOCX})
    options_class = DocumentMergeOptions
    options_required = True

    @property
    def result_media_type(self) -> str:
        if self._options is not None and self._options.output_format is OutputFormat.DOCX:
            return MediaType.DOCX
        return MediaType.PDF
