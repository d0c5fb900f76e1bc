from ..options.compress import CompressPDFOptions
from .base import Operation


class CompressPDFOperation(Operation):
    """
    Reduce the size of a PDF.

    Examples:
        >>> operation = CompressPDFOperation.create_new(
        ...     CompressPDFOptions.builder()
        ...     .with_compression_level(CompressionLevel.MEDIUM)
        ...     .build()
        ... )
        >>> operation.set_input(FileRef.create_from_local_file("sample.pdf"))
        >>> result = await operation.execute(context)
        >>> await result.save_as_file("output/compressed.pdf")
    """

    endpoint = "compresspdf"
    options_class = CompressPDFOptions
