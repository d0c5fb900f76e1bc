from ..options.ocr import OCROptions
from .base import Operation


class OCROperation(Operation):
    """Make a scanned PDF searchable; defaults to en-US and ``searchable_image``."""

    endpoint = "ocr"
    options_class = OCROptions

    def options_payload(self):
        return (self._options or OCROptions.builder().build()).to_payload()
