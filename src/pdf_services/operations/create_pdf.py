from typing import Any, Dict

from ..exceptions import ValidationError
from ..file_ref import FileRef, InputType
from ..media_types import MediaType
from ..options.create_pdf import CreatePDFFromHTMLOptions
from .base import Operation, upload_input

HTML_MEDIA_TYPES = frozenset({MediaType.HTML, MediaType.ZIP})

OFFICE_MEDIA_TYPES = frozenset(
    {
        MediaType.DOC,
        MediaType.DOCX,
        MediaType.PPT,
        MediaType.PPTX,
        MediaType.XLS,
        MediaType.XLSX,
        MediaType.RTF,
        MediaType.TXT,
        MediaType.BMP,
        MediaType.GIF,
        MediaType.JPEG,
        MediaType.PNG,
        MediaType.TIFF,
    }
)


class CreatePDFOperation(Operation):
    """
    Create a PDF from an Office document, an image, HTML or a web page.

    HTML may be a single file, a zip bundle with ``index.html`` at its root,
    or a URL. HTML-only options are given with ``CreatePDFFromHTMLOptions``.
    """

    office_endpoint = "createpdf"
    html_endpoint = "htmltopdf"
    supported_media_types = HTML_MEDIA_TYPES | OFFICE_MEDIA_TYPES
    options_class = CreatePDFFromHTMLOptions

    @property
    def endpoint(self) -> str:
        return self.html_endpoint if self.is_html_input else self.office_endpoint

    @property
    def is_html_input(self) -> bool:
        return self._source is not None and (
            self._source.input_type is InputType.URL
            or self._source.media_type in HTML_MEDIA_TYPES
        )

    def check_source(self, source: FileRef) -> None:
        if source.input_type is InputType.URL:
            return
        super().check_source(source)

    def validate_options(self) -> None:
        super().validate_options()
        if self._options is not None and not self.is_html_input:
            raise ValidationError(
                "CreatePDFFromHTMLOptions can only be used with HTML or URL inputs"
            )

    async def build_payload(self, context) -> Dict[str, Any]:
        if self._source.input_type is InputType.URL:
            payload: Dict[str, Any] = {"inputUrl": self._source.input_url}
        else:
            payload = {"assetID": await upload_input(context, self._source)}

        if self.is_html_input:
            options = self._options or CreatePDFFromHTMLOptions.builder().build()
            payload.update(options.to_payload())
        return payload
