from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ValidationError
from .base import OperationOptions, OptionsBuilder, freeze_json, thaw_json

DEFAULT_PAGE_WIDTH = 8.5
DEFAULT_PAGE_HEIGHT = 11.0


class PageLayout(BaseModel):
    """Page size in inches."""

    model_config = ConfigDict(frozen=True)

    page_width: float = Field(DEFAULT_PAGE_WIDTH, gt=0)
    page_height: float = Field(DEFAULT_PAGE_HEIGHT, gt=0)

    def to_payload(self) -> Dict[str, float]:
        return {"pageWidth": self.page_width, "pageHeight": self.page_height}


class CreatePDFFromHTMLOptions(OperationOptions):
    """
    Parameters for rendering HTML (a zip bundle or a URL) to PDF.

    ``data_to_merge`` is exposed to the page as a global ``json`` variable.
    """

    include_header_footer: bool = True
    page_layout: PageLayout = Field(default_factory=PageLayout)
    data_to_merge: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def builder(cls) -> "CreatePDFFromHTMLOptionsBuilder":
        return CreatePDFFromHTMLOptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "includeHeaderFooter": self.include_header_footer,
            "pageLayout": self.page_layout.to_payload(),
        }
        if self.data_to_merge:
            payload["json"] = thaw_json(self.data_to_merge)
        return payload


class CreatePDFFromHTMLOptionsBuilder(OptionsBuilder):
    options_class = CreatePDFFromHTMLOptions

    def includes_header_footer(self, include: bool) -> "CreatePDFFromHTMLOptionsBuilder":
        self._check_open()
        if not isinstance(include, bool):
            raise ValidationError("include_header_footer must be a boolean")
        return self._set("include_header_footer", include)

    def with_page_layout(self, page_layout: PageLayout) -> "CreatePDFFromHTMLOptionsBuilder":
        self._check_open()
        if not isinstance(page_layout, PageLayout):
            raise ValidationError("page_layout must be a PageLayout")
        return self._set("page_layout", page_layout)

    def with_page_size(self, page_width: float, page_height: float) -> "CreatePDFFromHTMLOptionsBuilder":
        self._check_open()
        for name, value in (("page_width", page_width), ("page_height", page_height)):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"{name} must be a positive number")
        return self._set(
            "page_layout", PageLayout(page_width=page_width, page_height=page_height)
        )

    def with_data_to_merge(self, data: Dict[str, Any]) -> "CreatePDFFromHTMLOptionsBuilder":
        self._check_open()
        if not isinstance(data, dict):
            raise ValidationError("data_to_merge must be a JSON object")
        return self._set("data_to_merge", freeze_json(data))
