from typing import Any, Dict, Optional

from ..exceptions import ValidationError
from .base import OperationOptions, OptionsBuilder


class PDFPropertiesOptions(OperationOptions):
    include_page_level_properties: Optional[bool] = None

    @classmethod
    def builder(cls) -> "PDFPropertiesOptionsBuilder":
        return PDFPropertiesOptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        if self.include_page_level_properties is None:
            return {}
        return {"pageLevel": self.include_page_level_properties}


class PDFPropertiesOptionsBuilder(OptionsBuilder):
    options_class = PDFPropertiesOptions

    def include_page_level_properties(self, include: bool) -> "PDFPropertiesOptionsBuilder":
        self._check_open()
        if include is None:
            raise ValidationError("include_page_level_properties cannot be null")
        if not isinstance(include, bool):
            raise ValidationError("include_page_level_properties must be a boolean")
        return self._set("include_page_level_properties", include)
