from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import ValidationError
from ..validators import coerce_enum, coerce_enums
from .base import OperationOptions, OptionsBuilder


class ExtractElementType(str, Enum):
    TEXT = "text"
    TABLES = "tables"


class ExtractRenditionsElementType(str, Enum):
    TABLES = "tables"
    FIGURES = "figures"


class TableStructureType(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


class ExtractPDFOptions(OperationOptions):
    """
    Parameters for extracting structured content from a PDF.

    The result is a zip archive holding ``structuredData.json`` plus any
    requested renditions (figure images, table files).
    """

    required_fields = ("elements_to_extract",)

    elements_to_extract: Optional[Tuple[ExtractElementType, ...]] = None
    renditions_to_extract: Optional[Tuple[ExtractRenditionsElementType, ...]] = None
    get_char_bounds: Optional[bool] = None
    table_output_format: Optional[TableStructureType] = None
    include_styling: Optional[bool] = None

    @classmethod
    def builder(cls) -> "ExtractPDFOptionsBuilder":
        return ExtractPDFOptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "elementsToExtract": [element.value for element in self.elements_to_extract or ()]
        }
        if self.renditions_to_extract:
            payload["renditionsToExtract"] = [
                element.value for element in self.renditions_to_extract
            ]
        if self.get_char_bounds is not None:
            payload["getCharBounds"] = self.get_char_bounds
        if self.table_output_format is not None:
            payload["tableOutputFormat"] = self.table_output_format.value
        if self.include_styling is not None:
            payload["includeStyling"] = self.include_styling
        return payload


class ExtractPDFOptionsBuilder(OptionsBuilder):
    options_class = ExtractPDFOptions

    def add_elements_to_extract(self, *elements) -> "ExtractPDFOptionsBuilder":
        self._check_open()
        return self._set(
            "elements_to_extract",
            coerce_enums(ExtractElementType, elements, "elements_to_extract"),
        )

    def add_elements_to_extract_renditions(self, *elements) -> "ExtractPDFOptionsBuilder":
        self._check_open()
        return self._set(
            "renditions_to_extract",
            coerce_enums(ExtractRenditionsElementType, elements, "renditions_to_extract"),
        )

    def add_char_info(self, get_char_bounds: bool) -> "ExtractPDFOptionsBuilder":
        self._check_open()
        return self._set("get_char_bounds", _flag(get_char_bounds, "get_char_bounds"))

    def add_table_structure_format(self, table_format) -> "ExtractPDFOptionsBuilder":
        self._check_open()
        return self._set(
            "table_output_format",
            coerce_enum(TableStructureType, table_format, "table_output_format"),
        )

    def get_styling_info(self, include_styling: bool) -> "ExtractPDFOptionsBuilder":
        self._check_open()
        return self._set("include_styling", _flag(include_styling, "include_styling"))


def _flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean", {"field": name, "value": value})
    return value
