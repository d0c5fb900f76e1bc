from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..exceptions import ValidationError
from ..validators import coerce_enum, require_value
from .base import OperationOptions, OptionsBuilder, freeze_json, thaw_json


class OutputFormat(str, Enum):
    DOCX = "docx"
    PDF = "pdf"


class DocumentMergeOptions(OperationOptions):
    """
    Parameters for merging JSON data into a Word template.

    ``fragments`` are named reusable snippets referenced from the template as
    ``{{fragment_name}}``.

    Example:
        >>> options = (
        ...     DocumentMergeOptions.builder()
        ...     .with_json_data({"customerName": "Kane Miller"})
        ...     .with_output_format(OutputFormat.PDF)
        ...     .build()
        ... )
    """

    required_fields = ("json_data", "output_format")

    json_data: Optional[Mapping[str, Any]] = None
    output_format: Optional[OutputFormat] = None
    fragments: Optional[Tuple[Mapping[str, Any], ...]] = None

    @classmethod
    def builder(cls) -> "DocumentMergeOptionsBuilder":
        return DocumentMergeOptionsBuilder()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "jsonDataForMerge": thaw_json(self.json_data),
            "outputFormat": self.output_format.value if self.output_format else None,
        }
        if self.fragments:
            payload["fragments"] = thaw_json(self.fragments)
        return payload


class DocumentMergeOptionsBuilder(OptionsBuilder):
    options_class = DocumentMergeOptions

    def with_json_data(self, json_data: Dict[str, Any]) -> "DocumentMergeOptionsBuilder":
        self._check_open()
        require_value(json_data, "json_data")
        if not isinstance(json_data, dict):
            raise ValidationError("json_data must be a JSON object")
        return self._set("json_data", freeze_json(json_data))

    def with_output_format(self, output_format) -> "DocumentMergeOptionsBuilder":
        self._check_open()
        return self._set(
            "output_format", coerce_enum(OutputFormat, output_format, "output_format")
        )

    def add_fragment(self, fragment: Dict[str, Any]) -> "DocumentMergeOptionsBuilder":
        self._check_open()
        require_value(fragment, "fragment")
        if not isinstance(fragment, dict):
            raise ValidationError("fragment must be a JSON object")
        current = self._values.get("fragments") or ()
        return self._set("fragments", current + (freeze_json(fragment),))

    def add_fragments(self, fragments: List[Dict[str, Any]]) -> "DocumentMergeOptionsBuilder":
        require_value(fragments, "fragments")
        for fragment in fragments:
            self.add_fragment(fragment)
        return self
