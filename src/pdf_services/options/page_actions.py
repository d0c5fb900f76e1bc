from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..exceptions import ValidationError
from .base import OperationOptions, OptionsBuilder
from .page_ranges import PageRange, PageRanges


class RotationAngle(int, Enum):
    ANGLE_90 = 90
    ANGLE_180 = 180
    ANGLE_270 = 270


class PageActionType(str, Enum):
    ROTATE = "rotate"
    DELETE = "delete"


class PageAction(BaseModel):
    """One rotate or delete action over a set of page ranges."""

    model_config = ConfigDict(frozen=True)

    action: PageActionType
    page_ranges: Tuple[PageRange, ...]
    angle: Optional[RotationAngle] = None

    def to_payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "pageRanges": [page_range.to_payload() for page_range in self.page_ranges]
        }
        if self.action is PageActionType.ROTATE:
            body["angle"] = self.angle.value
        return {"pageAction": {self.action.value: body}}


class PageActionsOptions(OperationOptions):
    """Ordered rotate and delete actions applied to a PDF."""

    required_fields = ("actions",)

    actions: Tuple[PageAction, ...] = ()

    @classmethod
    def builder(cls) -> "PageActionsOptionsBuilder":
        return PageActionsOptionsBuilder()

    def check_constraints(self) -> List[str]:
        violations = []
        for index, action in enumerate(self.actions or ()):
            if action.action is PageActionType.ROTATE and action.angle is None:
                violations.append(f"actions.{index}: rotate action requires an angle")
            if not action.page_ranges:
                violations.append(f"actions.{index}: page ranges cannot be empty")
        return violations

    def to_payload(self) -> Dict[str, Any]:
        return {"pageActions": [action.to_payload() for action in self.actions]}


class PageActionsOptionsBuilder(OptionsBuilder):
    """
    Examples:
        >>> options = (
        ...     PageActionsOptions.builder()
        ...     .add_rotate(RotationAngle.ANGLE_90, PageRanges().add_range(1, 2))
        ...     .add_delete(PageRanges().add_single_page(4))
        ...     .build()
        ... )
    """

    options_class = PageActionsOptions

    def add_rotate(self, angle, page_ranges: PageRanges) -> "PageActionsOptionsBuilder":
        self._check_open()
        if isinstance(angle, bool):
            raise ValidationError("angle must be one of 90, 180, 270")
        try:
            angle = RotationAngle(angle)
        except ValueError:
            raise ValidationError(
                "angle must be one of 90, 180, 270", {"field": "angle", "value": angle}
            ) from None
        return self._append(
            PageAction(
                action=PageActionType.ROTATE,
                page_ranges=_ranges(page_ranges),
                angle=angle,
            )
        )

    def add_delete(self, page_ranges: PageRanges) -> "PageActionsOptionsBuilder":
        self._check_open()
        return self._append(
            PageAction(action=PageActionType.DELETE, page_ranges=_ranges(page_ranges))
        )

    def _append(self, action: PageAction) -> "PageActionsOptionsBuilder":
        current = self._values.get("actions") or ()
        return self._set("actions", current + (action,))


def _ranges(page_ranges: Any) -> Tuple[PageRange, ...]:
    if page_ranges is None:
        raise ValidationError("page_ranges cannot be null")
    if not isinstance(page_ranges, PageRanges):
        raise ValidationError("page_ranges must be a PageRanges instance")
    page_ranges.validate()
    return page_ranges.ranges
