"""
Page ranges used by page manipulation and combine operations.

Pages are 1-based and ranges are inclusive.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..exceptions import ValidationError


class PageRange(BaseModel):
    """Inclusive range; ``end=None`` runs to the last page."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(1, ge=1)
    end: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "PageRange":
        if self.end is not None and self.end < self.start:
            raise ValueError(f"end page {self.end} is before start page {self.start}")
        return self

    def to_payload(self) -> Dict[str, int]:
        payload = {"start": self.start}
        if self.end is not None:
            payload["end"] = self.end
        return payload


class PageRanges:
    """Ordered collection of page ranges.

    Examples:
        >>> ranges = PageRanges().add_single_page(1).add_range(3, 5)
        >>> PageRanges.parse("1,3-5,8-")
    """

    def __init__(self, ranges: Optional[List[PageRange]] = None):
        self._ranges: List[PageRange] = list(ranges or [])

    def add_single_page(self, page: int) -> "PageRanges":
        return self.add_range(page, page)

    def add_range(self, start: int, end: int) -> "PageRanges":
        self._ranges.append(_make_range(start, end))
        return self

    def add_all_from(self, start: int) -> "PageRanges":
        self._ranges.append(_make_range(start, None))
        return self

    @classmethod
    def parse(cls, text: str) -> "PageRanges":
        """Parse ``"1,3-5,8-"`` style notation."""
        if not text or not text.strip():
            raise ValidationError("Page ranges cannot be null or empty")

        ranges = cls()
        for part in text.split(","):
            part = part.strip()
            if not part:
                raise ValidationError(f"Invalid page ranges: {text!r}")
            start, sep, end = part.partition("-")
            try:
                start_page = int(start) if start.strip() else 1
                end_page = int(end) if end.strip() else None
            except ValueError:
                raise ValidationError(f"Invalid page range: {part!r}") from None
            if sep:
                ranges._ranges.append(_make_range(start_page, end_page))
            else:
                ranges.add_single_page(start_page)
        return ranges

    def validate(self) -> None:
        if not self._ranges:
            raise ValidationError("No page ranges were set")

    def to_payload(self) -> List[Dict[str, int]]:
        return [page_range.to_payload() for page_range in self._ranges]

    @property
    def ranges(self) -> Tuple[PageRange, ...]:
        return tuple(self._ranges)

    def __iter__(self) -> Iterator[PageRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __repr__(self) -> str:
        return f"PageRanges({self.to_payload()!r})"


def _make_range(start: Any, end: Any) -> PageRange:
    for name, value in (("start", start), ("end", end)):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValidationError(f"Page range {name} must be an integer")
    if start is None or start < 1:
        raise ValidationError("Page numbers start at 1", {"start": start})
    if end is not None and end < start:
        raise ValidationError(
            f"Invalid page range {start}-{end}: end is before start",
            {"start": start, "end": end},
        )
    return PageRange(start=start, end=end)
