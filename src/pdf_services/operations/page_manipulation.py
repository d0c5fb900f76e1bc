from ..options.page_actions import PageActionsOptions
from .base import Operation


class PageManipulationOperation(Operation):
    """Rotate or delete pages of a PDF; actions are applied in the order added."""

    endpoint = "pagemanipulation"
    options_class = PageActionsOptions
    options_required = True
