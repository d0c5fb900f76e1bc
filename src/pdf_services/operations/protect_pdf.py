from ..options.protect import PasswordProtectOptions
from .base import Operation


class ProtectPDFOperation(Operation):
    endpoint = "protectpdf"
    options_class = PasswordProtectOptions
    options_required = True
