from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import Field

from ..exceptions import ValidationError
from ..validators import coerce_enum, coerce_enums, require_value
from .base import OperationOptions, OptionsBuilder


class EncryptionAlgorithm(str, Enum):
    AES_128 = "AES_128"
    AES_256 = "AES_256"


class ContentEncryption(str, Enum):
    ALL_CONTENT = "ALL_CONTENT"
    ALL_CONTENT_EXCEPT_METADATA = "ALL_CONTENT_EXCEPT_METADATA"


class Permission(str, Enum):
    PRINT_LOW_QUALITY = "PRINT_LOW_QUALITY"
    PRINT_HIGH_QUALITY = "PRINT_HIGH_QUALITY"
    EDIT_CONTENT = "EDIT_CONTENT"
    EDIT_DOCUMENT_ASSEMBLY = "EDIT_DOCUMENT_ASSEMBLY"
    EDIT_ANNOTATIONS = "EDIT_ANNOTATIONS"
    EDIT_FILL_AND_SIGN_FORM_FIELDS = "EDIT_FILL_AND_SIGN_FORM_FIELDS"
    COPY_CONTENT = "COPY_CONTENT"


class PasswordProtectOptions(OperationOptions):
    """
    Parameters for securing a PDF with passwords and permissions.

    A user password restricts opening the document. An owner password
    restricts changing its permissions and is required whenever permissions
    or content encryption are set.

    Example:
        >>> options = (
        ...     PasswordProtectOptions.builder()
        ...     .set_user_password("open-me")
        ...     .set_owner_password("admin")
        ...     .set_encryption_algorithm(EncryptionAlgorithm.AES_256)
        ...     .set_permissions([Permission.PRINT_LOW_QUALITY])
        ...     .build()
        ... )
    """

    required_fields = ("encryption_algorithm",)

    user_password: Optional[str] = Field(None, repr=False)
    owner_password: Optional[str] = Field(None, repr=False)
    encryption_algorithm: Optional[EncryptionAlgorithm] = None
    content_encryption: Optional[ContentEncryption] = None
    permissions: Optional[Tuple[Permission, ...]] = None

    @classmethod
    def builder(cls) -> "PasswordProtectOptionsBuilder":
        return PasswordProtectOptionsBuilder()

    def check_constraints(self) -> List[str]:
        violations = []
        if not self.user_password and not self.owner_password:
            violations.append("one of user_password or owner_password is required")
        if (self.permissions or self.content_encryption) and not self.owner_password:
            violations.append(
                "owner_password is required when permissions or content_encryption are set"
            )
        return violations

    def to_payload(self) -> Dict[str, Any]:
        passwords = {}
        if self.user_password:
            passwords["userPassword"] = self.user_password
        if self.owner_password:
            passwords["ownerPassword"] = self.owner_password

        payload: Dict[str, Any] = {
            "passwordProtection": passwords,
            "encryptionAlgorithm": self.encryption_algorithm.value,
        }
        if self.content_encryption is not None:
            payload["contentToEncrypt"] = self.content_encryption.value
        if self.permissions:
            payload["permissions"] = [permission.value for permission in self.permissions]
        return payload


class PasswordProtectOptionsBuilder(OptionsBuilder):
    options_class = PasswordProtectOptions

    def set_user_password(self, user_password: str) -> "PasswordProtectOptionsBuilder":
        self._check_open()
        return self._set("user_password", _password(user_password, "user_password"))

    def set_owner_password(self, owner_password: str) -> "PasswordProtectOptionsBuilder":
        self._check_open()
        return self._set("owner_password", _password(owner_password, "owner_password"))

    def set_encryption_algorithm(self, algorithm) -> "PasswordProtectOptionsBuilder":
        self._check_open()
        return self._set(
            "encryption_algorithm",
            coerce_enum(EncryptionAlgorithm, algorithm, "encryption_algorithm"),
        )

    def set_content_encryption(self, content_encryption) -> "PasswordProtectOptionsBuilder":
        self._check_open()
        return self._set(
            "content_encryption",
            coerce_enum(ContentEncryption, content_encryption, "content_encryption"),
        )

    def set_permissions(self, permissions: Iterable) -> "PasswordProtectOptionsBuilder":
        """Replace the permission set; duplicates are dropped, order is kept."""
        self._check_open()
        coerced = coerce_enums(Permission, permissions, "permissions")
        return self._set("permissions", tuple(dict.fromkeys(coerced)))

    def add_permission(self, permission) -> "PasswordProtectOptionsBuilder":
        self._check_open()
        current = self._values.get("permissions") or ()
        coerced = coerce_enum(Permission, permission, "permission")
        return self._set("permissions", tuple(dict.fromkeys(current + (coerced,))))


def _password(value: Any, name: str) -> str:
    require_value(value, name)
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value
