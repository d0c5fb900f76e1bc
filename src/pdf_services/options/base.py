"""
Base classes for operation options and their builders.

Options objects are frozen pydantic models created only through a builder.
A builder validates each value as it is set and is consumed by ``build()``.
``validate()`` on the built object re-checks every field and reports all
violations at once.
"""

from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from ..exceptions import UsageError, ValidationError


class OperationOptions(BaseModel):
    """Frozen parameter bag for one operation kind."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    required_fields: ClassVar[Tuple[str, ...]] = ()

    def __setattr__(self, name: str, value: Any) -> None:
        raise UsageError(
            f"{type(self).__name__} is frozen; use its builder to create new options"
        )

    def __delattr__(self, name: str) -> None:
        raise UsageError(f"{type(self).__name__} is frozen; fields cannot be deleted")

    def validate(self) -> None:
        """Check field types, enum domains and required fields.

        Raises:
            ValidationError: Listing every violation in ``details["violations"]``
        """
        violations: List[str] = []
        missing = set()

        for name in self.required_fields:
            value = getattr(self, name, None)
            if value is None or (isinstance(value, (str, tuple, list)) and len(value) == 0):
                violations.append(f"{name} cannot be null or empty")
                missing.add(name)

        values = {name: getattr(self, name, None) for name in type(self).model_fields}
        try:
            type(self).model_validate(values)
        except PydanticValidationError as e:
            for error in e.errors(include_url=False):
                location = ".".join(str(part) for part in error["loc"])
                if error["loc"] and error["loc"][0] in missing:
                    continue
                violations.append(f"{location}: {error['msg']}")

        violations.extend(self.check_constraints())

        if violations:
            raise ValidationError(
                f"Invalid {type(self).__name__}: " + "; ".join(violations),
                {"violations": violations},
            )

    def check_constraints(self) -> List[str]:
        """Cross-field rules; subclasses return violation messages."""
        return []

    def to_payload(self) -> Dict[str, Any]:
        raise NotImplementedError


class OptionsBuilder:
    """Chained-setter builder that produces one frozen options object."""

    options_class: ClassVar[Type[OperationOptions]]

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._consumed = False

    def _check_open(self) -> None:
        if self._consumed:
            raise UsageError(
                f"{type(self).__name__} has already been built; create a new builder"
            )

    def _set(self, name: str, value: Any):
        self._check_open()
        self._values[name] = value
        return self

    def build(self) -> OperationOptions:
        """Freeze the collected values; the builder cannot be reused."""
        self._check_open()
        self._consumed = True
        return self.options_class.model_construct(**self._values)


def freeze_json(value: Any) -> Any:
    """Return a read-only deep copy of a JSON-like value.

    Objects become ``MappingProxyType`` views over fresh dicts and arrays
    become tuples, so neither the caller's original nor the stored copy can
    change the other.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_json(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_json(item) for item in value)
    return value


def thaw_json(value: Any) -> Any:
    """Return a plain ``dict``/``list`` copy of a value made by ``freeze_json``."""
    if isinstance(value, Mapping):
        return {key: thaw_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw_json(item) for item in value]
    return value
