from dataclasses import dataclass
from typing import Any, Optional

from method_guards.contracts import ValidationRule
from method_guards.core.localization import __


def _length_of(value: Any) -> Optional[int]:
    try:
        return len(value)
    except TypeError:
        return None


@dataclass(frozen=True)
class MinLength(ValidationRule):
    length: int

    message_key = "min_length"
    default_message = "The field {name} must be a string or array type with a minimum length of '{length}'."

    def __post_init__(self):
        if self.length < 0:
            raise ValueError("MinLength requires a non-negative length")

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        length = _length_of(value)
        return length is not None and length >= self.length

    def message_parameters(self) -> dict[str, Any]:
        return {"length": self.length}


@dataclass(frozen=True)
class MaxLength(ValidationRule):
    length: int

    message_key = "max_length"
    default_message = "The field {name} must be a string or array type with a maximum length of '{length}'."

    def __post_init__(self):
        if self.length < 0:
            raise ValueError("MaxLength requires a non-negative length")

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        length = _length_of(value)
        return length is not None and length <= self.length

    def message_parameters(self) -> dict[str, Any]:
        return {"length": self.length}


@dataclass(frozen=True)
class StringLength(ValidationRule):
    """String of at most `maximum` (and at least `minimum`) characters."""

    maximum: int
    minimum: int = 0

    message_key = "string_length"
    default_message = "The field {name} must be a string with a maximum length of {maximum}."

    def __post_init__(self):
        if self.maximum < 0 or self.minimum < 0 or self.minimum > self.maximum:
            raise ValueError("StringLength requires 0 <= minimum <= maximum")

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        return self.minimum <= len(value) <= self.maximum

    def message_parameters(self) -> dict[str, Any]:
        return {"maximum": self.maximum, "minimum": self.minimum}

    def format_message(self, name: str) -> str:
        if self.error_message is None and self.minimum:
            return self._format_with_minimum(name)
        return super().format_message(name)

    def _format_with_minimum(self, name: str) -> str:
        return __(
            "validation.string_length_range",
            {**self.message_parameters(), "name": name},
            default="The field {name} must be a string with a minimum length of {minimum} and a maximum length of {maximum}.",
        )
