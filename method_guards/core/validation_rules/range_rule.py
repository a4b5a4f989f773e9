from dataclasses import dataclass
from typing import Any

from method_guards.contracts import ValidationRule


@dataclass(frozen=True)
class Range(ValidationRule):
    """Inclusive bounds. None passes; values not comparable with the bounds fail."""

    minimum: Any
    maximum: Any

    message_key = "range"
    default_message = "The field {name} must be between {minimum} and {maximum}."

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise ValueError("Range requires minimum <= maximum")

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        try:
            return bool(self.minimum <= value <= self.maximum)
        except TypeError:
            return False

    def message_parameters(self) -> dict[str, Any]:
        return {"minimum": self.minimum, "maximum": self.maximum}
