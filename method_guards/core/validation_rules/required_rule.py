from dataclasses import dataclass
from typing import Any

from method_guards.contracts import ValidationRule


@dataclass(frozen=True)
class Required(ValidationRule):
    """
    The value must be present.

    None is reported as a missing argument. Blank strings are rejected as
    invalid values unless `allow_empty_strings` is set.
    """

    allow_empty_strings: bool = False

    message_key = "required"
    default_message = "The {name} field is required."
    requires_value = True

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and not self.allow_empty_strings:
            return value.strip() != ""
        return True
