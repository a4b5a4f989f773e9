import re
from dataclasses import dataclass
from typing import Any

from method_guards.contracts import ValidationRule


@dataclass(frozen=True)
class RegularExpression(ValidationRule):
    """The whole of `str(value)` must match `pattern`. None and "" pass."""

    pattern: str

    message_key = "regular_expression"
    default_message = "The field {name} must match the regular expression '{pattern}'."

    def __post_init__(self):
        # Fail at declaration time on a broken pattern
        re.compile(self.pattern)

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        text = str(value)
        if text == "":
            return True
        return re.fullmatch(self.pattern, text) is not None

    def message_parameters(self) -> dict[str, Any]:
        return {"pattern": self.pattern}
