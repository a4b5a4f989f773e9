from dataclasses import dataclass
from typing import Any, Callable

from method_guards.contracts import ValidationRule


@dataclass(frozen=True)
class Predicate(ValidationRule):
    """
    Wrap an arbitrary callable as a rule.

        amount: Annotated[int, Predicate(lambda v: v % 2 == 0, error_message="{name} must be even.")]
    """

    func: Callable[[Any], bool]

    message_key = "predicate"
    default_message = "The field {name} is invalid."

    def is_valid(self, value: Any) -> bool:
        return bool(self.func(value))
