from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from method_guards.core.localization import __


@dataclass(frozen=True)
class ValidationRule(ABC):
    """
    Contract for a single-argument rule attached to a parameter or property.

    Rules are attached through `typing.Annotated` metadata:

        def rename(self, name: Annotated[str, Required(), MaxLength(64)]): ...

    and enforced by `Guard.argument`.

    Attributes:
        error_message: Optional message template (or translation key) replacing
            the rule's default. `{name}` and the rule's own parameters are
            substituted.
        requires_value: Marks the "Required" kind. A None value checked against
            such a rule is reported as a missing argument rather than an
            invalid one.
    """

    error_message: Optional[str] = field(default=None, kw_only=True)

    message_key: ClassVar[Optional[str]] = None
    default_message: ClassVar[str] = "The field {name} is invalid."
    requires_value: ClassVar[bool] = False

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """
        Whether `value` satisfies the rule.

        Implementations must be free of side effects.
        """
        raise NotImplementedError

    def message_parameters(self) -> dict[str, Any]:
        """Placeholders available to the message template besides `{name}`."""
        return {}

    def format_message(self, name: str) -> str:
        """Human readable failure reason for the parameter or property `name`."""
        parameters = {**self.message_parameters(), "name": name}

        if self.error_message is not None:
            return __(self.error_message, parameters, default=self.error_message)

        if self.message_key is None:
            return self.default_message.format(**parameters)

        return __(f"validation.{self.message_key}", parameters, default=self.default_message)
