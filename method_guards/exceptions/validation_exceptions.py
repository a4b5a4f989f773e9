from typing import TYPE_CHECKING, Optional

from method_guards.utils.serialisation import get_exception_error_type

if TYPE_CHECKING:
    from method_guards.contracts import ValidationRule


class ArgumentValidationException(ValueError):
    """
    Raised out of a guarded method when its caller passed a bad argument value.

    Distinct from `GuardException`, which signals misuse of the guard API by the
    guarded method itself.
    """

    def __init__(
        self,
        message: str,
        *,
        param_name: str,
        rule: Optional['ValidationRule'] = None,
    ):
        super().__init__(message)
        self.message = message
        self.param_name = param_name
        self.rule = rule
        self.error_type = get_exception_error_type(self)

    def __str__(self) -> str:
        return f"{self.message} (Parameter '{self.param_name}')"


class MissingRequiredArgumentException(ArgumentValidationException):
    """A `Required` rule saw None."""


class InvalidArgumentValueException(ArgumentValidationException):
    """Any other rule rejected the value."""
