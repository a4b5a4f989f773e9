"""Exceptions raised by method guards."""

from .common_exceptions import EnvInvalidException
from .guard_exceptions import (
    GuardException,
    InvalidGuardArgumentException,
    NotAnArgumentReferenceException,
    InvalidGuardOperationException,
    MethodNotFoundException,
)
from .validation_exceptions import (
    ArgumentValidationException,
    MissingRequiredArgumentException,
    InvalidArgumentValueException,
)


__all__ = [
    # common
    "EnvInvalidException",
    # guard misuse
    "GuardException",
    "InvalidGuardArgumentException",
    "NotAnArgumentReferenceException",
    "InvalidGuardOperationException",
    "MethodNotFoundException",
    # validation
    "ArgumentValidationException",
    "MissingRequiredArgumentException",
    "InvalidArgumentValueException",
]
