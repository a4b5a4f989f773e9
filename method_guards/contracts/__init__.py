"""Contract classes implemented by rule authors.

Exported so they can be imported directly from :mod:`method_guards`.
"""

from .validation_rule import ValidationRule

__all__ = [
    "ValidationRule",
]
