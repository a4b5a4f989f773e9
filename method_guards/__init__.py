"""
Method Guards - argument validation discovered through the type hierarchy

A method or property setter validates its own arguments against rules attached
to the parameter, the base-class members it overrides and the interface
members it implements:

- Contracts (`ValidationRule`) for writing rules
- Built-in rules (Required, MinLength, Range, ...)
- `guard(current_method()).argument(name, value)` for enforcement
- Decorators (`@implements` for explicit interface implementations, `@guarded`)
- Exceptions separating validation failures from guard misuse
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .contracts import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
from .core.validation_rules import *  # noqa: F401,F403
from .core.localization import __, set_locale, get_locale, trans
from .core.reflection import MethodHandle, PropertyHandle, current_method
from .core.guard import Guard, guard
from .decorators import *  # noqa: F401,F403
from .utils.env_utils import configure_env
