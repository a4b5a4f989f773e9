from typing import Any, Callable

from method_guards.core.reflection import IMPLEMENTS_ATTRIBUTE, functions_of, member_key
from method_guards.exceptions import InvalidGuardArgumentException


def implements(*interface_members: Any) -> Callable:
    """
    Mark a method or property as the explicit implementation of interface members.

    The decorated member may have any name. Guards resolve rules for it from
    the named interface members instead of from same-named ones.

    Usage:
        class Repository(Store):
            @implements(Store.put)
            def _store_put(self, key: str) -> None:
                guard(current_method()).argument("key", key)

            @implements(Store.name)
            @property
            def _store_name(self) -> str: ...

            @_store_name.setter
            def _store_name(self, value: str) -> None:
                guard(current_method()).argument("value", value)
    """
    if not interface_members:
        raise InvalidGuardArgumentException("At least one interface member is required", param_name="interface_members")

    keys = tuple(member_key(member) for member in interface_members)

    def decorator(member):
        functions = functions_of(member)
        if not functions:
            raise InvalidGuardArgumentException(f"Cannot mark {member!r} as an implementation", param_name="member")

        for function in functions:
            existing = getattr(function, IMPLEMENTS_ATTRIBUTE, ())
            setattr(function, IMPLEMENTS_ATTRIBUTE, existing + keys)
        return member

    return decorator
