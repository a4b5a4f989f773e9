import functools
import inspect
from typing import Any, Callable

from method_guards.core.guard import Guard
from method_guards.core.reflection import MethodHandle


def _method_handle(func: Callable, args: tuple) -> MethodHandle:
    handle = MethodHandle.of(func)
    if handle.declaring_type is None and args:
        receiver = args[0]
        owner = receiver if isinstance(receiver, type) else type(receiver)
        located = MethodHandle.of(func, owner=owner)
        if located.declaring_type is not None:
            return located
    return handle


def guarded(func: Callable) -> Callable:
    """
    Guard every argument of each call to `func`, in signature order.

    The receiver (`self` / `cls`) is skipped. Stack it under `@x.setter` to
    guard a property setter:

        @guarded
        def rename(self, name: Annotated[str, Required()]) -> None: ...

        @title.setter
        @guarded
        def title(self, value: str) -> None: ...
    """
    if isinstance(func, (staticmethod, classmethod)):
        return type(func)(guarded(func.__func__))

    signature = inspect.signature(func)

    def _guard_call(args: tuple, kwargs: dict) -> None:
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()

        method = _method_handle(func, args)
        arguments: list[tuple[str, Any]] = list(bound.arguments.items())
        if not method.is_static:
            arguments = arguments[1:]

        current = Guard(method)
        for name, value in arguments:
            current.argument(name, value)

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            _guard_call(args, kwargs)
            return await func(*args, **kwargs)

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        _guard_call(args, kwargs)
        return func(*args, **kwargs)

    return wrapper
