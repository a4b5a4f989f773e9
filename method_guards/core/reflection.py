"""
Introspection used by the guard engine.

Everything here is read-only over already-defined classes:

- `current_method()` finds the function executing in the caller's frame.
- `MethodHandle` / `PropertyHandle` name a function or property together with
  the class that declares it.
- `get_implemented_interfaces()` / `get_base_classes()` split a class's MRO
  into interfaces and the base-class chain.
- `get_interface_map()` pairs every member of an interface with the member of
  a class that implements it, honouring `@implements` tags before names.
- `get_parameter_rules()` / `get_property_rules()` read rules from
  `typing.Annotated` metadata.

An interface is a `typing.Protocol` class or a class declaring at least one
abstract member in its own body. Other classes in the MRO are base classes.
"""

import abc
import inspect
import logging
import sys
import typing
from dataclasses import dataclass
from functools import lru_cache
from types import CodeType, FrameType
from typing import TYPE_CHECKING, Any, Callable, Optional

import typing_extensions
from typing_extensions import Annotated, get_args, get_origin, get_type_hints

from method_guards import config
from method_guards.contracts import ValidationRule
from method_guards.exceptions import InvalidGuardArgumentException, MethodNotFoundException

if TYPE_CHECKING:
    from method_guards.core.guard import Guard

IMPLEMENTS_ATTRIBUTE = "__guard_implements__"

_NEVER_INTERFACES = (object, abc.ABC, typing.Protocol, typing.Generic, typing_extensions.Protocol)

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class MethodHandle:
    """A function plus the class whose body defines it (None for plain functions)."""

    function: Callable
    declaring_type: Optional[type] = None

    @property
    def name(self) -> str:
        return self.function.__name__

    @property
    def qualified_name(self) -> str:
        if self.declaring_type is not None:
            return f"{self.declaring_type.__qualname__}.{self.name}"
        return self.function.__qualname__

    @property
    def parameters(self) -> list[inspect.Parameter]:
        return list(inspect.signature(self.function).parameters.values())

    @property
    def is_static(self) -> bool:
        if self.declaring_type is None:
            return True
        for member in vars(self.declaring_type).values():
            if isinstance(member, staticmethod) and inspect.unwrap(member.__func__) is self.function:
                return True
        return False

    def guard(self) -> 'Guard':
        from method_guards.core.guard import Guard
        return Guard(self)

    @classmethod
    def of(cls, obj: Any, owner: Optional[type] = None) -> 'MethodHandle':
        """
        Build a handle from a function, bound method, staticmethod/classmethod
        object or property (its setter).

        Args:
            obj: The member to guard.
            owner: A class whose MRO contains the declaring class. When omitted
                the declaring class is looked up through the function's
                `__qualname__`, which does not work for classes defined inside
                functions.
        """
        if isinstance(obj, MethodHandle):
            return obj

        if isinstance(obj, property):
            if obj.fset is None:
                raise InvalidGuardArgumentException("Property has no setter to guard", param_name="method")
            function = obj.fset
        elif isinstance(obj, (staticmethod, classmethod)):
            function = obj.__func__
        elif inspect.ismethod(obj):
            function = obj.__func__
            if owner is None:
                receiver = obj.__self__
                owner = receiver if isinstance(receiver, type) else type(receiver)
        elif inspect.isfunction(obj):
            function = obj
        else:
            raise InvalidGuardArgumentException(f"Not a method: {obj!r}", param_name="method")

        function = inspect.unwrap(function)
        declaring_type = _find_declaring_type(function, owner) if owner is not None else _resolve_qualname(function)
        return cls(function, declaring_type)


@dataclass(frozen=True)
class PropertyHandle:
    name: str
    prop: property
    declaring_type: type


@dataclass(frozen=True)
class InterfaceMapping:
    """One interface member and the member implementing it (None when unimplemented)."""

    name: str
    interface_member: Any
    target_member: Any


# =============================================================================
# Member helpers
# =============================================================================


def functions_of(member: Any) -> list[Callable]:
    """Functions backing a class-body member: accessor functions of a property, the wrapped function of a staticmethod/classmethod."""
    if isinstance(member, property):
        return [f for f in (member.fget, member.fset, member.fdel) if f is not None]
    if isinstance(member, (staticmethod, classmethod)):
        return [member.__func__]
    if inspect.isfunction(member):
        return [member]
    return []


def callable_of(member: Any) -> Optional[Callable]:
    """The function of a method-like member, unwrapped. None for properties and data."""
    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__
    if inspect.isfunction(member):
        return inspect.unwrap(member)
    return None


def member_key(member: Any) -> Any:
    """Identity of an interface member as reached through `Interface.member`."""
    if isinstance(member, property):
        return member
    if isinstance(member, (staticmethod, classmethod)) or inspect.ismethod(member):
        return member.__func__
    if inspect.isfunction(member):
        return member
    raise InvalidGuardArgumentException(f"Not an interface member: {member!r}", param_name="interface_member")


def _function_with_code(member: Any, code: CodeType) -> Optional[Callable]:
    for function in functions_of(member):
        unwrapped = inspect.unwrap(function)
        if getattr(unwrapped, "__code__", None) is code:
            return unwrapped
    return None


def _declares(cls: type, function: Callable) -> bool:
    return any(
        inspect.unwrap(candidate) is function
        for member in vars(cls).values()
        for candidate in functions_of(member)
    )


def _find_declaring_type(function: Callable, owner: type) -> Optional[type]:
    for cls in owner.__mro__:
        if _declares(cls, function):
            return cls
    return None


def _resolve_qualname(function: Callable) -> Optional[type]:
    parts = function.__qualname__.split(".")
    if len(parts) < 2 or "<locals>" in parts:
        return None

    module = sys.modules.get(function.__module__)
    container: Any = module
    for part in parts[:-1]:
        container = getattr(container, part, None)
        if container is None:
            return None

    if isinstance(container, type) and _declares(container, function):
        return container
    return None


# =============================================================================
# Current method
# =============================================================================


def current_method() -> MethodHandle:
    """
    Handle to the function calling `current_method()`.

    Resolves the caller's code object through its qualified name first and,
    for classes defined inside functions, through the MRO of its first
    argument (`self` / `cls`).

    Raises:
        MethodNotFoundException: The caller is not a function reachable either way.
    """
    frame = sys._getframe(1)
    try:
        return _handle_from_frame(frame)
    finally:
        del frame


def _handle_from_frame(frame: FrameType) -> MethodHandle:
    code = frame.f_code

    handle = _handle_from_qualname(code, frame.f_globals)
    if handle is not None:
        return handle

    if code.co_argcount > 0:
        receiver = frame.f_locals.get(code.co_varnames[0])
        owner = receiver if isinstance(receiver, type) else type(receiver)
        for cls in owner.__mro__:
            for member in vars(cls).values():
                function = _function_with_code(member, code)
                if function is not None:
                    return MethodHandle(function, cls)

    raise MethodNotFoundException(f"Could not resolve the currently executing method `{code.co_qualname}`")


def _handle_from_qualname(code: CodeType, module_globals: dict) -> Optional[MethodHandle]:
    parts = code.co_qualname.split(".")
    if "<locals>" in parts:
        return None

    container: Any = module_globals.get(parts[0])
    if len(parts) == 1:
        function = _function_with_code(container, code)
        return MethodHandle(function) if function is not None else None

    for part in parts[1:-1]:
        if not isinstance(container, type):
            return None
        container = vars(container).get(part)

    if not isinstance(container, type):
        return None

    function = _function_with_code(vars(container).get(parts[-1]), code)
    return MethodHandle(function, container) if function is not None else None


# =============================================================================
# Hierarchy
# =============================================================================


def is_interface(cls: type) -> bool:
    if cls in _NEVER_INTERFACES:
        return False
    if vars(cls).get("_is_protocol", False):
        return True
    return any(getattr(member, "__isabstractmethod__", False) for member in vars(cls).values())


def get_implemented_interfaces(cls: type) -> tuple[type, ...]:
    """Every interface in the MRO of `cls` (excluding `cls`), in MRO order."""
    return tuple(base for base in cls.__mro__[1:] if is_interface(base))


def get_base_classes(cls: type) -> tuple[type, ...]:
    """The non-interface ancestors of `cls`, nearest first."""
    return tuple(
        base for base in cls.__mro__[1:]
        if base not in _NEVER_INTERFACES and not is_interface(base)
    )


def find_property_from_setter(cls: type, setter: Callable) -> Optional[PropertyHandle]:
    for name, member in vars(cls).items():
        if isinstance(member, property) and member.fset is not None and inspect.unwrap(member.fset) is setter:
            return PropertyHandle(name, member, cls)
    return None


def _is_interface_member(name: str, member: Any) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return isinstance(member, property) or callable_of(member) is not None


def _explicit_implementations(cls: type) -> dict[Any, Any]:
    implementations: dict[Any, Any] = {}
    for base in cls.__mro__:
        for member in vars(base).values():
            for function in functions_of(member):
                for key in getattr(function, IMPLEMENTS_ATTRIBUTE, ()):
                    implementations.setdefault(key, member)
    return implementations


def _implicit_implementation(cls: type, interface: type, name: str) -> Any:
    for base in cls.__mro__:
        if name not in vars(base):
            continue
        if base is interface:
            return None
        member = vars(base)[name]
        if getattr(member, "__isabstractmethod__", False):
            return None
        return member
    return None


def get_interface_map(cls: type, interface: type) -> list[InterfaceMapping]:
    """
    Pair each member declared by `interface` with the member of `cls` implementing it.

    A member tagged with `@implements(interface.member)` anywhere in the MRO of
    `cls` wins (most derived first). Otherwise the first non-abstract member of
    the same name found along the MRO is the implementation.
    """
    explicit = _explicit_implementations(cls)
    mappings = []
    for name, member in vars(interface).items():
        if not _is_interface_member(name, member):
            continue
        target = explicit.get(member_key(member))
        if target is None:
            target = _implicit_implementation(cls, interface, name)
        mappings.append(InterfaceMapping(name, member, target))
    return mappings


def get_implemented_interface_methods(method: MethodHandle, interfaces: tuple[type, ...]) -> list[Callable]:
    """Interface methods implemented by `method`, in interface order."""
    implemented = []
    for interface in interfaces:
        for mapping in get_interface_map(method.declaring_type, interface):
            if isinstance(mapping.interface_member, property):
                continue
            if callable_of(mapping.target_member) is method.function:
                implemented.append(callable_of(mapping.interface_member))
    return implemented


def get_implemented_interface_properties(setter: Callable, declaring_type: type, interfaces: tuple[type, ...]) -> list[PropertyHandle]:
    """Interface properties whose implementation on `declaring_type` has `setter` as its setter."""
    implemented = []
    for interface in interfaces:
        for mapping in get_interface_map(declaring_type, interface):
            target = mapping.target_member
            if not isinstance(mapping.interface_member, property) or not isinstance(target, property):
                continue
            if target.fset is not None and inspect.unwrap(target.fset) is setter:
                implemented.append(PropertyHandle(mapping.name, mapping.interface_member, interface))
    return implemented


def get_overridden_methods(method: MethodHandle) -> list[Callable]:
    """Same-named functions on the base-class chain of the declaring type, nearest first."""
    overridden = []
    for base in get_base_classes(method.declaring_type):
        function = callable_of(vars(base).get(method.name))
        if function is not None:
            overridden.append(function)
    return overridden


def get_overridden_properties(prop: PropertyHandle) -> list[PropertyHandle]:
    overridden = []
    for base in get_base_classes(prop.declaring_type):
        member = vars(base).get(prop.name)
        if isinstance(member, property):
            overridden.append(PropertyHandle(prop.name, member, base))
    return overridden


def find_corresponding_parameter(function: Callable, name: str, position: Optional[int]) -> Optional[inspect.Parameter]:
    """
    The parameter of `function` matching `name`, or failing that the
    positional parameter at `position` (None for keyword-only lookups).
    """
    parameters = list(inspect.signature(function).parameters.values())
    for parameter in parameters:
        if parameter.name == name:
            return parameter
    if position is not None and position < len(parameters) and parameters[position].kind in _POSITIONAL_KINDS:
        return parameters[position]
    return None


def positional_index(function: Callable, name: str) -> Optional[int]:
    for index, parameter in enumerate(inspect.signature(function).parameters.values()):
        if parameter.name == name:
            return index if parameter.kind in _POSITIONAL_KINDS else None
    return None


# =============================================================================
# Rule metadata
# =============================================================================


def _resolve_annotations(function: Callable) -> dict[str, Any]:
    try:
        return get_type_hints(function, include_extras=True)
    except (NameError, TypeError, SyntaxError) as e:
        logging.debug(f"[GUARD] Could not evaluate annotations of `{function.__qualname__}` together: {e}")

    # One unresolvable entry must not hide the rules on the others
    globalns = getattr(function, "__globals__", {})
    return {
        name: _evaluate_annotation(function, name, annotation, globalns)
        for name, annotation in inspect.get_annotations(function).items()
    }


def _evaluate_annotation(function: Callable, name: str, annotation: Any, globalns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns)
    except (NameError, TypeError, SyntaxError, AttributeError) as e:
        logging.debug(f"[GUARD] Leaving annotation `{name}` of `{function.__qualname__}` unevaluated: {e}")
        return annotation


_annotation_cache: Optional[Callable[[Callable], dict[str, Any]]] = None


def _annotations_of(function: Callable) -> dict[str, Any]:
    global _annotation_cache
    if _annotation_cache is None:
        _annotation_cache = lru_cache(maxsize=config.GUARD_ANNOTATION_CACHE_SIZE)(_resolve_annotations)
    return _annotation_cache(function)


def clear_annotation_cache() -> None:
    global _annotation_cache
    _annotation_cache = None


def rules_from_annotation(annotation: Any) -> list[ValidationRule]:
    if get_origin(annotation) is not Annotated:
        return []
    return [metadata for metadata in get_args(annotation)[1:] if isinstance(metadata, ValidationRule)]


def get_parameter_rules(function: Callable, parameter_name: str) -> list[ValidationRule]:
    return rules_from_annotation(_annotations_of(inspect.unwrap(function)).get(parameter_name))


def get_property_rules(prop: property) -> list[ValidationRule]:
    """Rules on the getter's return annotation."""
    if prop.fget is None:
        return []
    return rules_from_annotation(_annotations_of(inspect.unwrap(prop.fget)).get("return"))

