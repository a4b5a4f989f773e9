import logging
from typing import Any, Optional

from method_guards import config
from method_guards.contracts import ValidationRule
from method_guards.core.reflection import (
    MethodHandle,
    PropertyHandle,
    find_property_from_setter,
    get_implemented_interfaces,
)
from method_guards.core.rule_resolution import find_rules_for_parameter, find_rules_for_property
from method_guards.exceptions import (
    InvalidArgumentValueException,
    InvalidGuardArgumentException,
    InvalidGuardOperationException,
    MissingRequiredArgumentException,
    NotAnArgumentReferenceException,
)
from method_guards.utils.serialisation import describe_value


class Guard:
    """
    Validates the arguments of one executing method (or property setter)
    against every rule attached to the parameter, the members it overrides
    and the interface members it implements.

    Example:
        class Account(AccountContract):
            def deposit(self, amount: Annotated[int, Range(1, 10_000)]) -> None:
                guard(current_method()).argument("amount", amount)
                ...

    A Guard lives for one call and holds no state beyond the method it guards.
    """

    def __init__(self, method: MethodHandle):
        self.bound_method = method
        self.declaring_type = method.declaring_type
        self.bound_property: Optional[PropertyHandle] = None
        self.implemented_interfaces: tuple[type, ...] = ()

        if self.declaring_type is not None:
            self.bound_property = find_property_from_setter(self.declaring_type, method.function)
            self.implemented_interfaces = get_implemented_interfaces(self.declaring_type)

    def __repr__(self) -> str:
        return f"<Guard {self.bound_method.qualified_name}>"

    def argument(self, name: str, value: Any) -> 'Guard':
        """
        Guard an argument value according to every rule that applies to the
        parameter `name` (or, for a property setter, to the property).

        Args:
            name: Name of the parameter holding `value`.
            value: The argument value.

        Returns:
            This Guard, so more `.argument()` calls can be chained.

        Raises:
            MissingRequiredArgumentException: A `Required` rule saw None.
            InvalidArgumentValueException: Any other rule rejected the value.
            NotAnArgumentReferenceException: `name` is not a parameter of the method.
            InvalidGuardOperationException: `name` is not the value parameter of a setter.
        """
        if not isinstance(name, str):
            raise InvalidGuardArgumentException("Argument reference must be a parameter name", param_name="name")

        parameter = self._parameter_named(name)

        if self.bound_property is not None and name != self._setter_value_name():
            raise InvalidGuardOperationException(
                f"Guarding a property setter argument but `{name}` is not the value parameter of `{self.bound_method.qualified_name}`"
            )

        if not config.GUARD_ENABLED:
            return self

        if self.bound_property is not None:
            rules = find_rules_for_property(self.bound_property, self.implemented_interfaces)
            value_descriptor = f"The new {self.bound_property.name} value"
        else:
            rules = find_rules_for_parameter(self.bound_method, parameter, self.implemented_interfaces)
            value_descriptor = f"The {name} argument"

        logging.debug(
            f"[GUARD] {self.bound_method.qualified_name}: checking `{name}`={describe_value(value)} against {len(rules)} rule(s)"
        )

        for rule in rules:
            _guard_from_rule(value, name, value_descriptor, rule)

        return self

    def _parameter_named(self, name: str):
        for parameter in self.bound_method.parameters:
            if parameter.name == name:
                return parameter
        raise NotAnArgumentReferenceException(name, self.bound_method.qualified_name)

    def _setter_value_name(self) -> Optional[str]:
        parameters = self.bound_method.parameters
        return parameters[1].name if len(parameters) > 1 else None


def _guard_from_rule(value: Any, param_name: str, value_descriptor: str, rule: ValidationRule) -> None:
    if rule.requires_value and value is None:
        raise MissingRequiredArgumentException(_failure_message(value_descriptor, param_name, rule), param_name=param_name, rule=rule)

    if not rule.is_valid(value):
        raise InvalidArgumentValueException(_failure_message(value_descriptor, param_name, rule), param_name=param_name, rule=rule)


def _failure_message(value_descriptor: str, param_name: str, rule: ValidationRule) -> str:
    return f"{value_descriptor} is invalid: {rule.format_message(param_name)}"


def guard(method: Any) -> Guard:
    """
    Begin guarding arguments of `method`.

    Args:
        method: A `MethodHandle` (usually `current_method()`), or a function,
            bound method or property accepted by `MethodHandle.of`.

    Raises:
        InvalidGuardArgumentException: `method` is None or not a method.
    """
    if method is None:
        raise InvalidGuardArgumentException("A method to guard is required", param_name="method")
    return Guard(MethodHandle.of(method))
