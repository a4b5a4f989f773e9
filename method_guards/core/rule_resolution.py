"""
Rule discovery for one guarded argument.

Resolution order is own declaration, then the base-class chain (nearest
first), then implemented interfaces (MRO order). Each declaration site
contributes its rules once, in declared order, without de-duplication.
"""

import inspect

from method_guards.contracts import ValidationRule
from method_guards.core.reflection import (
    MethodHandle,
    PropertyHandle,
    find_corresponding_parameter,
    get_implemented_interface_methods,
    get_implemented_interface_properties,
    get_overridden_methods,
    get_overridden_properties,
    get_parameter_rules,
    get_property_rules,
    positional_index,
)


def find_rules_for_parameter(
    method: MethodHandle,
    parameter: inspect.Parameter,
    implemented_interfaces: tuple[type, ...],
) -> list[ValidationRule]:
    """
    Rules for `parameter` of an ordinary method.

    Counterpart parameters on overridden methods are matched by name, then by
    position (a base may name the parameter differently). Interface methods
    are matched by name only.
    """
    rules = list(get_parameter_rules(method.function, parameter.name))
    if method.declaring_type is None:
        return rules

    own_position = positional_index(method.function, parameter.name)
    ancestors = [
        *((function, own_position) for function in get_overridden_methods(method)),
        *((function, None) for function in get_implemented_interface_methods(method, implemented_interfaces)),
    ]
    for function, position in ancestors:
        counterpart = find_corresponding_parameter(function, parameter.name, position)
        if counterpart is not None:
            rules.extend(get_parameter_rules(function, counterpart.name))
    return rules


def find_rules_for_property(
    prop: PropertyHandle,
    implemented_interfaces: tuple[type, ...],
) -> list[ValidationRule]:
    """Rules for the value assigned through a property setter."""
    setter = inspect.unwrap(prop.prop.fset)
    properties = [
        prop,
        *get_overridden_properties(prop),
        *get_implemented_interface_properties(setter, prop.declaring_type, implemented_interfaces),
    ]
    return [rule for site in properties for rule in get_property_rules(site.prop)]
