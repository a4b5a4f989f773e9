from abc import ABC, abstractmethod
from typing import Annotated, Protocol

import pytest

from method_guards import (
    MaxLength,
    MethodHandle,
    MethodNotFoundException,
    Required,
    current_method,
    guard,
    implements,
)
from method_guards.core.reflection import (
    get_base_classes,
    get_implemented_interfaces,
    get_interface_map,
    get_parameter_rules,
    get_property_rules,
    is_interface,
)


class Shape(ABC):
    @abstractmethod
    def scale(self, factor: Annotated[float, Required()]) -> None: ...

    @property
    @abstractmethod
    def label(self) -> Annotated[str, MaxLength(8)]: ...

    @label.setter
    @abstractmethod
    def label(self, value: str) -> None: ...


class Drawable(Protocol):
    def draw(self) -> None: ...


class BaseShape(Shape):
    def scale(self, factor: float) -> None:
        self.factor = factor

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        self._label = value


class Square(BaseShape, Drawable):
    def draw(self) -> None:
        pass

    @implements(Shape.scale)
    def resize(self, factor: float) -> None:
        self.handle = current_method()


def test_interfaces_are_abstract_declarations_and_protocols():
    assert is_interface(Shape)
    assert is_interface(Drawable)
    assert not is_interface(BaseShape)
    assert not is_interface(Square)
    assert not is_interface(object)


def test_implemented_interfaces_and_base_classes_follow_mro():
    assert get_implemented_interfaces(Square) == (Shape, Drawable)
    assert get_base_classes(Square) == (BaseShape,)


def test_interface_map_prefers_explicit_implementation():
    targets = {mapping.name: mapping.target_member for mapping in get_interface_map(Square, Shape)}

    assert targets["scale"] is Square.__dict__["resize"]
    assert targets["label"] is BaseShape.__dict__["label"]


def test_interface_map_falls_back_to_name_matching():
    targets = {mapping.name: mapping.target_member for mapping in get_interface_map(BaseShape, Shape)}

    assert targets["scale"] is BaseShape.__dict__["scale"]


def test_current_method_resolves_declaring_type():
    square = Square()
    square.resize(2.0)

    assert square.handle.declaring_type is Square
    assert square.handle.name == "resize"
    assert square.handle.qualified_name == "Square.resize"


def test_current_method_outside_a_resolvable_function_raises():
    def inner(number):
        return current_method()

    with pytest.raises(MethodNotFoundException):
        inner(5)


def test_method_handle_from_members():
    assert MethodHandle.of(BaseShape.scale).declaring_type is BaseShape
    assert MethodHandle.of(Square().scale).declaring_type is BaseShape

    setter_handle = MethodHandle.of(BaseShape.label)
    assert setter_handle.function is BaseShape.label.fset
    assert setter_handle.declaring_type is BaseShape


def test_guard_attributes_for_property_setter():
    setter_guard = guard(BaseShape.label)

    assert setter_guard.declaring_type is BaseShape
    assert setter_guard.bound_property.name == "label"
    assert setter_guard.implemented_interfaces == (Shape,)


def test_guard_attributes_for_ordinary_method():
    method_guard = guard(BaseShape.scale)

    assert method_guard.bound_property is None
    assert method_guard.bound_method.parameters[1].name == "factor"


def test_rules_are_read_from_annotated_metadata():
    assert get_parameter_rules(Shape.scale, "factor") == [Required()]
    assert get_parameter_rules(BaseShape.scale, "factor") == []
    assert get_property_rules(Shape.label) == [MaxLength(8)]


def test_non_rule_annotated_metadata_is_ignored():
    def annotated(value: Annotated[int, "units", Required()]) -> None: ...

    assert get_parameter_rules(annotated, "value") == [Required()]
