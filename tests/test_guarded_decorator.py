from abc import ABC, abstractmethod
from typing import Annotated, Optional

import pytest

from method_guards import (
    InvalidArgumentValueException,
    MaxLength,
    MissingRequiredArgumentException,
    Range,
    RegularExpression,
    Required,
    guarded,
)


class Stock(ABC):
    @abstractmethod
    def add(self, quantity: Annotated[int, Range(1, 100)]) -> None: ...


class Inventory(Stock):
    def __init__(self):
        self.total = 0

    @guarded
    def add(self, quantity: int, note: Annotated[Optional[str], MaxLength(5)] = None) -> None:
        self.total += quantity


class Document:
    @property
    def title(self) -> Annotated[str, Required(), MaxLength(20)]:
        return self._title

    @title.setter
    @guarded
    def title(self, value: str) -> None:
        self._title = value


class Calculator:
    @staticmethod
    @guarded
    def half(number: Annotated[int, Range(0, 100)]) -> float:
        return number / 2

    @classmethod
    @guarded
    def named(cls, name: Annotated[str, Required()]) -> "Calculator":
        return cls()


@guarded
def greet(name: Annotated[str, Required()]) -> str:
    return f"Hello {name}"


@guarded
async def fetch(url: Annotated[str, RegularExpression(r"https://.+")]) -> str:
    return url


def test_guarded_method_checks_interface_rules():
    inventory = Inventory()
    inventory.add(5)
    assert inventory.total == 5

    with pytest.raises(InvalidArgumentValueException) as exc_info:
        inventory.add(0)

    assert exc_info.value.param_name == "quantity"
    assert inventory.total == 5


def test_guarded_method_checks_every_parameter_including_defaults():
    with pytest.raises(InvalidArgumentValueException) as exc_info:
        Inventory().add(5, note="too long")

    assert exc_info.value.param_name == "note"


def test_guarded_property_setter_uses_property_rules():
    document = Document()
    document.title = "Minutes"
    assert document.title == "Minutes"

    with pytest.raises(MissingRequiredArgumentException) as exc_info:
        document.title = None

    assert exc_info.value.message == "The new title value is invalid: The value field is required."


def test_guarded_static_and_class_methods():
    assert Calculator.half(10) == 5

    with pytest.raises(InvalidArgumentValueException):
        Calculator.half(200)

    with pytest.raises(MissingRequiredArgumentException):
        Calculator.named(None)


def test_guarded_plain_function():
    assert greet("Ada") == "Hello Ada"

    with pytest.raises(MissingRequiredArgumentException):
        greet(None)


@pytest.mark.asyncio
async def test_guarded_coroutine_function():
    assert await fetch("https://example.com") == "https://example.com"

    with pytest.raises(InvalidArgumentValueException):
        await fetch("ftp://example.com")
