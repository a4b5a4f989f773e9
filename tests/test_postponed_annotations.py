from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated

import pytest

from method_guards import InvalidArgumentValueException, MinLength, MissingRequiredArgumentException, Required, current_method, guard
from method_guards.core.reflection import get_parameter_rules, get_property_rules

if TYPE_CHECKING:
    from decimal import Decimal


class Ledger(ABC):
    @abstractmethod
    def post(self, account: Annotated[str, Required()], amount: Decimal | None = None) -> None: ...

    @property
    def memo(self) -> Annotated[str, MinLength(3)]:
        return self._memo

    @memo.setter
    def memo(self, value: Decimal | str) -> None:
        guard(current_method()).argument("value", value)
        self._memo = value


class MemoryLedger(Ledger):
    def post(self, account: str, amount: Decimal | None = None) -> None:
        guard(current_method()).argument("account", account)
        self.account = account


def test_interface_rule_fires_when_another_annotation_is_unresolvable():
    ledger = MemoryLedger()
    ledger.post("cash")
    assert ledger.account == "cash"

    with pytest.raises(MissingRequiredArgumentException):
        ledger.post(None)


def test_unresolvable_annotation_loses_only_its_own_rules():
    assert get_parameter_rules(Ledger.post, "account") == [Required()]
    assert get_parameter_rules(Ledger.post, "amount") == []


def test_property_rules_survive_postponed_annotations():
    ledger = MemoryLedger()
    ledger.memo = "rent"
    assert get_property_rules(Ledger.memo) == [MinLength(3)]

    with pytest.raises(InvalidArgumentValueException):
        ledger.memo = "x"


def test_unresolvable_annotation_is_logged_at_debug_level(caplog):
    with caplog.at_level(logging.DEBUG):
        get_parameter_rules(MemoryLedger.post, "account")

    assert "Leaving annotation `amount` of `MemoryLedger.post` unevaluated" in caplog.text
