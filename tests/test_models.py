"""Tests for core data models."""

import pytest

from coffeemachine.core.models import (
    IDLE,
    Beverage,
    Command,
    InteractionState,
    PurchaseOutcome,
    ResourceLedger,
    StateKind,
    filling,
    preparing_drink,
)

LATTE = Beverage("latte", water_ml=350, milk_ml=75, beans_g=20, price=7)


def test_beverage_immutable():
    """Test that Beverage is frozen."""
    with pytest.raises(Exception):  # FrozenInstanceError
        LATTE.price = 100


def test_beverage_rejects_negative_quantities():
    with pytest.raises(ValueError):
        Beverage("broken", water_ml=-1)


def test_ledger_plus_sums_every_field() -> None:
    ledger = ResourceLedger(water_ml=1, milk_ml=2, beans_g=3, cups=4, money=5)
    total = ledger.plus(ResourceLedger(water_ml=10, milk_ml=20, beans_g=30, cups=40, money=50))
    assert total == ResourceLedger(water_ml=11, milk_ml=22, beans_g=33, cups=44, money=55)
    assert ledger.water_ml == 1


def test_ledger_minus_debits_one_cup_and_credits_price() -> None:
    ledger = ResourceLedger(water_ml=400, milk_ml=540, beans_g=120, cups=9, money=550)
    assert ledger.minus(LATTE) == ResourceLedger(
        water_ml=50, milk_ml=465, beans_g=100, cups=8, money=557
    )


def test_first_shortage_order() -> None:
    empty = ResourceLedger()
    assert empty.first_shortage(LATTE) == "water"
    assert ResourceLedger(water_ml=350).first_shortage(LATTE) == "milk"
    assert ResourceLedger(water_ml=350, milk_ml=75).first_shortage(LATTE) == "coffee beans"
    enough = ResourceLedger(water_ml=350, milk_ml=75, beans_g=20)
    assert enough.first_shortage(LATTE) == "disposable cups"
    assert ResourceLedger(water_ml=350, milk_ml=75, beans_g=20, cups=1).first_shortage(LATTE) is None


def test_first_shortage_with_no_milk_requirement() -> None:
    espresso = Beverage("espresso", water_ml=250, beans_g=16, price=4)
    assert ResourceLedger(water_ml=250, beans_g=16, cups=1).first_shortage(espresso) is None


def test_report_lines_order() -> None:
    ledger = ResourceLedger(water_ml=400, milk_ml=540, beans_g=120, cups=9, money=550)
    assert ledger.report_lines() == [
        "The coffee machine has:",
        "400 of water",
        "540 of milk",
        "120 of coffee beans",
        "9 of disposable cups",
        "550 of money",
    ]


def test_with_money_replaces_only_money() -> None:
    ledger = ResourceLedger(water_ml=1, money=9)
    assert ledger.with_money(0) == ResourceLedger(water_ml=1, money=0)


def test_command_parse_is_exact_and_case_sensitive() -> None:
    assert Command.parse("buy") == Command.BUY
    assert Command.parse("exit") == Command.EXIT
    assert Command.parse("BUY") == Command.UNKNOWN
    assert Command.parse(" buy") == Command.UNKNOWN
    assert Command.parse("") == Command.UNKNOWN
    assert Command.parse("unknown") == Command.UNKNOWN


def test_command_menu() -> None:
    assert Command.menu() == "(buy, fill, take, remaining, exit)"


def test_transient_states() -> None:
    assert preparing_drink(0).is_transient
    assert filling(StateKind.APPLYING_FILL, ResourceLedger()).is_transient
    assert not IDLE.is_transient
    assert not filling(StateKind.FILLING_MILK, ResourceLedger()).is_transient
    assert InteractionState(StateKind.TERMINATED).is_terminated


def test_purchase_outcome_for_shortage() -> None:
    assert PurchaseOutcome.for_shortage("coffee beans") == PurchaseOutcome.NOT_ENOUGH_BEANS
    assert PurchaseOutcome.for_shortage("disposable cups") == PurchaseOutcome.NOT_ENOUGH_CUPS


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
