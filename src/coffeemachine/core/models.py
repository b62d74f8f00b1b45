"""Core immutable data models: beverages, the resource ledger and interaction states."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Beverage:
    """
    Immutable catalog entry.

    Created once at startup from the machine configuration and never mutated.
    """

    name: str
    """User-facing drink name (e.g., 'espresso')."""

    water_ml: int = 0
    """Water required per cup, in milliliters."""

    milk_ml: int = 0
    """Milk required per cup, in milliliters."""

    beans_g: int = 0
    """Coffee grounds required per cup, in grams."""

    price: int = 0
    """Price credited to the machine on a successful purchase."""

    def __post_init__(self) -> None:
        for name in ("water_ml", "milk_ml", "beans_g", "price"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"Beverage '{self.name}' has negative {name}: {value}")


# Order matters: shortages are reported for the first failing resource.
SHORTAGE_ORDER = ("water", "milk", "coffee beans", "disposable cups")


@dataclass(frozen=True)
class ResourceLedger:
    """
    Machine stock levels and collected money.

    Values are replaced, never edited in place, so each purchase, fill or
    payout is a single update of the interpreter's ledger reference.
    The ledger does not clamp below zero.
    """

    water_ml: int = 0
    milk_ml: int = 0
    beans_g: int = 0
    cups: int = 0
    money: int = 0

    def plus(self, delta: ResourceLedger) -> ResourceLedger:
        """Component-wise sum of all five fields."""
        return ResourceLedger(
            **{f.name: getattr(self, f.name) + getattr(delta, f.name) for f in fields(self)}
        )

    def minus(self, beverage: Beverage) -> ResourceLedger:
        """Debit one cup of ``beverage`` and credit its price."""
        return ResourceLedger(
            water_ml=self.water_ml - beverage.water_ml,
            milk_ml=self.milk_ml - beverage.milk_ml,
            beans_g=self.beans_g - beverage.beans_g,
            cups=self.cups - 1,
            money=self.money + beverage.price,
        )

    def with_money(self, amount: int) -> ResourceLedger:
        return replace(self, money=amount)

    def first_shortage(self, beverage: Beverage) -> str | None:
        """
        Return the first resource that cannot cover ``beverage``.

        Checked in the order water, milk, coffee beans, disposable cups.

        Returns:
            The resource name from SHORTAGE_ORDER, or None if the drink can be made
        """
        available = (self.water_ml, self.milk_ml, self.beans_g, self.cups)
        required = (beverage.water_ml, beverage.milk_ml, beverage.beans_g, 1)
        for resource, have, need in zip(SHORTAGE_ORDER, available, required):
            if have < need:
                return resource
        return None

    def report_lines(self) -> list[str]:
        return [
            "The coffee machine has:",
            f"{self.water_ml} of water",
            f"{self.milk_ml} of milk",
            f"{self.beans_g} of coffee beans",
            f"{self.cups} of disposable cups",
            f"{self.money} of money",
        ]


class Command(str, Enum):
    """Top-level keywords accepted while the machine is idle."""

    BUY = "buy"
    FILL = "fill"
    TAKE = "take"
    REMAINING = "remaining"
    EXIT = "exit"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, token: str) -> Command:
        """Exact, case-sensitive match; anything else is UNKNOWN."""
        for command in cls:
            if command is not cls.UNKNOWN and command.value == token:
                return command
        return cls.UNKNOWN

    @classmethod
    def menu(cls) -> str:
        return "(" + ", ".join(c.value for c in cls if c is not cls.UNKNOWN) + ")"


class StateKind(str, Enum):
    """Tags of the interaction state variants."""

    IDLE = "idle"
    SELECTING_DRINK = "selecting_drink"
    PREPARING_DRINK = "preparing_drink"
    EXTRACTING_MONEY = "extracting_money"
    PRINTING_STATE = "printing_state"
    TERMINATED = "terminated"
    FILLING_WATER = "filling_water"
    FILLING_MILK = "filling_milk"
    FILLING_BEANS = "filling_beans"
    FILLING_CUPS = "filling_cups"
    APPLYING_FILL = "applying_fill"


TRANSIENT_KINDS = frozenset(
    {
        StateKind.PREPARING_DRINK,
        StateKind.EXTRACTING_MONEY,
        StateKind.PRINTING_STATE,
        StateKind.APPLYING_FILL,
    }
)


@dataclass(frozen=True)
class InteractionState:
    """
    Where the interpreter is in its command dialogue.

    Only PREPARING_DRINK uses ``selected_index``; the filling variants and
    APPLYING_FILL carry the fill delta accumulated so far.
    """

    kind: StateKind
    selected_index: Optional[int] = None
    """0-based catalog index of the requested drink (not bounds-checked)."""

    delta: ResourceLedger = field(default_factory=ResourceLedger)
    """Partial fill delta; its money component is always 0."""

    @property
    def is_transient(self) -> bool:
        """Transient states resolve to IDLE within the same accept() call."""
        return self.kind in TRANSIENT_KINDS

    @property
    def is_terminated(self) -> bool:
        return self.kind == StateKind.TERMINATED


IDLE = InteractionState(StateKind.IDLE)
SELECTING_DRINK = InteractionState(StateKind.SELECTING_DRINK)
EXTRACTING_MONEY = InteractionState(StateKind.EXTRACTING_MONEY)
PRINTING_STATE = InteractionState(StateKind.PRINTING_STATE)
TERMINATED = InteractionState(StateKind.TERMINATED)
FILLING_WATER = InteractionState(StateKind.FILLING_WATER)


def preparing_drink(index: int) -> InteractionState:
    return InteractionState(StateKind.PREPARING_DRINK, selected_index=index)


def filling(kind: StateKind, delta: ResourceLedger) -> InteractionState:
    return InteractionState(kind, delta=delta)


class PurchaseOutcome(str, Enum):
    """Result of the latest purchase attempt."""

    MADE = "made"
    NOT_ENOUGH_WATER = "not_enough_water"
    NOT_ENOUGH_MILK = "not_enough_milk"
    NOT_ENOUGH_BEANS = "not_enough_beans"
    NOT_ENOUGH_CUPS = "not_enough_cups"
    INVALID_SELECTION = "invalid_selection"

    @classmethod
    def for_shortage(cls, resource: str) -> PurchaseOutcome:
        return _SHORTAGE_OUTCOMES[resource]


_SHORTAGE_OUTCOMES = dict(
    zip(
        SHORTAGE_ORDER,
        (
            PurchaseOutcome.NOT_ENOUGH_WATER,
            PurchaseOutcome.NOT_ENOUGH_MILK,
            PurchaseOutcome.NOT_ENOUGH_BEANS,
            PurchaseOutcome.NOT_ENOUGH_CUPS,
        ),
    )
)
