"""Command interpreter: feeds tokens through the state machine and applies side effects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from coffeemachine.core.catalog import BeverageCatalog, load_machine_config
from coffeemachine.core.interfaces import ConsoleDisplay, Display
from coffeemachine.core.models import (
    IDLE,
    Command,
    InteractionState,
    PurchaseOutcome,
    ResourceLedger,
    StateKind,
)
from coffeemachine.core.transitions import next_state

logger = logging.getLogger(__name__)

MADE_MESSAGE = "I have enough resources, making you a coffee!"

_FILL_PROMPTS = {
    StateKind.FILLING_WATER: "Write how many ml of water do you want to add:",
    StateKind.FILLING_MILK: "Write how many ml of milk do you want to add:",
    StateKind.FILLING_BEANS: "Write how many grams of coffee beans do you want to add:",
    StateKind.FILLING_CUPS: "Write how many disposable cups of coffee do you want to add:",
}


class CoffeeMachine:
    """
    Finite-state command interpreter over a resource ledger.

    Each accept() call consumes one token and fully processes it before
    returning. Transient states (drink preparation, payout, report, fill
    application) perform their side effect and settle back to IDLE within
    that same call.

    Not safe for concurrent use: callers sharing one machine across threads
    must serialize accept() themselves.
    """

    def __init__(
        self,
        ledger: ResourceLedger,
        catalog: BeverageCatalog,
        display: Optional[Display] = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._display = display or ConsoleDisplay()
        self._state: InteractionState = IDLE
        self.last_outcome: Optional[PurchaseOutcome] = None
        self._prompt(self._state)

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def ledger(self) -> ResourceLedger:
        return self._ledger

    @property
    def catalog(self) -> BeverageCatalog:
        return self._catalog

    @property
    def is_terminated(self) -> bool:
        return self._state.is_terminated

    def accept(self, line: str) -> bool:
        """
        Consume one input token.

        Args:
            line: The token; unknown or malformed input is absorbed, never raised

        Returns:
            True once the machine is terminated, False otherwise
        """
        if self._state.is_terminated:
            return True

        state = next_state(self._state, line)
        logger.debug("state=%s token=%r next=%s", self._state.kind.value, line, state.kind.value)

        if state.is_transient:
            self._resolve(state)
            state = next_state(state, "")

        self._state = state
        self._prompt(state)
        return state.is_terminated

    def run(self, tokens: Iterable[str]) -> int:
        """Feed tokens until termination; return how many were consumed."""
        consumed = 0
        for token in tokens:
            consumed += 1
            if self.accept(token):
                break
        return consumed

    def _resolve(self, state: InteractionState) -> None:
        if state.kind == StateKind.PREPARING_DRINK:
            self._purchase(state.selected_index if state.selected_index is not None else -1)
        elif state.kind == StateKind.EXTRACTING_MONEY:
            self._give_money()
        elif state.kind == StateKind.PRINTING_STATE:
            self._display.show("\n".join(self._ledger.report_lines()))
        elif state.kind == StateKind.APPLYING_FILL:
            self._ledger = self._ledger.plus(state.delta)
            logger.info("Filled %s", state.delta)

    def _purchase(self, index: int) -> None:
        beverage = self._catalog.get(index)
        if beverage is None:
            logger.warning("Invalid drink selection %d (catalog has %d)", index + 1, len(self._catalog))
            self._display.show(f"Sorry, there is no drink number {index + 1}!")
            self.last_outcome = PurchaseOutcome.INVALID_SELECTION
            return

        shortage = self._ledger.first_shortage(beverage)
        if shortage is not None:
            logger.info("Cannot make %s: not enough %s", beverage.name, shortage)
            self._display.show(f"Sorry, not enough {shortage}!")
            self.last_outcome = PurchaseOutcome.for_shortage(shortage)
            return

        self._display.show(MADE_MESSAGE)
        self._ledger = self._ledger.minus(beverage)
        self.last_outcome = PurchaseOutcome.MADE
        logger.info("Made %s for $%d", beverage.name, beverage.price)

    def _give_money(self) -> None:
        amount = self._ledger.money
        self._display.show(f"I gave you ${amount}")
        self._ledger = self._ledger.with_money(0)
        logger.info("Paid out $%d", amount)

    def _prompt(self, state: InteractionState) -> None:
        message = self._prompt_for(state)
        if message:
            self._display.show(message)

    def _prompt_for(self, state: InteractionState) -> str:
        if state.kind == StateKind.IDLE:
            return f"Write action {Command.menu()}:"
        if state.kind == StateKind.SELECTING_DRINK:
            choices = [self._catalog.menu_text(), "back - to main menu"]
            return "What do you want to buy? " + ", ".join(c for c in choices if c)
        return _FILL_PROMPTS.get(state.kind, "")


def default_machine(
    config_path: str | Path | None = None,
    display: Optional[Display] = None,
) -> CoffeeMachine:
    """Build a machine from the packaged configuration (or ``config_path``)."""
    config = load_machine_config(config_path)
    return CoffeeMachine(config.ledger, config.catalog, display=display)
