"""State transitions: a pure mapping of (state, token) to the next state."""

from __future__ import annotations

import re
from dataclasses import replace

from coffeemachine.core.models import (
    EXTRACTING_MONEY,
    FILLING_WATER,
    IDLE,
    PRINTING_STATE,
    SELECTING_DRINK,
    TERMINATED,
    Command,
    InteractionState,
    ResourceLedger,
    StateKind,
    filling,
    preparing_drink,
)

BACK = "back"

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_COMMAND_STATES = {
    Command.BUY: SELECTING_DRINK,
    Command.FILL: FILLING_WATER,
    Command.TAKE: EXTRACTING_MONEY,
    Command.REMAINING: PRINTING_STATE,
    Command.EXIT: TERMINATED,
    Command.UNKNOWN: IDLE,
}

# Each fill step: (ledger field it captures, state it moves to).
_FILL_STEPS = {
    StateKind.FILLING_WATER: ("water_ml", StateKind.FILLING_MILK),
    StateKind.FILLING_MILK: ("milk_ml", StateKind.FILLING_BEANS),
    StateKind.FILLING_BEANS: ("beans_g", StateKind.FILLING_CUPS),
    StateKind.FILLING_CUPS: ("cups", StateKind.APPLYING_FILL),
}


def parse_int(token: str) -> int | None:
    """
    Parse a signed base-10 integer made of ASCII digits only.

    Whitespace, digit separators ('1_0'), non-ASCII digits and values outside
    the signed 32-bit range are rejected.
    """
    if not isinstance(token, str) or not _INT_PATTERN.fullmatch(token):
        return None
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def parse_amount(token: str) -> int:
    """Fill amount: unparsable input counts as 0 and negatives clamp to 0."""
    return max(0, parse_int(token) or 0)


def next_state(state: InteractionState, token: str) -> InteractionState:
    """
    Compute the state that follows ``state`` after reading ``token``.

    Transient states (PREPARING_DRINK, EXTRACTING_MONEY, PRINTING_STATE,
    APPLYING_FILL) ignore the token and move to IDLE; their side effects are
    the interpreter's job. TERMINATED is absorbing.

    Args:
        state: Current interaction state
        token: One input token

    Returns:
        The next InteractionState
    """
    kind = state.kind

    if kind == StateKind.IDLE:
        return _COMMAND_STATES[Command.parse(token)]

    if kind == StateKind.SELECTING_DRINK:
        if token == BACK:
            return IDLE
        code = parse_int(token) or 0
        if code == 0:
            return IDLE
        return preparing_drink(code - 1)

    if kind in _FILL_STEPS:
        field_name, following = _FILL_STEPS[kind]
        delta: ResourceLedger = replace(state.delta, **{field_name: parse_amount(token)})
        return filling(following, delta)

    if kind == StateKind.TERMINATED:
        return TERMINATED

    return IDLE
