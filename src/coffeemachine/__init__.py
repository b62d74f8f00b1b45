"""coffeemachine: a coffee vending machine driven by a finite-state command interpreter."""

__version__ = "0.1.0"

# Core exports
from coffeemachine.core.models import (
    Beverage,
    ResourceLedger,
    Command,
    StateKind,
    InteractionState,
    PurchaseOutcome,
)
from coffeemachine.core.interfaces import Display, ConsoleDisplay, RecordingDisplay
from coffeemachine.core.catalog import (
    BeverageCatalog,
    ConfigError,
    MachineConfig,
    load_machine_config,
)
from coffeemachine.core.transitions import next_state
from coffeemachine.core.interpreter import CoffeeMachine, default_machine

__all__ = [
    "Beverage",
    "ResourceLedger",
    "Command",
    "StateKind",
    "InteractionState",
    "PurchaseOutcome",
    "Display",
    "ConsoleDisplay",
    "RecordingDisplay",
    "BeverageCatalog",
    "ConfigError",
    "MachineConfig",
    "load_machine_config",
    "next_state",
    "CoffeeMachine",
    "default_machine",
]
