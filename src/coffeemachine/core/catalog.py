"""Beverage catalog and machine configuration loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml

from coffeemachine.core.models import Beverage, ResourceLedger

logger = logging.getLogger(__name__)

CONFIG_RESOURCE = "machine.yaml"

DEFAULT_RESOURCES = ResourceLedger(water_ml=400, milk_ml=540, beans_g=120, cups=9, money=550)

DEFAULT_BEVERAGES = (
    Beverage("espresso", water_ml=250, milk_ml=0, beans_g=16, price=4),
    Beverage("latte", water_ml=350, milk_ml=75, beans_g=20, price=7),
    Beverage("cappuccino", water_ml=200, milk_ml=100, beans_g=12, price=6),
)


class ConfigError(ValueError):
    """Raised when a machine configuration cannot be used."""


class BeverageCatalog:
    """
    Ordered registry of the drinks a machine can make.

    Users select drinks by 1-based number; lookups here are 0-based and never
    wrap around for negative indexes.
    """

    def __init__(self, beverages: list[Beverage] | tuple[Beverage, ...] = ()) -> None:
        self._beverages: list[Beverage] = []
        for beverage in beverages:
            self.register(beverage)

    def register(self, beverage: Beverage) -> None:
        """
        Append a beverage to the catalog.

        Args:
            beverage: The drink to add

        Raises:
            ValueError: If a beverage with the same name is already registered
        """
        if self.find(beverage.name) is not None:
            raise ValueError(f"Beverage '{beverage.name}' is already registered")
        self._beverages.append(beverage)

    def get(self, index: int) -> Optional[Beverage]:
        """
        Retrieve a beverage by 0-based index.

        Returns:
            The beverage, or None if the index is out of range
        """
        if 0 <= index < len(self._beverages):
            return self._beverages[index]
        return None

    def find(self, name: str) -> Optional[Beverage]:
        return next((b for b in self._beverages if b.name == name), None)

    def menu_text(self) -> str:
        """Numbered choices, e.g. '1 - espresso, 2 - latte'."""
        return ", ".join(f"{number} - {b.name}" for number, b in enumerate(self._beverages, 1))

    def __len__(self) -> int:
        return len(self._beverages)

    def __iter__(self) -> Iterator[Beverage]:
        return iter(self._beverages)


@dataclass
class MachineConfig:
    """Initial ledger and catalog a machine starts from."""

    ledger: ResourceLedger
    catalog: BeverageCatalog


def _load_yaml(path: Path | None) -> dict[str, Any]:
    if path:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    else:
        try:
            resource = resources.files("coffeemachine.templates").joinpath(CONFIG_RESOURCE)
            with resource.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except FileNotFoundError:
            logger.warning("Packaged %s missing, using built-in defaults", CONFIG_RESOURCE)
            return {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load packaged {CONFIG_RESOURCE}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Machine config must be a mapping")
    return data


def _quantity(entry: dict[str, Any], key: str, where: str) -> int:
    value = entry.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{where}.{key} must be a non-negative integer, got {value!r}")
    return value


def _parse_ledger(data: Any) -> ResourceLedger:
    if not isinstance(data, dict):
        raise ConfigError("'resources' must be a mapping")
    known = {f.name for f in fields(ResourceLedger)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown resources: {', '.join(sorted(unknown))}")
    return ResourceLedger(**{name: _quantity(data, name, "resources") for name in known})


def _parse_beverages(data: Any) -> BeverageCatalog:
    if not isinstance(data, list):
        raise ConfigError("'beverages' must be a list")
    if not data:
        raise ConfigError("'beverages' must list at least one drink")
    catalog = BeverageCatalog()
    for position, entry in enumerate(data):
        where = f"beverages[{position}]"
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ConfigError(f"{where} needs a name")
        try:
            catalog.register(
                Beverage(
                    name=str(entry["name"]),
                    water_ml=_quantity(entry, "water_ml", where),
                    milk_ml=_quantity(entry, "milk_ml", where),
                    beans_g=_quantity(entry, "beans_g", where),
                    price=_quantity(entry, "price", where),
                )
            )
        except ConfigError:
            raise
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return catalog


def load_machine_config(path: str | Path | None = None) -> MachineConfig:
    """
    Load the initial ledger and beverage catalog.

    Args:
        path: YAML file to read; the packaged machine.yaml when omitted

    Returns:
        MachineConfig; sections missing from the file fall back to the defaults

    Raises:
        ConfigError: If the file is missing or holds invalid values
    """
    data = _load_yaml(Path(path) if path else None)

    ledger = _parse_ledger(data["resources"]) if "resources" in data else DEFAULT_RESOURCES
    if "beverages" in data:
        catalog = _parse_beverages(data["beverages"])
    else:
        catalog = BeverageCatalog(DEFAULT_BEVERAGES)

    logger.debug("Loaded machine config: %d beverages, %s", len(catalog), ledger)
    return MachineConfig(ledger=ledger, catalog=catalog)
