"""CLI entrypoint for the coffee machine."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, TextIO

from coffeemachine.core.catalog import ConfigError, MachineConfig, load_machine_config
from coffeemachine.core.interpreter import CoffeeMachine

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Machine config YAML (defaults to the packaged one)")
    common.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostics level (written to stderr)",
    )

    parser = argparse.ArgumentParser(prog="coffeemachine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_cmd = subparsers.add_parser(
        "run", parents=[common], help="Read commands and operate the machine"
    )
    run_cmd.add_argument("--script", help="Read tokens from this file instead of stdin")

    subparsers.add_parser("menu", parents=[common], help="List the drinks a machine can make")
    subparsers.add_parser("remaining", parents=[common], help="Show the initial stock")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_machine_config(args.config)
    except ConfigError as exc:
        print(f"coffeemachine: {exc}", file=sys.stderr)
        return 2

    if args.command == "run":
        source: TextIO = sys.stdin
        if args.script:
            try:
                source = Path(args.script).open("r", encoding="utf-8")
            except OSError as exc:
                print(f"coffeemachine: {exc}", file=sys.stderr)
                return 2

        machine = CoffeeMachine(config.ledger, config.catalog)
        try:
            consumed = machine.run(read_tokens(source))
        finally:
            if source is not sys.stdin:
                source.close()
        logger.info("Consumed %d tokens, terminated=%s", consumed, machine.is_terminated)
        return 0

    if args.command == "menu":
        _print_menu(config)
        return 0

    if args.command == "remaining":
        print("\n".join(config.ledger.report_lines()))
        return 0

    return 1


def read_tokens(stream: TextIO) -> Iterator[str]:
    """Yield whitespace-delimited tokens lazily, one line at a time."""
    for line in stream:
        yield from line.split()


def _print_menu(config: MachineConfig) -> None:
    for number, beverage in enumerate(config.catalog, 1):
        print(
            f"{number} - {beverage.name}: {beverage.water_ml} ml water, "
            f"{beverage.milk_ml} ml milk, {beverage.beans_g} g coffee beans, ${beverage.price}"
        )


if __name__ == "__main__":
    raise SystemExit(main())
