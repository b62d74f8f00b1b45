"""Local CI runner: lint, type-check and test the package the way CI does."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

COVERAGE_FLOOR = 90


def _steps(python: str, with_lint: bool, pytest_args: list[str]) -> list[list[str]]:
    steps: list[list[str]] = []
    if with_lint:
        steps.append([python, "-m", "ruff", "check", "src", "tests"])
        steps.append([python, "-m", "black", "--check", "src", "tests"])
        steps.append([python, "-m", "mypy", "src"])
    steps.append(
        [
            python,
            "-m",
            "pytest",
            "--cov=coffeemachine",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
            *pytest_args,
        ]
    )
    return steps


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="coffeemachine-ci")
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Skip the editable install (useful if deps are already installed).",
    )
    parser.add_argument(
        "--tests-only",
        action="store_true",
        help="Run pytest without ruff/black/mypy.",
    )
    parser.add_argument("pytest_args", nargs="*", help="Extra arguments passed to pytest.")
    args = parser.parse_args(argv)

    cwd = Path.cwd()
    python = sys.executable

    if not args.skip_install:
        subprocess.run([python, "-m", "pip", "install", "-e", ".[dev]"], check=True, cwd=cwd)

    for step in _steps(python, not args.tests_only, args.pytest_args):
        result = subprocess.run(step, cwd=cwd)
        if result.returncode != 0:
            print(f"coffeemachine-ci: step failed: {' '.join(step[2:4])}", file=sys.stderr)
            return result.returncode
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
