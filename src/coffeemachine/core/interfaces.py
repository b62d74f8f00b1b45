"""Protocol definitions for where the machine writes its messages."""

from __future__ import annotations

from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class Display(Protocol):
    """
    Display protocol: receives every line the machine emits.

    Prompts, purchase results, payouts and reports all go through the same
    channel; there is no separate error stream.
    """

    def show(self, message: str) -> None:
        """
        Emit one message.

        Args:
            message: Text to show; may span several lines
        """
        ...


class ConsoleDisplay:
    """Writes messages to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def show(self, message: str) -> None:
        print(message, file=self.stream)


class RecordingDisplay:
    """Keeps every message in memory, e.g. for tests or embedding."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show(self, message: str) -> None:
        self.messages.append(message)

    @property
    def last(self) -> str | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()
