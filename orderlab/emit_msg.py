"""Command handler for emitting order messages."""

from __future__ import annotations

from dataclasses import dataclass


class CountMustBePositiveError(ValueError):
    """Raised when a command asks for fewer than one message."""

    def __init__(self) -> None:
        super().__init__("cmd.Count must be greater than 0")


@dataclass
class Command:
    start_order_index: int = 0
    count: int = 0


@dataclass
class Result:
    pass


def handle(cmd: Command) -> Result:
    """Validate and run an emit command."""
    if cmd.count <= 0:
        raise CountMustBePositiveError()
    return Result()