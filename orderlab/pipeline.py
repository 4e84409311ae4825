"""A small staged pipeline: source, parse and sink, plus generic stages."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_INPUT = ("1", "12", "25")
LIMIT = 100
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class PipelineError(Exception):
    """A stage rejected its input."""


def _emit(lines: list[str]) -> Iterator[str]:
    for idx, line in enumerate(lines):
        if not line:
            raise PipelineError(f"line {idx} is empty")
        yield line


def source(lines: Iterable[str]) -> Iterator[str]:
    """Yield the lines, refusing an empty input and empty lines."""
    items = list(lines)
    if not items:
        raise PipelineError("empty array")
    return _emit(items)


def parse(lines: Iterable[str]) -> Iterator[int]:
    """Yield each line parsed as a signed 64-bit decimal integer."""
    for line in lines:
        if not _INT_RE.fullmatch(line):
            raise PipelineError(f'parsing "{line}": invalid syntax')
        number = int(line)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise PipelineError(f'parsing "{line}": value out of range')
        yield number


def sink(numbers: Iterable[int]) -> int:
    """Sum the numbers, refusing any above the limit."""
    total = 0
    for n in numbers:
        if n > LIMIT:
            raise PipelineError(f"{n} is bigger than {LIMIT}")
        total += n
    return total


def run_pipeline(lines: Iterable[str]) -> int:
    """Run source, parse and sink over the lines and return the sum."""
    return sink(parse(source(lines)))


def process(
    items: Iterable[T],
    fn: Callable[[T], R],
    on_error: Callable[[T, Exception], None] | None = None,
) -> Iterator[R]:
    """Apply ``fn`` to each item; items that fail are reported and skipped."""
    for item in items:
        try:
            result = fn(item)
        except Exception as exc:
            if on_error is not None:
                on_error(item, exc)
            continue
        yield result


def drain(items: Iterable[object]) -> int:
    """Consume every item and return how many there were."""
    return sum(1 for _ in items)


def main(argv: list[str] | None = None) -> int:
    """Sum the given numbers (or a default set) through the pipeline."""
    args = sys.argv[1:] if argv is None else list(argv)
    lines = args or list(DEFAULT_INPUT)
    print("started")
    try:
        result = run_pipeline(lines)
    except PipelineError as exc:
        print("ERR: ", exc)
        return 1
    print(f"result is: {result}")
    print("close app")
    return 0