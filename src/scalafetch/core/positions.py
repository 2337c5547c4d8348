"""Source positions and position-tagged values.

A ``Positioned`` value remembers where it was requested (a manifest line,
a command-line option) so that failures can be reported against the
originating declaration. Positions are diagnostics metadata only: they never
take part in equality or hashing of the wrapped value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Position:
    """A location in a source file, or a named synthetic origin.

    Attributes:
        path: File path or origin label (e.g. ``"--dependency"``).
        line: 1-based line number, or None when unknown.
        column: 1-based column number, or None when unknown.
    """

    path: str
    line: int | None = None
    column: int | None = None

    def render(self) -> str:
        if self.line is None:
            return self.path
        if self.column is None:
            return f"{self.path}:{self.line}"
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Positioned(Generic[T]):
    """A value annotated with the positions that requested it."""

    value: T
    positions: tuple[Position, ...] = field(default=(), compare=False)

    @classmethod
    def none(cls, value: T) -> Positioned[T]:
        """Wrap a value synthesized internally, with no source position."""
        return cls(value, ())

    def map(self, fn: Callable[[T], U]) -> Positioned[U]:
        return Positioned(fn(self.value), self.positions)

    @staticmethod
    def sequence(items: Iterable[Positioned[T]]) -> Positioned[list[T]]:
        """Turn a list of positioned values into one positioned list.

        The result carries every position of every item, in order.
        """
        values: list[T] = []
        positions: list[Position] = []
        for item in items:
            values.append(item.value)
            positions.extend(item.positions)
        return Positioned(values, tuple(positions))


def positions_of(items: Sequence[Positioned[T]]) -> tuple[Position, ...]:
    return tuple(p for item in items for p in item.positions)
