"""Shared types for colour-tool: Rgb, Hsl, Colour, Command, Report."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, eq=False)
class Rgb:
    """A colour stored as 8-bit red, green and blue channels (0-255)."""

    r: int
    g: int
    b: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.g, self.b))

    def __eq__(self, other: object) -> bool:
        from colour_checker.core.convert import colours_equal

        if not isinstance(other, (Rgb, Hsl)):
            return NotImplemented
        return colours_equal(self, other)

    def __hash__(self) -> int:
        # Equal colours must hash alike, so hash the HSL form
        from colour_checker.core.convert import to_hsl

        return hash(to_hsl(self))


@dataclass(frozen=True, eq=False)
class Hsl:
    """A colour stored as hue (degrees), saturation and lightness (percent)."""

    h: int
    s: int
    l: int  # noqa: E741

    def __iter__(self) -> Iterator[int]:
        return iter((self.h, self.s, self.l))

    def __eq__(self, other: object) -> bool:
        from colour_checker.core.convert import colours_equal

        if not isinstance(other, (Rgb, Hsl)):
            return NotImplemented
        return colours_equal(self, other)

    def __hash__(self) -> int:
        return hash(('hsl', self.h, self.s, self.l))


Colour = Rgb | Hsl


class Command:
    """A self-registering colour-tool command.

    Usage in a command module:

        command = Command(name='convert', help='Convert colours to HSL')

        @command.run
        def run(report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(report, args)


@dataclass
class Report:
    """Accumulates results from a command for text/JSON output."""

    command: str = ''
    entries: dict[str, dict[str, Any]] = field(default_factory=dict)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, entry: str, data: dict[str, Any]) -> None:
        """Add (or merge) results for an entry such as an input colour or image."""
        self.entries.setdefault(entry, {}).update(data)

    def record_pass(self, entry: str) -> None:
        self.pass_count += 1
        self.add(entry, {'pass': True})

    def record_fail(self, entry: str) -> None:
        self.fail_count += 1
        self.add(entry, {'pass': False})
