"""Shared types for store-palette: Color, AuditCheck, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, NamedTuple


class Color(NamedTuple):
    """An 8-bit-per-channel sRGB colour."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class AuditCheck:
    """One thresholded accessibility check on a palette."""

    name: str
    value: float
    threshold: float
    passed: bool
    # 'min': value must be >= threshold, 'max': value must be <= threshold
    kind: str = 'min'


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='contrast', help='Contrast ratio of two colours')

        @command.arguments
        def arguments(parser):
            parser.add_argument('first')

        @command.run
        def run(args, report):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._args_fn: Callable | None = None

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the argparse configuration function."""
        self._args_fn = fn
        return fn

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._args_fn is not None:
            self._args_fn(parser)

    def execute(self, args: Any, report: Report) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args, report)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    command: str = ''
    sections: dict[str, dict[str, Any]] = field(default_factory=dict)
    checks: list[AuditCheck] = field(default_factory=list)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, section: str, data: dict[str, Any]) -> None:
        """Add (or merge into) a named result section."""
        self.sections.setdefault(section, {}).update(data)

    def record(self, check: AuditCheck) -> None:
        self.checks.append(check)
        if check.passed:
            self.pass_count += 1
        else:
            self.fail_count += 1
