from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rich.console import Console


def _stderr_console() -> Console:
    return Console(stderr=True, highlight=False)


@dataclass
class Asserter:
    """Diagnostic-only assertions.

    ``check`` always hands back the condition it was given, so assertions
    never change control flow. In debug mode a falsy condition is reported.
    """

    debug: bool = False
    console: Console = field(default_factory=_stderr_console)
    failures: int = 0

    def check(self, condition: Any, message: str | None = None) -> Any:
        if not condition:
            self.failures += 1
            if self.debug:
                text = f"Assertion failed: {message}" if message else "Assertion failed"
                self.console.print(f"[pytoolrun] {text}", markup=False, soft_wrap=True)
        return condition


def report_fatal(message: str, console: Console | None = None) -> None:
    """Print the single diagnostic line shown before a fatal exit."""
    (console or _stderr_console()).print(f"[pytoolrun] {message}", markup=False, soft_wrap=True)


def report_warning(message: str, console: Console | None = None) -> None:
    (console or _stderr_console()).print(f"[pytoolrun] warning: {message}", markup=False, soft_wrap=True)
