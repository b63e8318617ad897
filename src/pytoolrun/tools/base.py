from __future__ import annotations
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, Union

from ..platform.base import Platform


@dataclass(frozen=True)
class Immediate:
    """The tool finished synchronously with this exit code."""

    code: int

    def __post_init__(self):
        if isinstance(self.code, bool) or not isinstance(self.code, int):
            raise TypeError(f"Immediate exit code must be an int, got {type(self.code).__name__}")


@dataclass(frozen=True)
class Deferred:
    """The tool finishes later.

    Settling with any value means success (exit 0). Raising ToolFailure
    carries its exit code; other exceptions map to the default failure code.

    The launcher awaits ``outcome`` on a fresh event loop, so it must be a
    coroutine or an awaitable not bound to a loop; a Future created on
    another loop fails with the default failure code.
    """

    outcome: Awaitable[Any]

    def __post_init__(self):
        if not inspect.isawaitable(self.outcome):
            raise TypeError(f"Deferred outcome must be awaitable, got {type(self.outcome).__name__}")


Completion = Union[Immediate, Deferred]


class Tool(Protocol):
    def run(self, args: list[str]) -> Completion: ...


ToolFactory = Callable[[Platform], Tool]
