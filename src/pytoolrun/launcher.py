from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from rich.console import Console

from .diagnostics import Asserter, report_fatal
from .errors import (
    DEFAULT_FAILURE_EXIT_CODE,
    FATAL_EXIT_CODE,
    ConfigurationError,
    PlatformWriteError,
    ToolContractError,
    ToolFailure,
)
from .events.store import EventStore, record_event
from .platform.base import Platform
from .platform.local import LocalPlatform
from .tools.base import Deferred, Immediate
from .tools.registry import ToolRegistry

DEBUG_FLAG = "--debug"

PlatformFactory = Callable[[Asserter], Platform]


def strip_debug_flag(args: list[str]) -> tuple[list[str], bool]:
    """Remove every ``--debug`` token, keeping the other args in order."""
    rest = [a for a in args if a != DEBUG_FLAG]
    return rest, len(rest) != len(args)


def _failure_code(exc: ToolFailure) -> int:
    if isinstance(exc.code, int) and not isinstance(exc.code, bool):
        return exc.code
    return DEFAULT_FAILURE_EXIT_CODE


async def _settle(outcome: Awaitable[Any]) -> Any:
    return await outcome


def _default_platform_factory(asserts: Asserter) -> Platform:
    return LocalPlatform.from_cwd(asserts=asserts)


@dataclass
class ToolLauncher:
    """Resolve a tool by identifier, run it and turn its completion into an exit code."""

    registry: ToolRegistry
    platform_factory: PlatformFactory = _default_platform_factory
    events: EventStore | None = None
    debug_default: bool = False
    console: Console = field(default_factory=lambda: Console(stderr=True, highlight=False))

    def launch(self, identifier: str, args: list[str], debug: bool = False) -> int:
        args, debug_flag = strip_debug_flag(list(args))
        debug = debug or debug_flag or self.debug_default
        self._record("tool.launch", {"tool": identifier, "args": args, "debug": debug})
        code = self._launch(identifier, args, debug)
        self._record("tool.exit", {"tool": identifier, "exit_code": code})
        return code

    def _launch(self, identifier: str, args: list[str], debug: bool) -> int:
        try:
            factory = self.registry.resolve(identifier)
        except ConfigurationError as e:
            report_fatal(str(e), self.console)
            return FATAL_EXIT_CODE

        platform = self.platform_factory(Asserter(debug=debug, console=self.console))
        try:
            tool = factory(platform)
            result = tool.run(args)
            return self._normalize(identifier, result)
        except (PlatformWriteError, ToolContractError) as e:
            report_fatal(str(e), self.console)
            return FATAL_EXIT_CODE
        except ToolFailure as e:
            report_fatal(f"{identifier}: {e}", self.console)
            return _failure_code(e)
        except Exception as e:
            report_fatal(f"{identifier} raised {type(e).__name__}: {e}", self.console)
            if debug:
                self.console.print_exception()
            return DEFAULT_FAILURE_EXIT_CODE

    def _normalize(self, identifier: str, result: Any) -> int:
        if isinstance(result, Immediate):
            return result.code
        if isinstance(result, Deferred):
            # the only suspension point; a completion that never settles hangs here
            asyncio.run(_settle(result.outcome))
            return 0
        raise ToolContractError(
            f"{identifier}.run returned {type(result).__name__}; expected Immediate or Deferred"
        )

    def _record(self, event_type: str, data: dict[str, Any]) -> None:
        self.events = record_event(self.events, event_type, data, self.console)
