from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config.loader import load_launcher_config
from .config.models import LauncherConfig
from .diagnostics import Asserter, report_fatal, report_warning
from .errors import FATAL_EXIT_CODE, ConfigurationError
from .events.store import EventStore
from .launcher import ToolLauncher, strip_debug_flag
from .platform.local import LocalPlatform
from .tools.builtin import register_builtin_tools
from .tools.registry import ToolRegistry
from .trace.bundle import search_paths
from .trace.harness import TraceHarness

# Parsing stops at the first positional (tool identifier or script path);
# everything after it, including --help and --, reaches the tool untouched.
_PASSTHROUGH = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}

tool_app = typer.Typer(add_completion=False, help="pytoolrun: launch a registered tool by identifier.")
trace_app = typer.Typer(add_completion=False, help="pytoolrun-trace: run a script with tracing enabled.")
err_console = Console(stderr=True, highlight=False)


def _load_config() -> LauncherConfig:
    return load_launcher_config(cwd=Path.cwd())


def _open_events(cfg: LauncherConfig, kind: str) -> EventStore | None:
    if not cfg.record_events:
        return None
    try:
        return EventStore.open(kind)
    except OSError as e:
        report_warning(f"Run history disabled: {e}", err_console)
        return None


def build_registry() -> ToolRegistry:
    registry = ToolRegistry()
    register_builtin_tools(registry)
    return registry


@tool_app.command(context_settings=_PASSTHROUGH)
def launch(
    argv: list[str] = typer.Argument(..., metavar="TOOL [ARGS]...", help="Tool identifier then its arguments; --debug may appear anywhere."),
):
    """Run a tool and exit with its normalized exit code."""
    argv, debug = strip_debug_flag(list(argv))
    if not argv:
        report_fatal("Missing tool identifier.", err_console)
        raise typer.Exit(code=FATAL_EXIT_CODE)
    cfg = _load_config()
    launcher = ToolLauncher(
        registry=build_registry(),
        events=_open_events(cfg, "launch"),
        debug_default=cfg.debug,
        console=err_console,
    )
    code = launcher.launch(argv[0], argv[1:], debug=debug)
    raise typer.Exit(code=code)


@trace_app.command(context_settings=_PASSTHROUGH)
def trace(
    script: str = typer.Argument(..., help="Script to run, relative to the current directory."),
    args: list[str] = typer.Argument(None, help="Arguments passed to the script."),
):
    """Locate the trace bundle, start a snapshotting session and run SCRIPT."""
    cfg = _load_config()
    harness = TraceHarness(
        platform=LocalPlatform.from_cwd(asserts=Asserter(debug=cfg.debug, console=err_console)),
        search_paths=search_paths(cfg.trace.extra_search_paths),
        bundle_filename=cfg.trace.bundle_filename,
        maximum_memory_usage=cfg.trace.maximum_memory_usage,
        mode=cfg.trace.mode,
        events=_open_events(cfg, "trace"),
        console=err_console,
    )
    try:
        harness.run(script, list(args or []))
    except ConfigurationError as e:
        report_fatal(str(e), err_console)
        raise typer.Exit(code=FATAL_EXIT_CODE)


def run_tool() -> None:
    tool_app()


def run_trace() -> None:
    trace_app()


if __name__ == "__main__":
    tool_app()
