from __future__ import annotations

import builtins
import sys
import types
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console

from ..errors import ConfigurationError
from ..events.store import EventStore, record_event
from ..platform.base import Platform
from .bundle import BUNDLE_FILENAME, DEFAULT_SEARCH_PATHS, find_bundle, load_bundle
from .config import DEFAULT_MAXIMUM_MEMORY_USAGE, TraceConfig, TraceMode

# Global name under which the script sees the instrumentation entry point.
TRACING_GLOBAL = "tracing"


@dataclass
class TraceHarness:
    """Start a tracing session, then run a script as if invoked directly.

    The harness does not pick an exit code of its own: whatever the script
    (or the bundle's exit hooks) does decides how the process ends.
    """

    platform: Platform
    search_paths: Sequence[str] = DEFAULT_SEARCH_PATHS
    bundle_filename: str = BUNDLE_FILENAME
    maximum_memory_usage: int = DEFAULT_MAXIMUM_MEMORY_USAGE
    mode: TraceMode = TraceMode.SNAPSHOTTING
    events: EventStore | None = None
    console: Console | None = None
    bundle_loader: Callable[[Path], Any] = load_bundle

    def run(self, script_path: str, script_args: Sequence[str]) -> dict[str, Any]:
        cwd = self.platform.get_working_directory()
        bundle_path = find_bundle(cwd, self.search_paths, self.bundle_filename)
        bundle = self.bundle_loader(bundle_path)

        filename = cwd / script_path
        code = self.platform.read_text_file(filename)
        if code is None:
            raise ConfigurationError(f"Unable to read script {script_path}")

        # The script sees only its own arguments, as if run directly.
        sys.argv = [str(script_path), *script_args]
        sys.path.insert(0, str(filename.parent))

        config = TraceConfig.for_script(
            filename,
            maximum_memory_usage=self.maximum_memory_usage,
            mode=self.mode,
        )
        self.events = record_event(
            self.events,
            "trace.start",
            {"bundle": str(bundle_path), "script": str(filename), **config.as_options()},
            self.console,
        )
        bundle.start(config)

        return self._exec(code, filename, bundle)

    def _exec(self, code: str, filename: Path, bundle: Any) -> dict[str, Any]:
        compiled = compile(code, str(filename), "exec")
        # Like runpy: a temporary __main__ module, so pickle and friends can
        # find classes the script defines.
        module = types.ModuleType("__main__")
        module.__dict__.update({
            "__file__": str(filename),
            "__builtins__": builtins,
            TRACING_GLOBAL: bundle,
        })
        saved = sys.modules.get("__main__")
        sys.modules["__main__"] = module
        try:
            exec(compiled, module.__dict__)
        finally:
            if saved is None:
                sys.modules.pop("__main__", None)
            else:
                sys.modules["__main__"] = saved
        return module.__dict__
