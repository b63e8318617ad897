from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, Sequence

from ..errors import BundleLoadError, BundleNotFoundError

BUNDLE_FILENAME = "trace_bundle_compiled.py"
BUNDLE_MODULE_NAME = "pytoolrun_trace_bundle"

# Order matters: first directory holding the bundle wins.
DEFAULT_SEARCH_PATHS: tuple[str, ...] = (
    ".",
    "./build-out",
    "../build-out",
)


def search_paths(extra: Iterable[str] = ()) -> list[str]:
    out = list(DEFAULT_SEARCH_PATHS)
    for p in extra:
        if p not in out:
            out.append(p)
    return out


def find_bundle(cwd: Path, paths: Sequence[str] = DEFAULT_SEARCH_PATHS, filename: str = BUNDLE_FILENAME) -> Path:
    for sp in paths:
        candidate = cwd / sp / filename
        if candidate.is_file():
            return candidate
    raise BundleNotFoundError(filename, [str(Path(sp) / filename) for sp in paths])


def load_bundle(path: Path) -> ModuleType:
    """Import the bundle and return it; it must expose a callable ``start``."""
    spec = importlib.util.spec_from_file_location(BUNDLE_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise BundleLoadError(f"Cannot import trace bundle from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[BUNDLE_MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(BUNDLE_MODULE_NAME, None)
        raise BundleLoadError(f"Trace bundle {path} failed to load: {type(e).__name__}: {e}") from e
    if not callable(getattr(module, "start", None)):
        sys.modules.pop(BUNDLE_MODULE_NAME, None)
        raise BundleLoadError(f"Trace bundle {path} has no start(config) entry point")
    return module
