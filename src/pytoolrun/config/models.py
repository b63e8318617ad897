from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..trace.config import DEFAULT_MAXIMUM_MEMORY_USAGE, TraceMode
from ..trace.bundle import BUNDLE_FILENAME


@dataclass
class TraceSettings:
    extra_search_paths: list[str] = field(default_factory=list)
    bundle_filename: str = BUNDLE_FILENAME
    maximum_memory_usage: int = DEFAULT_MAXIMUM_MEMORY_USAGE
    mode: TraceMode = TraceMode.SNAPSHOTTING

    @staticmethod
    def from_obj(obj: Any) -> "TraceSettings":
        ts = TraceSettings()
        if not isinstance(obj, dict):
            return ts
        extra = obj.get("extra_search_paths")
        if isinstance(extra, list):
            ts.extra_search_paths = [p for p in extra if isinstance(p, str) and p.strip()]
        bf = obj.get("bundle_filename")
        if isinstance(bf, str) and bf.strip():
            ts.bundle_filename = bf.strip()
        mem = obj.get("maximum_memory_usage")
        if isinstance(mem, int) and not isinstance(mem, bool) and mem > 0:
            ts.maximum_memory_usage = mem
        mode = obj.get("mode")
        if isinstance(mode, str):
            try:
                ts.mode = TraceMode(mode.strip().lower())
            except ValueError:
                pass
        return ts


@dataclass
class LauncherConfig:
    """Settings loaded from pytoolrun.yaml files."""

    debug: bool = False
    record_events: bool = True
    trace: TraceSettings = field(default_factory=TraceSettings)

    loaded_from: list[Path] = field(default_factory=list)
