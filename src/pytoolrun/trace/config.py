from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_MAXIMUM_MEMORY_USAGE = 128 * 1024 * 1024


class TraceMode(str, Enum):
    SNAPSHOTTING = "snapshotting"
    STREAMING = "streaming"


@dataclass(frozen=True)
class TraceConfig:
    """Options handed to the instrumentation bundle's ``start``."""

    target: str
    maximum_memory_usage: int = DEFAULT_MAXIMUM_MEMORY_USAGE
    mode: TraceMode = TraceMode.SNAPSHOTTING

    @staticmethod
    def for_script(
        script_path: str | Path,
        *,
        maximum_memory_usage: int = DEFAULT_MAXIMUM_MEMORY_USAGE,
        mode: TraceMode = TraceMode.SNAPSHOTTING,
    ) -> "TraceConfig":
        # file://<basename without extension>
        stem = Path(script_path).stem
        return TraceConfig(
            target=f"file://{stem}",
            maximum_memory_usage=maximum_memory_usage,
            mode=mode,
        )

    def as_options(self) -> dict[str, Any]:
        return {
            "maximumMemoryUsage": self.maximum_memory_usage,
            "mode": self.mode.value,
            "target": self.target,
        }
