from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from platformdirs import user_data_dir
from rich.console import Console

from ..diagnostics import report_warning

APP_NAME = "pytoolrun"

# Older run logs beyond this count are deleted when a new run starts.
MAX_RUN_LOGS = 200


def _events_dir() -> Path:
    root = Path(user_data_dir(APP_NAME))
    d = root / "events"
    d.mkdir(parents=True, exist_ok=True)
    return d


def _prune(d: Path, keep: int) -> None:
    logs = sorted(d.glob("*.jsonl"))
    for p in logs[: max(0, len(logs) - keep)]:
        p.unlink(missing_ok=True)


@dataclass
class Event:
    ts: float
    type: str
    data: dict[str, Any]


@dataclass
class EventStore:
    """One jsonl file per launcher or trace run.

    File names start with the run's start time so they sort oldest first.
    """

    run_id: str
    kind: str
    path: Path

    @staticmethod
    def open(kind: str = "launch", run_id: str | None = None, keep: int = MAX_RUN_LOGS) -> "EventStore":
        rid = run_id or uuid.uuid4().hex[:12]
        d = _events_dir()
        _prune(d, keep - 1)
        stamp = time.strftime("%Y%m%d-%H%M%S")
        return EventStore(run_id=rid, kind=kind, path=d / f"{stamp}-{kind}-{rid}.jsonl")

    @staticmethod
    def runs() -> list[Path]:
        return sorted(_events_dir().glob("*.jsonl"))

    def append(self, event_type: str, data: dict[str, Any]) -> None:
        ev = Event(ts=time.time(), type=event_type, data={"run_id": self.run_id, **data})
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(ev.__dict__, ensure_ascii=False, default=str) + "\n")

    def iter_events(self) -> Iterable[Event]:
        if not self.path.exists():
            return []
        out: list[Event] = []
        for line in self.path.read_text(encoding="utf-8", errors="replace").splitlines():
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
                out.append(Event(ts=float(obj.get("ts", 0.0)), type=str(obj.get("type")), data=obj.get("data") or {}))
            except (ValueError, TypeError, AttributeError):
                continue
        return out


def record_event(
    events: EventStore | None, event_type: str, data: dict[str, Any], console: Console | None = None
) -> EventStore | None:
    """Append to ``events`` if there is one.

    Returns None once writing fails, so callers stop recording and the
    failure is reported only once.
    """
    if events is None:
        return None
    try:
        events.append(event_type, data)
    except OSError as e:
        report_warning(f"Run history disabled: {e}", console)
        return None
    return events
