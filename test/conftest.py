from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

from pytoolrun.diagnostics import Asserter
from pytoolrun.platform.local import LocalPlatform
from pytoolrun.trace.bundle import BUNDLE_MODULE_NAME


@pytest.fixture(autouse=True)
def isolated_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep event logs, user config and interpreter globals out of the real environment."""
    events_dir = tmp_path / "_events"
    events_dir.mkdir()
    monkeypatch.setattr("pytoolrun.events.store._events_dir", lambda: events_dir)
    monkeypatch.setattr("pytoolrun.config.loader._global_candidate_paths", lambda: [])
    monkeypatch.delenv("PYTOOLRUN_CONFIG", raising=False)
    monkeypatch.setattr(sys, "argv", list(sys.argv))
    monkeypatch.setattr(sys, "path", list(sys.path))
    yield
    sys.modules.pop(BUNDLE_MODULE_NAME, None)


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(out: io.StringIO) -> Console:
    return Console(file=out, highlight=False, width=200)


@pytest.fixture
def platform(tmp_path: Path, console: Console) -> LocalPlatform:
    return LocalPlatform(working_directory=tmp_path, asserts=Asserter(console=console))
