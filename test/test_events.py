from __future__ import annotations

from pathlib import Path

import pytest

from pytoolrun.events.store import EventStore, record_event


def test_each_run_gets_its_own_file():
    first = EventStore.open("launch")
    second = EventStore.open("launch")
    assert first.path != second.path
    assert first.run_id != second.run_id
    assert "-launch-" in first.path.name


def test_events_carry_the_run_id():
    store = EventStore.open("trace", run_id="abc123")
    store.append("trace.start", {"target": "file://app"})
    (event,) = store.iter_events()
    assert event.type == "trace.start"
    assert event.data == {"run_id": "abc123", "target": "file://app"}


def test_old_run_logs_are_pruned(tmp_path: Path):
    events_dir = tmp_path / "_events"
    for i in range(5):
        (events_dir / f"20200101-00000{i}-launch-old{i}.jsonl").write_text("{}\n", encoding="utf-8")
    store = EventStore.open("launch", keep=3)
    store.append("tool.launch", {})

    names = sorted(p.name for p in EventStore.runs())
    assert len(names) == 3
    assert names[:2] == ["20200101-000003-launch-old3.jsonl", "20200101-000004-launch-old4.jsonl"]
    assert store.path.name in names


def test_record_event_without_store_is_a_no_op():
    assert record_event(None, "tool.launch", {}) is None


def test_record_event_drops_store_after_write_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    store = EventStore(run_id="r", kind="launch", path=tmp_path / "nope" / "x.jsonl")
    assert record_event(store, "tool.launch", {}) is None
    assert "Run history disabled" in capsys.readouterr().err


def test_corrupt_lines_are_skipped(tmp_path: Path):
    store = EventStore(run_id="r", kind="launch", path=tmp_path / "x.jsonl")
    store.append("tool.launch", {"tool": "a"})
    with store.path.open("a", encoding="utf-8") as f:
        f.write("{not json\n\n")
    store.append("tool.exit", {"exit_code": 0})
    assert [e.type for e in store.iter_events()] == ["tool.launch", "tool.exit"]
