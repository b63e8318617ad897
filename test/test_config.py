from __future__ import annotations

from pathlib import Path

import pytest

from pytoolrun.config.loader import load_launcher_config
from pytoolrun.trace.bundle import BUNDLE_FILENAME
from pytoolrun.trace.config import DEFAULT_MAXIMUM_MEMORY_USAGE, TraceMode


def test_defaults_without_files(tmp_path: Path):
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is False
    assert cfg.record_events is True
    assert cfg.trace.extra_search_paths == []
    assert cfg.trace.bundle_filename == BUNDLE_FILENAME
    assert cfg.trace.maximum_memory_usage == DEFAULT_MAXIMUM_MEMORY_USAGE
    assert cfg.trace.mode is TraceMode.SNAPSHOTTING
    assert cfg.loaded_from == []


def test_project_file_is_loaded(tmp_path: Path):
    (tmp_path / "pytoolrun.yaml").write_text(
        "debug: true\n"
        "record_events: false\n"
        "trace:\n"
        "  extra_search_paths: [vendor/trace]\n"
        "  maximum_memory_usage: 1048576\n"
        "  mode: streaming\n",
        encoding="utf-8",
    )
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is True
    assert cfg.record_events is False
    assert cfg.trace.extra_search_paths == ["vendor/trace"]
    assert cfg.trace.maximum_memory_usage == 1048576
    assert cfg.trace.mode is TraceMode.STREAMING


def test_hidden_project_file_wins(tmp_path: Path):
    (tmp_path / ".pytoolrun.yaml").write_text("debug: true\n", encoding="utf-8")
    (tmp_path / "pytoolrun.yaml").write_text("debug: false\nrecord_events: false\n", encoding="utf-8")
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is True
    assert cfg.record_events is True
    assert cfg.loaded_from == [tmp_path / ".pytoolrun.yaml"]


def test_explicit_file_from_environment_overrides_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "pytoolrun.yaml").write_text("trace:\n  mode: streaming\n  bundle_filename: a.py\n", encoding="utf-8")
    (tmp_path / "ci.yaml").write_text("trace:\n  bundle_filename: b.py\n", encoding="utf-8")
    monkeypatch.setenv("PYTOOLRUN_CONFIG", "ci.yaml")
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.trace.bundle_filename == "b.py"
    assert cfg.trace.mode is TraceMode.STREAMING


def test_global_file_has_lowest_priority(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    global_file = tmp_path / "global.yaml"
    global_file.write_text("debug: true\nrecord_events: false\n", encoding="utf-8")
    monkeypatch.setattr("pytoolrun.config.loader._global_candidate_paths", lambda: [global_file])
    (tmp_path / "pytoolrun.yaml").write_text("debug: false\n", encoding="utf-8")
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is False
    assert cfg.record_events is False


def test_invalid_values_are_ignored(tmp_path: Path):
    (tmp_path / "pytoolrun.yaml").write_text(
        "debug: 'yes'\n"
        "trace:\n"
        "  maximum_memory_usage: -5\n"
        "  mode: tachyon\n"
        "  extra_search_paths: [1, '', ok]\n",
        encoding="utf-8",
    )
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is False
    assert cfg.trace.maximum_memory_usage == DEFAULT_MAXIMUM_MEMORY_USAGE
    assert cfg.trace.mode is TraceMode.SNAPSHOTTING
    assert cfg.trace.extra_search_paths == ["ok"]


def test_malformed_yaml_is_skipped(tmp_path: Path):
    (tmp_path / "pytoolrun.yaml").write_text("debug: [unclosed\n", encoding="utf-8")
    cfg = load_launcher_config(cwd=tmp_path)
    assert cfg.debug is False
    assert cfg.loaded_from == []
