from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_config_dir

from .models import LauncherConfig, TraceSettings

APP_NAME = "pytoolrun"
CONFIG_ENV = "PYTOOLRUN_CONFIG"


def _candidate_paths(cwd: Path) -> list[Path]:
    # project-level (higher priority)
    return [
        cwd / ".pytoolrun.yaml",
        cwd / "pytoolrun.yaml",
    ]


def _global_candidate_paths() -> list[Path]:
    cfg_dir = Path(user_config_dir(APP_NAME))
    return [cfg_dir / "pytoolrun.yaml"]


def _load_yaml(p: Path) -> dict[str, Any] | None:
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return None
    if isinstance(obj, dict):
        return obj
    return None


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge_dicts(out[k], v)
        else:
            out[k] = v
    return out


def load_launcher_config(*, cwd: Path, explicit_path: Path | None = None) -> LauncherConfig:
    """Load launcher config.

    Merge order: global < project < explicit_path (defaults to $PYTOOLRUN_CONFIG).
    """
    if explicit_path is None and os.getenv(CONFIG_ENV):
        explicit_path = Path(os.environ[CONFIG_ENV])

    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    for p in _global_candidate_paths():
        if p.is_file():
            obj = _load_yaml(p)
            if obj is not None:
                merged = _merge_dicts(merged, obj)
                loaded_from.append(p)

    for p in _candidate_paths(cwd):
        if p.is_file():
            obj = _load_yaml(p)
            if obj is not None:
                merged = _merge_dicts(merged, obj)
                loaded_from.append(p)
                break  # first match wins for project-level

    if explicit_path is not None:
        p = explicit_path.expanduser()
        if not p.is_absolute():
            p = cwd / p
        if p.is_file():
            obj = _load_yaml(p)
            if obj is not None:
                merged = _merge_dicts(merged, obj)
                loaded_from.append(p)

    cfg = LauncherConfig(loaded_from=loaded_from)

    debug = merged.get("debug")
    if isinstance(debug, bool):
        cfg.debug = debug

    record = merged.get("record_events")
    if isinstance(record, bool):
        cfg.record_events = record

    cfg.trace = TraceSettings.from_obj(merged.get("trace"))
    return cfg
