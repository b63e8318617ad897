from __future__ import annotations
from pathlib import Path


def resolve_path(cwd: Path, path_str: str | Path) -> Path:
    p = Path(path_str).expanduser()
    if not p.is_absolute():
        p = cwd / p
    return p


def decode_utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
