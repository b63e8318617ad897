from __future__ import annotations
from pathlib import Path
from typing import Iterable, Protocol, Union

from ..diagnostics import Asserter

PathLike = Union[str, Path]
BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class Platform(Protocol):
    """Capabilities handed to every tool.

    Reads return None when the file cannot be read. Writes raise
    PlatformWriteError; a silently dropped write would corrupt tool output.
    """

    asserts: Asserter

    def get_working_directory(self) -> Path: ...

    def read_text_file(self, path: PathLike) -> str | None: ...

    def read_binary_file(self, path: PathLike) -> bytes | None: ...

    def write_text_file(self, path: PathLike, contents: str) -> None: ...

    def write_binary_file(self, path: PathLike, contents: BytesLike) -> None: ...
