from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from ..diagnostics import Asserter
from ..errors import PlatformWriteError
from ..util.fs import resolve_path, decode_utf8
from .base import BytesLike, PathLike


def _to_bytes(contents: BytesLike) -> bytes:
    if isinstance(contents, bytes):
        return contents
    if isinstance(contents, (bytearray, memoryview)):
        return bytes(contents)
    # sequence of ints; bytes() rejects anything outside 0..255
    return bytes(list(contents))


@dataclass
class LocalPlatform:
    """Platform backed by the local filesystem.

    The working directory is captured once at construction; later chdir calls
    are not observed.
    """

    working_directory: Path
    asserts: Asserter = field(default_factory=Asserter)

    @staticmethod
    def from_cwd(asserts: Asserter | None = None) -> "LocalPlatform":
        return LocalPlatform(working_directory=Path.cwd(), asserts=asserts or Asserter())

    def get_working_directory(self) -> Path:
        return self.working_directory

    def _path(self, path: PathLike) -> Path:
        return resolve_path(self.working_directory, path)

    def read_text_file(self, path: PathLike) -> str | None:
        data = self.read_binary_file(path)
        if data is None:
            return None
        return decode_utf8(data)

    def read_binary_file(self, path: PathLike) -> bytes | None:
        try:
            return self._path(path).read_bytes()
        except (OSError, ValueError):
            return None

    def write_text_file(self, path: PathLike, contents: str) -> None:
        try:
            data = contents.encode("utf-8")
        except (UnicodeEncodeError, AttributeError) as e:
            raise PlatformWriteError(str(path), f"cannot encode contents as UTF-8 ({e})") from e
        self._write(path, data)

    def write_binary_file(self, path: PathLike, contents: BytesLike) -> None:
        try:
            data = _to_bytes(contents)
        except (TypeError, ValueError) as e:
            raise PlatformWriteError(str(path), f"not a byte sequence ({e})") from e
        self._write(path, data)

    def _write(self, path: PathLike, data: bytes) -> None:
        try:
            self._path(path).write_bytes(data)
        except OSError as e:
            raise PlatformWriteError(str(path), e.strerror or str(e)) from e
