from __future__ import annotations
import asyncio
import hashlib
from dataclasses import dataclass

from rich.console import Console

from ..base import Deferred
from ...errors import ToolFailure
from ...platform.base import Platform

console = Console(highlight=False)


@dataclass
class DigestTool:
    """Print the sha256 of each file, in argument order."""

    identifier = "pytoolrun.tools.digest"

    platform: Platform

    def run(self, args: list[str]) -> Deferred:
        return Deferred(self._digest_all(list(args)))

    async def _digest_all(self, paths: list[str]) -> list[str]:
        if not paths:
            raise ToolFailure(2, "usage: pytoolrun.tools.digest FILE [FILE...]")
        digests: list[str] = []
        for path in paths:
            data = self.platform.read_binary_file(path)
            if data is None:
                raise ToolFailure(1, f"Unable to read {path}")
            digest = hashlib.sha256(data).hexdigest()
            console.print(f"{digest}  {path}", markup=False, soft_wrap=True)
            digests.append(digest)
            # give other tasks on the loop a turn between files
            await asyncio.sleep(0)
        return digests
