from __future__ import annotations
from dataclasses import dataclass

from rich.console import Console

from ..base import Immediate
from ...platform.base import Platform

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


@dataclass
class CopyTool:
    """Byte-exact copy of one file to another."""

    identifier = "pytoolrun.tools.copy"

    platform: Platform

    def run(self, args: list[str]) -> Immediate:
        if len(args) != 2:
            err_console.print("usage: pytoolrun.tools.copy SRC DST", markup=False)
            return Immediate(2)
        src, dst = args
        data = self.platform.read_binary_file(src)
        if data is None:
            err_console.print(f"Unable to read {src}", markup=False)
            return Immediate(1)
        self.platform.write_binary_file(dst, data)
        console.print(f"Copied {src} -> {dst} ({len(data)} bytes).", markup=False, soft_wrap=True)
        return Immediate(0)
