from __future__ import annotations
from dataclasses import dataclass

from rich.console import Console

from ..base import Immediate
from ...platform.base import Platform

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


@dataclass
class ConcatTool:
    """Concatenate UTF-8 text files into an output file.

    Inputs that cannot be read are reported and skipped.
    """

    identifier = "pytoolrun.tools.concat"

    platform: Platform

    def run(self, args: list[str]) -> Immediate:
        if len(args) < 2:
            err_console.print("usage: pytoolrun.tools.concat OUT IN [IN...]", markup=False)
            return Immediate(2)
        out, inputs = args[0], args[1:]
        parts: list[str] = []
        for path in inputs:
            text = self.platform.read_text_file(path)
            if text is None:
                err_console.print(f"Skipping unreadable file: {path}", markup=False, soft_wrap=True)
                continue
            self.platform.asserts.check(text, f"{path} is empty")
            parts.append(text)
        self.platform.write_text_file(out, "".join(parts))
        console.print(f"Wrote {out} from {len(parts)} of {len(inputs)} file(s).", markup=False, soft_wrap=True)
        return Immediate(0)
