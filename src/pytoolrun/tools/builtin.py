from __future__ import annotations

from .registry import ToolRegistry

from .builtin_tools.copy_tool import CopyTool
from .builtin_tools.concat_tool import ConcatTool
from .builtin_tools.digest_tool import DigestTool


def register_builtin_tools(registry: ToolRegistry) -> None:
    registry.register(CopyTool.identifier, CopyTool)
    registry.register(ConcatTool.identifier, ConcatTool)
    registry.register(DigestTool.identifier, DigestTool)
