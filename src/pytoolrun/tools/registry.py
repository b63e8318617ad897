from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from ..errors import ToolNotFoundError
from .base import ToolFactory


@dataclass
class ToolRegistry:
    _factories: Dict[str, ToolFactory] = field(default_factory=dict)

    def register(self, identifier: str, factory: ToolFactory) -> None:
        if not identifier or not identifier.strip():
            raise ValueError("Tool identifier cannot be empty.")
        if identifier in self._factories:
            raise ValueError(f"Tool already registered: {identifier}")
        self._factories[identifier] = factory

    def resolve(self, identifier: str) -> ToolFactory:
        """Exact lookup; no case folding or prefix matching."""
        factory = self._factories.get(identifier)
        if factory is None:
            raise ToolNotFoundError(identifier, self.names())
        return factory

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def names(self) -> list[str]:
        return sorted(self._factories.keys())
