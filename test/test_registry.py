from __future__ import annotations

import pytest

from pytoolrun.errors import ConfigurationError, ToolNotFoundError
from pytoolrun.tools.builtin import register_builtin_tools
from pytoolrun.tools.registry import ToolRegistry


def _factory(platform):
    return object()


def test_register_and_resolve_returns_the_same_factory():
    registry = ToolRegistry()
    registry.register("acme.tools.Echo", _factory)
    assert registry.resolve("acme.tools.Echo") is _factory
    assert "acme.tools.Echo" in registry


@pytest.mark.parametrize("name", ["acme.tools.echo", "acme.tools.Ech", "Echo", " acme.tools.Echo", ""])
def test_resolution_is_exact(name: str):
    registry = ToolRegistry()
    registry.register("acme.tools.Echo", _factory)
    with pytest.raises(ToolNotFoundError) as ei:
        registry.resolve(name)
    assert isinstance(ei.value, ConfigurationError)
    assert "acme.tools.Echo" in str(ei.value)


def test_duplicate_registration_is_rejected():
    registry = ToolRegistry()
    registry.register("a.b", _factory)
    with pytest.raises(ValueError):
        registry.register("a.b", _factory)


def test_empty_identifier_is_rejected():
    with pytest.raises(ValueError):
        ToolRegistry().register("  ", _factory)


def test_builtin_tools_are_registered_explicitly():
    registry = ToolRegistry()
    register_builtin_tools(registry)
    assert registry.names() == [
        "pytoolrun.tools.concat",
        "pytoolrun.tools.copy",
        "pytoolrun.tools.digest",
    ]
