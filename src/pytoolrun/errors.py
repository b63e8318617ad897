from __future__ import annotations

# Process exit codes used by the launcher and the trace harness.
FATAL_EXIT_CODE = -1
DEFAULT_FAILURE_EXIT_CODE = 1


class PyToolRunError(RuntimeError):
    pass


class ConfigurationError(PyToolRunError):
    """Fatal setup problem: nothing sensible can run without fixing it."""


class ToolNotFoundError(ConfigurationError):
    def __init__(self, identifier: str, known: list[str] | None = None):
        self.identifier = identifier
        known_str = ", ".join(known or []) or "(none)"
        super().__init__(f"Unknown tool '{identifier}'. Known tools: {known_str}")


class BundleNotFoundError(ConfigurationError):
    def __init__(self, filename: str, searched: list[str]):
        self.filename = filename
        self.searched = searched
        super().__init__(f"Unable to find {filename} (searched: {', '.join(searched)})")


class BundleLoadError(ConfigurationError):
    pass


class PlatformWriteError(PyToolRunError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class ToolContractError(PyToolRunError):
    pass


class ToolFailure(Exception):
    """Raised inside a deferred completion to fail with a specific exit code."""

    def __init__(self, code: int = DEFAULT_FAILURE_EXIT_CODE, message: str = ""):
        self.code = code
        super().__init__(message or f"Tool failed with exit code {code}")
