"""Exception hierarchy for runfile."""

from __future__ import annotations


class RunfileError(Exception):
    """Base class for all runfile errors."""


class ArgumentError(RunfileError):
    """Raised when the invocation arguments cannot form an environment."""


class ParseError(RunfileError):
    """Raised when a script line cannot be turned into items."""


class ExecutionError(RunfileError):
    """Raised when a pipeline stage fails to run."""

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message)
        self.command = command


class ScriptNotFound(RunfileError):
    """Raised when the script file does not exist."""


__all__ = [
    "RunfileError",
    "ArgumentError",
    "ParseError",
    "ExecutionError",
    "ScriptNotFound",
]
