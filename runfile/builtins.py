"""Commands executed in-process instead of being spawned."""

from __future__ import annotations

import glob
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import ExecutionError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .pipeline import ExecutionContext

logger = logging.getLogger(__name__)

Builtin = Callable[["ExecutionContext", tuple[str, ...]], None]


@dataclass(slots=True)
class BuiltinSpec:
    name: str
    handler: Builtin
    description: str = ""


class BuiltinRegistry:
    """Maps reserved command names to their handlers."""

    def __init__(self) -> None:
        self._builtins: dict[str, BuiltinSpec] = {}

    def register(self, name: str, handler: Builtin, *, description: str = "") -> Builtin:
        self._builtins[name] = BuiltinSpec(name, handler, description)
        return handler

    def command(self, name: str, *, description: str = "") -> Callable[[Builtin], Builtin]:
        """Decorator variant of :meth:`register`."""

        def decorator(func: Builtin) -> Builtin:
            return self.register(name, func, description=description)

        return decorator

    def get(self, name: str) -> Builtin | None:
        spec = self._builtins.get(name)
        return spec.handler if spec else None

    def __contains__(self, name: object) -> bool:
        return name in self._builtins

    def names(self) -> list[str]:
        return sorted(self._builtins)


BUILTINS = BuiltinRegistry()


@BUILTINS.command("rm", description="Delete every file matching the glob patterns")
def rm(context: "ExecutionContext", args: tuple[str, ...]) -> None:
    try:
        for pattern in args:
            for match in sorted(glob.glob(pattern, root_dir=context.cwd, include_hidden=True)):
                logger.debug("removing %s", match)
                context.remove(context.resolve(match))
    except OSError as exc:
        raise ExecutionError(f"rm {' '.join(args)}: {exc}", command=f"rm {' '.join(args)}") from exc


@BUILTINS.command("cp", description="Copy a file to a destination")
def cp(context: "ExecutionContext", args: tuple[str, ...]) -> None:
    if len(args) != 2:
        raise ExecutionError(
            f"cp: expected a source and destination, got {list(args)!r}",
            command=" ".join(("cp", *args)),
        )
    source, dest = args
    try:
        context.copy(context.resolve(source), context.resolve(dest))
    except OSError as exc:
        raise ExecutionError(f"cp {source} {dest}: {exc}", command=f"cp {source} {dest}") from exc


def remove_file(path: str) -> None:
    os.remove(path)


def copy_file(source: str, dest: str) -> None:
    shutil.copy(source, dest)


__all__ = ["BUILTINS", "BuiltinRegistry", "BuiltinSpec", "Builtin", "copy_file", "remove_file"]
