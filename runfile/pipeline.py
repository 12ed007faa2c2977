"""Executes parsed pipelines as chains of OS processes."""

from __future__ import annotations

import enum
import logging
import os
import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TextIO

from .builtins import BUILTINS, BuiltinRegistry, copy_file, remove_file
from .exceptions import ExecutionError
from .parser import Cmd, Pipeline

logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    """Process-wide state a pipeline runs against.

    ``stdin``/``stdout`` of ``None`` mean the interpreter's own streams are
    inherited by the first and last stages.
    """

    cwd: Path = field(default_factory=Path.cwd)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    stdin: IO[bytes] | int | None = None
    stdout: IO[bytes] | int | None = None
    remove: Callable[[str], None] = remove_file
    copy: Callable[[str, str], None] = copy_file

    def resolve(self, path: str) -> str:
        return os.path.join(self.cwd, path)


class InputSource(enum.Enum):
    INHERITED = "inherited"
    PREVIOUS_STAGE = "previous-stage"


class PipelineExecutor:
    """Runs one pipeline at a time, echoing each command before acting on it."""

    def __init__(
        self,
        context: ExecutionContext | None = None,
        *,
        builtins: BuiltinRegistry = BUILTINS,
        strict: bool = False,
    ) -> None:
        self.context = context or ExecutionContext()
        self.builtins = builtins
        self.strict = strict

    def execute(self, pipeline: Pipeline) -> None:
        """Run ``pipeline``; raises :class:`ExecutionError` on the first failure.

        Stages run concurrently, connected by pipes. Only the last spawned
        process is waited on, and its exit status is ignored unless the
        executor is strict.
        """

        previous: subprocess.Popen[bytes] | None = None
        source = InputSource.INHERITED
        last_index = len(pipeline.cmds) - 1
        for index, cmd in enumerate(pipeline.cmds):
            self.context.output.write(f"{cmd}\n")
            self.context.output.flush()

            handler = self.builtins.get(cmd.name)
            if handler is not None:
                handler(self.context, cmd.args)
                continue

            terminus = pipeline.terminus if index == last_index else None
            previous = self._spawn(cmd, source, previous, has_next=index < last_index, terminus=terminus)
            source = InputSource.PREVIOUS_STAGE

        if previous is not None:
            self._finish(previous, pipeline)

    def _spawn(
        self,
        cmd: Cmd,
        source: InputSource,
        previous: subprocess.Popen[bytes] | None,
        *,
        has_next: bool,
        terminus: str | None,
    ) -> subprocess.Popen[bytes]:
        if source is InputSource.PREVIOUS_STAGE and previous is not None:
            stdin = previous.stdout
        else:
            stdin = self.context.stdin

        sink: IO[bytes] | None = None
        if has_next:
            stdout = subprocess.PIPE
        elif terminus is not None:
            try:
                sink = open(self.context.resolve(terminus), "wb")
            except OSError as exc:
                raise ExecutionError(f"opening terminus file: {exc}", command=str(cmd)) from exc
            stdout = sink
        else:
            stdout = self.context.stdout

        logger.debug("spawning %s %s in %s", cmd.name, list(cmd.args), self.context.cwd)
        try:
            process = subprocess.Popen(
                [cmd.name, *cmd.args],
                cwd=self.context.cwd,
                stdin=stdin,
                stdout=stdout,
            )
        except (OSError, ValueError) as exc:
            # ValueError: arguments Popen cannot pass, such as embedded NUL bytes.
            reason = getattr(exc, "strerror", None) or exc
            raise ExecutionError(f"{cmd.name}: {reason}", command=str(cmd)) from exc
        finally:
            if sink is not None:
                sink.close()
            # The child owns the read end now; closing ours lets the writer see SIGPIPE.
            if stdin is not None and stdin is not self.context.stdin:
                stdin.close()
        return process

    def _finish(self, process: subprocess.Popen[bytes], pipeline: Pipeline) -> None:
        # A pipe nobody will read, left when a built-in ends the pipeline.
        if process.stdout is not None:
            process.stdout.close()
        returncode = process.wait()
        logger.debug("%s exited with %s", process.args[0], returncode)
        if self.strict and returncode != 0:
            raise ExecutionError(
                f"{pipeline.literal}: exited with status {returncode}",
                command=pipeline.literal,
            )


__all__ = ["ExecutionContext", "InputSource", "PipelineExecutor"]
