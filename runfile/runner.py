"""Drives parsed items through the executor."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .config import Config
from .environment import Environment
from .exceptions import ExecutionError, ScriptNotFound
from .parser import Comment, Item, ItemParser, Pipeline
from .pipeline import ExecutionContext, PipelineExecutor

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".run"


def resolve_script(name: str) -> Path:
    """Return the script path for ``name``, adding the ``.run`` suffix if absent."""
    if not name.endswith(SCRIPT_SUFFIX):
        name = f"{name}{SCRIPT_SUFFIX}"
    path = Path(name)
    if not path.is_file():
        raise ScriptNotFound(f"Script not found: {path}")
    return path


class ScriptRunner:
    """Parses a script up front, then runs its items in order."""

    def __init__(
        self,
        config: Config | None = None,
        *,
        context: ExecutionContext | None = None,
    ) -> None:
        self.config = config or Config()
        self.context = context or ExecutionContext()
        self.executor = PipelineExecutor(self.context, strict=self.config.strict)

    @property
    def output(self) -> TextIO:
        return self.context.output

    def parse(self, text: str, env: Environment | None = None) -> list[Item]:
        items = ItemParser(env or Environment()).parse(text)
        logger.debug("parsed %d items", len(items))
        return items

    def run(self, text: str, env: Environment | None = None) -> bool:
        """Parse and run ``text``; returns ``False`` if a fatal pipeline failed.

        Parse errors propagate before anything runs.
        """

        return self.run_items(self.parse(text, env))

    def run_items(self, items: Iterable[Item]) -> bool:
        for item in items:
            if isinstance(item, Comment):
                self._echo(item.text)
                continue
            if self.config.dry_run:
                self._preview(item)
                continue
            try:
                self.executor.execute(item)
            except ExecutionError as exc:
                if not item.ignore_failure:
                    logger.error("%s", exc)
                    logger.error("Stopping execution due to failure")
                    return False
                logger.warning("%s (ignored)", exc)
        return True

    def _preview(self, pipeline: Pipeline) -> None:
        self._echo(pipeline.literal)
        if pipeline.terminus is not None:
            self._echo(f"  => {pipeline.terminus}")

    def _echo(self, text: str) -> None:
        self.output.write(f"{text}\n")
        self.output.flush()


__all__ = ["ScriptRunner", "resolve_script", "SCRIPT_SUFFIX"]
