"""Line, pipeline and argument parser for run scripts.

Parsing is line-wise, then semicolon-wise, then pipe-wise::

    command arg | command arg > out.txt ; - final_command $(1)
    ^---------------------------------^   ^------------------^
                 pipeline                 pipeline (failure ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .environment import Environment
from .exceptions import ParseError
from .words import SplitWords

COMMENT_PREFIX = "//"
IGNORE_FAILURE_PREFIX = "- "
PIPE = " | "
REDIRECT = " > "

_REFERENCE_RE = re.compile(r"\$\(([^)]*)\)")


@dataclass(frozen=True)
class Cmd:
    name: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        return " ".join((self.name, *self.args))


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Pipeline:
    cmds: tuple[Cmd, ...]
    literal: str
    terminus: str | None = None
    ignore_failure: bool = False


Item = Comment | Pipeline


@dataclass
class ItemParser:
    """Turns script text into items, substituting from ``env``."""

    env: Environment = field(default_factory=Environment)

    def parse(self, text: str) -> list[Item]:
        """Parse the whole script, stopping at the first error."""
        items: list[Item] = []
        for line in filter(None, (raw.strip() for raw in text.splitlines())):
            if line.startswith(COMMENT_PREFIX):
                items.append(Comment(line))
                continue
            items.extend(self.parse_pipeline(fragment) for fragment in line.split(";"))
        return items

    def parse_pipeline(self, fragment: str) -> Pipeline:
        literal = fragment.strip()
        body = literal
        ignore_failure = body.startswith(IGNORE_FAILURE_PREFIX)
        if ignore_failure:
            body = body[len(IGNORE_FAILURE_PREFIX) :]
        if not body.strip():
            raise ParseError(f"empty pipeline: {fragment!r}")

        segments = body.split(PIPE)
        segments[-1], terminus = _split_terminus(segments[-1])
        cmds = tuple(self.parse_command(segment) for segment in segments)
        return Pipeline(
            cmds=cmds,
            literal=literal,
            terminus=terminus,
            ignore_failure=ignore_failure,
        )

    def parse_command(self, segment: str) -> Cmd:
        words = SplitWords(segment)
        name = next(words, None)
        if name is None:
            raise ParseError(f"empty command: {segment!r}")
        return Cmd(name=name, args=tuple(self.substitute(arg) for arg in words))

    def substitute(self, arg: str) -> str:
        """Replace the first ``$(ident)`` in ``arg`` with its value."""
        if "$" not in arg:
            return arg
        match = _REFERENCE_RE.search(arg)
        if match is None:
            return arg
        ident = match.group(1)
        value = self.env.lookup(ident)
        if value is None:
            raise ParseError(f"no value specified for argument: {ident}")
        return f"{arg[: match.start()]}{value}{arg[match.end() :]}"


def _split_terminus(segment: str) -> tuple[str, str | None]:
    if REDIRECT not in segment:
        return segment, None
    command, terminus = segment.split(REDIRECT, 1)
    if REDIRECT in terminus:
        raise ParseError(f"multiple redirections: {segment.strip()!r}")
    terminus = terminus.strip()
    if not terminus:
        raise ParseError(f"missing redirection target: {segment.strip()!r}")
    return command, terminus


__all__ = ["Cmd", "Comment", "Pipeline", "Item", "ItemParser"]
