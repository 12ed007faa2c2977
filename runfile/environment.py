"""Named and positional values substituted into script arguments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .exceptions import ArgumentError
from .words import SplitWords


@dataclass(frozen=True)
class Environment:
    """Values available to ``$(name)`` and ``$(N)`` references."""

    named: Mapping[str, str] = field(default_factory=dict)
    positional: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "named", MappingProxyType(dict(self.named)))
        object.__setattr__(self, "positional", tuple(self.positional))

    @classmethod
    def parse(cls, text: str) -> "Environment":
        """Build an environment from a string of quoted arguments.

        ``-Name value`` pairs become named entries, anything else is
        positional. A flag followed by another flag is an error; a flag at
        the very end with nothing after it is dropped.
        """

        named: dict[str, str] = {}
        positional: list[str] = []
        words = SplitWords(text)
        for word in words:
            if not word.startswith("-"):
                positional.append(word)
                continue
            name = word.strip("-")
            value = next(words, None)
            if value is None:
                break
            if value.startswith("-"):
                raise ArgumentError(f"{word} is missing a value")
            named[name] = value
        return cls(named=named, positional=tuple(positional))

    @classmethod
    def from_argv(cls, argv: Iterable[str]) -> "Environment":
        """Quote each raw argument so embedded whitespace survives splitting."""
        return cls.parse("".join(f'"{arg}" ' for arg in argv))

    def lookup(self, ident: str) -> str | None:
        """Resolve ``ident`` as a 1-based position or a name."""
        if ident.isascii() and ident.isdigit() and int(ident) > 0:
            index = int(ident) - 1
            if index < len(self.positional):
                return self.positional[index]
            return None
        return self.named.get(ident)


__all__ = ["Environment"]
