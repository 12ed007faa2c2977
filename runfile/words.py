"""Whitespace and quote aware word splitting."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

_QUOTE = '"'
_ESCAPE = "\\"


class SplitWords:
    """Lazily split a character stream into words.

    A word is a run of non-whitespace characters, or the contents of a
    double-quoted span. Inside a span the two characters ``\\"`` are kept
    as-is and do not close the span. A closing quote ends the word at once,
    so text following it on the same line starts a new word.
    """

    def __init__(self, src: Iterable[str]) -> None:
        self._src = iter(src)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        word: list[str] = []
        for char in self._src:
            if char == _QUOTE:
                return self._quoted(word)
            if char == _ESCAPE:
                word.append(char)
                following = next(self._src, None)
                if following is None:
                    break
                if following == _QUOTE:
                    word.append(following)
                    continue
                char = following
            if char.isspace():
                if word:
                    return "".join(word)
                continue
            word.append(char)
        if word:
            return "".join(word)
        raise StopIteration

    def _quoted(self, word: list[str]) -> str:
        escaped = False
        for char in self._src:
            if char == _QUOTE and not escaped:
                return "".join(word)
            word.append(char)
            escaped = char == _ESCAPE and not escaped
        logger.warning("unterminated quote, keeping %r", "".join(word))
        return "".join(word)


def split_words(text: str) -> list[str]:
    return list(SplitWords(text))


__all__ = ["SplitWords", "split_words"]
