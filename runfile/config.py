"""Runtime options for a script run."""

from __future__ import annotations

from dataclasses import dataclass

DRY_RUN_FLAGS = frozenset({"--dry-run", "--dry"})


@dataclass
class Config:
    dry_run: bool = False
    strict: bool = False
    verbose: bool = False

    def consume_flags(self, args: list[str]) -> list[str]:
        """Apply leading dry-run flags in ``args`` and return the rest.

        Only the dry-run switch is accepted after the script name. Anything
        else, ``-v`` and ``--strict`` included, is left for the script
        arguments, since any dash token there names a value.
        """

        for index, arg in enumerate(args):
            if arg in DRY_RUN_FLAGS:
                self.dry_run = True
            else:
                return args[index:]
        return []


__all__ = ["Config"]
