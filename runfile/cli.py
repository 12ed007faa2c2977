"""Command-line interface for runfile."""

from __future__ import annotations

import argparse
import logging

from .config import Config
from .environment import Environment
from .exceptions import ArgumentError, ParseError, ScriptNotFound
from .runner import ScriptRunner, resolve_script

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2
EXIT_NO_SCRIPT = 100


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runfile",
        description="Run the command pipelines listed in a .run script.",
    )
    parser.add_argument(
        "--dry-run",
        "--dry",
        dest="dry_run",
        action="store_true",
        help="Print each pipeline instead of running it.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat a nonzero exit status of a pipeline's last command as a failure.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("script", help="Script to run; '.run' is appended if missing.")
    parser.add_argument(
        "arguments",
        nargs=argparse.REMAINDER,
        help="Values for $(name) (given as -name value) and $(N) references.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    config = Config(dry_run=args.dry_run, strict=args.strict, verbose=args.verbose)
    remaining = config.consume_flags(list(args.arguments))
    _configure_logging(config.verbose)
    logger.debug("%s", config)

    try:
        script = resolve_script(args.script)
        env = Environment.from_argv(remaining)
        logger.debug("%s", env)
        text = script.read_text(encoding="utf-8")
        ok = ScriptRunner(config).run(text, env)
    except ScriptNotFound as exc:
        logger.error("%s", exc)
        raise SystemExit(EXIT_NO_SCRIPT) from exc
    except ArgumentError as exc:
        logger.error("parsing environment: %s", exc)
        raise SystemExit(EXIT_INVALID) from exc
    except ParseError as exc:
        logger.error("parsing commands: %s", exc)
        raise SystemExit(EXIT_INVALID) from exc
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("reading script: %s", exc)
        raise SystemExit(EXIT_FAILED) from exc
    raise SystemExit(EXIT_OK if ok else EXIT_FAILED)


__all__ = ["main"]
