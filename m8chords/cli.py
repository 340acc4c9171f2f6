from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback
from typing import IO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.traceback import Traceback

from .chords import CHORD_CATALOG
from .config import GeneratorConfig
from .emitter import generate
from .logging_utils import configure_logging, get_log_path, log_exception

_LOGGER = logging.getLogger("m8chords.cli")
_DEBUG_ENV = "M8CHORDS_DEBUG"
_CONSOLE = Console()


def render_error(context: str, exc: BaseException, *, stream: IO[str] | None = None) -> None:
    target = stream or sys.stderr
    debug = os.environ.get(_DEBUG_ENV)
    log_path = get_log_path()
    if target.isatty():
        console = Console(file=target)
        body = Text.assemble(
            (f"{context}:\n\n", "bold"),
            Text(type(exc).__name__, style="bold red"),
            (": ", "bold"),
            Text(str(exc)),
            (f"\nLogs: {log_path}", "dim"),
            (f"\n\nSet {_DEBUG_ENV}=1 for console trace.", "dim"),
        )
        console.print(Panel(body, title="Error", border_style="red"))
        if debug:
            console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))
    else:
        target.write(f"{context} failed: {type(exc).__name__}: {exc} (logs: {log_path})\n")
        if debug:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=target)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="m8chords")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Write FM and HyperSynth chord presets.")
    gen.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output root folder (default: $M8CHORDS_OUTPUT_DIR or FM_CHORDS).",
    )

    sub.add_parser("list", help="Show the chord catalog.")
    return parser


def _catalog_table() -> Table:
    table = Table(title="Chord catalog")
    table.add_column("Chord")
    table.add_column("Offsets")
    table.add_column("Voices", justify="right")
    for chord in CHORD_CATALOG:
        table.add_row(chord.name, " ".join(str(o) for o in chord.offsets), str(len(chord)))
    return table


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.command == "generate":
            config = GeneratorConfig.resolve(args.output)
            results = generate(config.output_root, version=config.version)
            summary = Table(title=f"Presets written to {config.output_root}")
            summary.add_column("Chord")
            summary.add_column("Voices", justify="right")
            summary.add_column("Files", justify="right")
            for result in results:
                summary.add_row(result.chord.name, str(len(result.chord)), str(len(result.files)))
            _CONSOLE.print(summary)
            return 0

        if args.command == "list":
            _CONSOLE.print(_catalog_table())
            return 0

        parser.print_help()
        return 1
    except Exception as exc:
        debug = bool(os.environ.get(_DEBUG_ENV))
        _LOGGER.warning("m8chords CLI failed: %s", exc, exc_info=debug)
        log_exception("m8chords CLI", exc)
        render_error("m8chords CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
