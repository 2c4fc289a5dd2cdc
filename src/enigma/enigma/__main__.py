"""Command-line entry point.

Usage::

    python -m enigma [--verbose] [--debug] CONFIG [INPUT [OUTPUT]]

CONFIG is a machine configuration file, or ``-`` for the built-in naval
rotor set. INPUT defaults to standard input and OUTPUT to standard output.
Exits with status 1 after printing a single ``Error:`` line on any
configuration or message error.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from typing import Optional, Sequence, TextIO

from enigma.config import MachineConfig, default_config, load_config_file
from enigma.core.errors import EnigmaError
from enigma.messages import process_messages
from enigma.trace import TracePrinter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enigma",
        description="Encrypt and decrypt messages with a simulated rotor machine.",
    )
    parser.add_argument("config", help="machine configuration file ('-' for the built-in rotor set)")
    parser.add_argument("input", nargs="?", help="message file (default: standard input)")
    parser.add_argument("output", nargs="?", help="output file (default: standard output)")
    parser.add_argument(
        "--verbose", action="store_true", help="trace rotor positions and signal path on stderr"
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def _load(path: str) -> MachineConfig:
    if path == "-":
        return default_config()
    return load_config_file(path)


def run(
    config: MachineConfig,
    source: TextIO,
    sink: TextIO,
    verbose: bool = False,
) -> None:
    """Convert every message of SOURCE and write the results to SINK."""
    trace = TracePrinter(config.alphabet) if verbose else None
    for line in process_messages(config, source, trace):
        print(line, file=sink)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("enigma args: %s", args)

    try:
        config = _load(args.config)
        with contextlib.ExitStack() as stack:
            source = stack.enter_context(open(args.input)) if args.input else sys.stdin
            sink = stack.enter_context(open(args.output, "w")) if args.output else sys.stdout
            run(config, source, sink, verbose=args.verbose)
    except (EnigmaError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
