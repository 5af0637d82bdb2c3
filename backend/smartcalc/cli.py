"""
Command line entry point.

Runs an interactive session on stdin, or evaluates lines given with ``-c``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import yaml
from pydantic import ValidationError

from . import __version__
from .calculator import Calculator
from .config import load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartcalc",
        description="Integer calculator with variables",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file",
    )
    parser.add_argument(
        "-c",
        "--command",
        dest="commands",
        action="append",
        default=None,
        metavar="LINE",
        help="Execute LINE instead of reading stdin (repeatable)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_session(calculator: Calculator, stream: TextIO, out: TextIO) -> None:
    """Read lines until /exit or end of input."""
    prompt = calculator.config.prompt
    while True:
        if prompt:
            out.write(prompt)
            out.flush()
        line = stream.readline()
        if not line:
            break
        response = calculator.execute(line)
        if response.output is not None:
            print(response.output, file=out)
        if response.exit:
            break


def run_commands(calculator: Calculator, commands: List[str], out: TextIO) -> int:
    """Execute lines in one session; return 1 if the last line failed."""
    status = 0
    for command in commands:
        response = calculator.execute(command)
        if response.output is not None:
            print(response.output, file=out)
        status = 0 if response.ok else 1
        if response.exit:
            break
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    calculator = Calculator(config)
    if args.commands:
        return run_commands(calculator, args.commands, sys.stdout)

    logger.debug("Starting interactive session")
    run_session(calculator, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
