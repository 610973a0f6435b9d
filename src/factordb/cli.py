"""CLI entry point — ``factordb <number> [<number> ...]``."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from pydantic import ValidationError

from factordb import __version__
from factordb.client import FactorDbBlockingClient
from factordb.config import Settings
from factordb.constants import DisplayMode
from factordb.decoding import format_decimal
from factordb.errors import FactorDbError
from factordb.logging_config import setup_logging

PROG = "factordb"


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"{PROG} {__version__}")
        return

    if not args.numbers:
        parser.error("at least one number is required")

    try:
        settings = Settings()
    except ValidationError as exc:
        _print_error(f"invalid configuration: {exc}")

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    with FactorDbBlockingClient(settings) as client:
        try:
            _run(client, args.numbers, args.mode, show_status=args.status)
        except FactorDbError as exc:
            _print_error(exc)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Finds the factors of a number using FactorDB "
            "(http://factordb.com/)"
        ),
    )
    parser.add_argument(
        "numbers",
        nargs="*",
        metavar="NUMBER",
        help="Number(s) to look up",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--print-factors",
        dest="mode",
        action="store_const",
        const=DisplayMode.FACTORS,
        help="Print all factors (including repeating ones) on each line",
    )
    mode.add_argument(
        "--print-unique-factors",
        dest="mode",
        action="store_const",
        const=DisplayMode.UNIQUE_FACTORS,
        help="Print unique factors on each line",
    )
    mode.add_argument(
        "--json",
        dest="mode",
        action="store_const",
        const=DisplayMode.JSON,
        help="Print JSON output of the FactorDB API",
    )
    parser.set_defaults(mode=DisplayMode.FULL)

    parser.add_argument(
        "--status",
        action="store_true",
        help="Append the number's FactorDB status to the default output",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    return parser


def _run(
    client: FactorDbBlockingClient,
    numbers: list[str],
    mode: DisplayMode,
    *,
    show_status: bool = False,
) -> None:
    """Query each number in order and print it in the chosen mode."""
    for number in numbers:
        if mode == DisplayMode.JSON:
            print(client.get_json(number))
            continue

        result = client.get(number)
        if mode == DisplayMode.FACTORS:
            for factor in result.flattened_factors():
                print(format_decimal(factor))
        elif mode == DisplayMode.UNIQUE_FACTORS:
            for factor in result.unique_factors():
                print(format_decimal(factor))
        elif show_status:
            print(f"{number} = {result} ({result.status.description})")
        else:
            print(f"{number} = {result}")


def _print_error(msg: object) -> NoReturn:
    print(f"error: {PROG}: {msg}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
