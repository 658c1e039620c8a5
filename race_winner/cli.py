"""Console entry point: find the winners in a results file.

Registered as the ``race-winner`` console script. Reads the file line by
line, runs the pipeline and prints the winners (or why there are none).
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Sequence

from .config import RaceScheme, get_settings, parse_legs
from .pipeline import evaluate
from .records import format_duration
from .sources import (
    NO_QUALIFIED_WINNERS,
    NO_VALID_ENTRIES,
    dumps,
    outcome_to_payload,
    read_lines,
)
from .standings import NoQualifiedWinners, NoValidEntries, WinnerOutcome

logger = logging.getLogger(__name__)


def _build_parser(default_path: str, default_level: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="race-winner",
        description="Find the overall winner(s) of a multi-leg race from a results file.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=default_path,
        help=f"Results file, one 'name, id, start, finish, race' row per line (default: {default_path}).",
    )
    parser.add_argument(
        "--races",
        default=None,
        help="Comma-separated list of required legs, overriding the configured legs.",
    )
    parser.add_argument(
        "--log-level",
        default=default_level,
        help=f"Logging level (default: {default_level}).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON instead of text.",
    )
    return parser


def format_outcome(outcome: WinnerOutcome) -> str:
    if isinstance(outcome, NoValidEntries):
        return NO_VALID_ENTRIES
    if isinstance(outcome, NoQualifiedWinners):
        return NO_QUALIFIED_WINNERS
    return "\n".join(
        f" - The winner is: {w.id} - {w.name} - {format_duration(w.total_time)} - "
        for w in outcome.winners
    )


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    args = _build_parser(settings.results_path, settings.log_level).parse_args(argv)
    logging.basicConfig(level=str(args.log_level).upper())

    scheme = RaceScheme(legs=parse_legs(args.races)) if args.races else settings.scheme()

    started = time.perf_counter()
    report = evaluate(read_lines(args.path), scheme)
    if args.json:
        print(dumps(outcome_to_payload(report.outcome, scheme)))
    else:
        print(format_outcome(report.outcome))
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Execution Time: {elapsed_ms:.0f} ms")

    if report.imported.source_error and not report.imported.records:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
