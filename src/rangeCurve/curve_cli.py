"""
Command line front end: load a sampled curve and print min/max over x-intervals.

Usage:
    range-curve samples.csv --interval 0.5 1.5 --interval 2 10
    range-curve samples.json --json

Without ``--interval`` the whole sampled domain is queried.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from .config import OutputSettings
from .config import SampleFormat
from .config import configure_logging
from .config import get_settings
from .curve import CurveContractError
from .curve import RangeCurve
from .models import DomainInterval
from .models import QueryResult
from .sample_source import SampleFormatError
from .sample_source import open_sample_source

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="range-curve",
        description="Min/max of a sampled curve (with gaps) over x-intervals.",
    )
    parser.add_argument("samples", type=Path, help="CSV or JSON sample file")
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in SampleFormat],
        default=None,
        help="Sample file format (default: from settings or file suffix)",
    )
    parser.add_argument(
        "--interval",
        nargs=2,
        type=float,
        action="append",
        metavar=("XMIN", "XMAX"),
        default=None,
        help="Closed x-interval to query; may be repeated (default: whole domain)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print one JSON object per query instead of text"
    )
    return parser


def run_queries(curve: RangeCurve, intervals: Iterable[DomainInterval]) -> list[QueryResult]:
    """Query the curve once per interval."""
    results = []
    for interval in intervals:
        min_max = curve.get_min_max_over_domain_interval(interval.xmin, interval.xmax)
        logger.debug("Query [%s, %s] -> %s", interval.xmin, interval.xmax, min_max)
        results.append(QueryResult.from_min_max(interval, min_max))
    return results


def format_result(result: QueryResult, output: OutputSettings) -> str:
    """Render a result as ``xmin xmax min max`` or ``xmin xmax <empty marker>``."""
    bounds = f"{output.format_number(result.xmin)} {output.format_number(result.xmax)}"
    if result.is_empty:
        return f"{bounds} {output.empty_marker}"
    return f"{bounds} {output.format_number(result.min)} {output.format_number(result.max)}"


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    app_settings = get_settings()
    configure_logging(app_settings.logging)

    loader_settings = app_settings.loader
    if args.format is not None:
        loader_settings = loader_settings.model_copy(update={"format": SampleFormat(args.format)})

    try:
        samples = open_sample_source(args.samples, loader_settings).load()
        curve = samples.to_curve()
        if args.interval:
            intervals = [DomainInterval(xmin=lo, xmax=hi) for lo, hi in args.interval]
        else:
            xmin, xmax = curve.domain
            intervals = [DomainInterval(xmin=xmin, xmax=xmax)]
    except (OSError, SampleFormatError, ValidationError, CurveContractError) as exc:
        logger.error("Invalid input: %s", exc)
        print(f"range-curve: error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    for result in run_queries(curve, intervals):
        if args.json:
            print(result.model_dump_json())
        else:
            print(format_result(result, app_settings.output))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
